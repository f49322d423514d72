# coding: utf-8

from typing import Dict, List, Any  # noqa: F401
import importlib
import pkgutil

from gateway_api.apis.credentials_api_base import BaseCredentialsApi
import gateway_api.impl

from fastapi import (  # noqa: F401
    APIRouter,
    Body,
    Cookie,
    Depends,
    Form,
    Header,
    HTTPException,
    Path,
    Query,
    Response,
    Security,
    status,
)

from gateway_api.models.extra_models import TokenModel  # noqa: F401
from pydantic import StrictStr
from typing import Optional
from gateway_api.models.credential_create_request import CredentialCreateRequest
from gateway_api.models.credential_summary import CredentialSummary
from gateway_api.models.error import Error
from gateway_api.security_api import get_token_bearerAuth

router = APIRouter()

ns_pkg = gateway_api.impl
for _, name, _ in pkgutil.iter_modules(ns_pkg.__path__, ns_pkg.__name__ + "."):
    importlib.import_module(name)


@router.get(
    "/api/v1/credential-summaries",
    responses={
        200: {"model": List[CredentialSummary], "description": "OK"},
    },
    tags=["Credentials"],
    summary="List credential summaries",
    response_model_by_alias=True,
)
async def list_credential_summaries(
    gateway_id: StrictStr = Query(..., description="", alias="gatewayId"),
    owner_id: Optional[StrictStr] = Query(None, description="", alias="ownerId"),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth
    ),
) -> List[CredentialSummary]:
    if not BaseCredentialsApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseCredentialsApi.subclasses[0]().list_credential_summaries(gateway_id, owner_id)


@router.post(
    "/api/v1/credential-summaries",
    responses={
        201: {"model": CredentialSummary, "description": "Created"},
        400: {"model": Error, "description": "Invalid input"},
    },
    tags=["Credentials"],
    summary="Store a credential",
    status_code=status.HTTP_201_CREATED,
    response_model_by_alias=True,
)
async def create_credential(
    credential_create_request: CredentialCreateRequest = Body(None, description=""),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth
    ),
) -> CredentialSummary:
    if not BaseCredentialsApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseCredentialsApi.subclasses[0]().create_credential(credential_create_request)


@router.get(
    "/api/v1/credential-summaries/{token}",
    responses={
        200: {"model": CredentialSummary, "description": "OK"},
        404: {"model": Error, "description": "Resource not found"},
    },
    tags=["Credentials"],
    summary="Get a credential summary",
    response_model_by_alias=True,
)
async def get_credential_summary(
    token: StrictStr = Path(..., description=""),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth
    ),
) -> CredentialSummary:
    if not BaseCredentialsApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseCredentialsApi.subclasses[0]().get_credential_summary(token)


@router.delete(
    "/api/v1/credentials/{token}",
    responses={
        204: {"description": "Deleted"},
        404: {"model": Error, "description": "Resource not found"},
        409: {"model": Error, "description": "Credential still referenced by access grants"},
    },
    tags=["Credentials"],
    summary="Delete a credential",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model_by_alias=True,
)
async def delete_credential(
    token: StrictStr = Path(..., description=""),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth
    ),
) -> Response:
    if not BaseCredentialsApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    await BaseCredentialsApi.subclasses[0]().delete_credential(token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
