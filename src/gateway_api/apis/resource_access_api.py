# coding: utf-8

from typing import Dict, List, Any  # noqa: F401
import importlib
import pkgutil

from gateway_api.apis.resource_access_api_base import BaseResourceAccessApi
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
from gateway_api.domain.preferences import PreferenceLevel, PreferenceResourceType
from gateway_api.models.access_control_response import AccessControlResponse
from gateway_api.models.accessible_resources import AccessibleResources
from gateway_api.models.error import Error
from gateway_api.models.resource_access import ResourceAccess
from gateway_api.models.resource_access_create_request import ResourceAccessCreateRequest
from gateway_api.models.resource_access_update_request import ResourceAccessUpdateRequest
from gateway_api.security_api import get_token_bearerAuth

router = APIRouter()

ns_pkg = gateway_api.impl
for _, name, _ in pkgutil.iter_modules(ns_pkg.__path__, ns_pkg.__name__ + "."):
    importlib.import_module(name)


@router.get(
    "/api/v1/resource-access",
    responses={
        200: {"model": List[ResourceAccess], "description": "OK"},
    },
    tags=["ResourceAccess"],
    summary="List access grants on a resource",
    response_model_by_alias=True,
)
async def list_access_grants(
    resource_type: PreferenceResourceType = Query(..., description="", alias="resourceType"),
    resource_id: StrictStr = Query(..., description="", alias="resourceId"),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth
    ),
) -> List[ResourceAccess]:
    if not BaseResourceAccessApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseResourceAccessApi.subclasses[0]().list_access_grants(resource_type, resource_id)


@router.get(
    "/api/v1/resource-access/by-type",
    responses={
        200: {"model": List[ResourceAccess], "description": "OK"},
    },
    tags=["ResourceAccess"],
    summary="List access grants of one resource type in a gateway",
    response_model_by_alias=True,
)
async def list_access_grants_by_type(
    gateway_id: StrictStr = Query(..., description="", alias="gatewayId"),
    resource_type: PreferenceResourceType = Query(..., description="", alias="resourceType"),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth
    ),
) -> List[ResourceAccess]:
    if not BaseResourceAccessApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseResourceAccessApi.subclasses[0]().list_access_grants_by_type(gateway_id, resource_type)


@router.get(
    "/api/v1/resource-access/enabled",
    responses={
        200: {"model": List[ResourceAccess], "description": "OK"},
    },
    tags=["ResourceAccess"],
    summary="List enabled access grants on a resource",
    response_model_by_alias=True,
)
async def list_enabled_access_grants(
    resource_type: PreferenceResourceType = Query(..., description="", alias="resourceType"),
    resource_id: StrictStr = Query(..., description="", alias="resourceId"),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth
    ),
) -> List[ResourceAccess]:
    if not BaseResourceAccessApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseResourceAccessApi.subclasses[0]().list_enabled_access_grants(resource_type, resource_id)


@router.get(
    "/api/v1/resource-access/access-control",
    responses={
        200: {"model": AccessControlResponse, "description": "OK"},
        403: {"model": Error, "description": "Forbidden"},
    },
    tags=["ResourceAccess"],
    summary="Credentials a user owns or inherits",
    response_model_by_alias=True,
)
async def get_access_control(
    gateway_id: StrictStr = Query(..., description="", alias="gatewayId"),
    user_id: Optional[StrictStr] = Query(None, description="Defaults to the caller.", alias="userId"),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth
    ),
) -> AccessControlResponse:
    if not BaseResourceAccessApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseResourceAccessApi.subclasses[0]().get_access_control(gateway_id, user_id)


@router.get(
    "/api/v1/resource-access/owner/{ownerId}",
    responses={
        200: {"model": List[ResourceAccess], "description": "OK"},
    },
    tags=["ResourceAccess"],
    summary="List access grants held by one owner",
    response_model_by_alias=True,
)
async def list_access_grants_by_owner(
    ownerId: StrictStr = Path(..., description=""),
    owner_type: PreferenceLevel = Query(..., description="", alias="ownerType"),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth
    ),
) -> List[ResourceAccess]:
    if not BaseResourceAccessApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseResourceAccessApi.subclasses[0]().list_access_grants_by_owner(ownerId, owner_type)


@router.get(
    "/api/v1/resource-access/user/{userId}",
    responses={
        200: {"model": AccessibleResources, "description": "OK"},
    },
    tags=["ResourceAccess"],
    summary="Resources a user can reach",
    response_model_by_alias=True,
)
async def list_accessible_resources(
    userId: StrictStr = Path(..., description=""),
    gateway_id: StrictStr = Query(..., description="", alias="gatewayId"),
    resource_type: PreferenceResourceType = Query(..., description="", alias="resourceType"),
    group_ids: Optional[StrictStr] = Query(None, description="Comma-separated group ids; defaults to memberships.", alias="groupIds"),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth
    ),
) -> AccessibleResources:
    if not BaseResourceAccessApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseResourceAccessApi.subclasses[0]().list_accessible_resources(
        userId, gateway_id, resource_type, group_ids
    )


@router.post(
    "/api/v1/resource-access",
    responses={
        201: {"model": ResourceAccess, "description": "Created"},
        400: {"model": Error, "description": "Invalid input"},
        409: {"model": Error, "description": "Duplicate grant"},
    },
    tags=["ResourceAccess"],
    summary="Create an access grant",
    status_code=status.HTTP_201_CREATED,
    response_model_by_alias=True,
)
async def create_access_grant(
    resource_access_create_request: ResourceAccessCreateRequest = Body(None, description=""),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth
    ),
) -> ResourceAccess:
    if not BaseResourceAccessApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseResourceAccessApi.subclasses[0]().create_access_grant(resource_access_create_request)


@router.get(
    "/api/v1/resource-access/{accessId}",
    responses={
        200: {"model": ResourceAccess, "description": "OK"},
        404: {"model": Error, "description": "Resource not found"},
    },
    tags=["ResourceAccess"],
    summary="Get an access grant",
    response_model_by_alias=True,
)
async def get_access_grant(
    accessId: int = Path(..., description=""),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth
    ),
) -> ResourceAccess:
    if not BaseResourceAccessApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseResourceAccessApi.subclasses[0]().get_access_grant(accessId)


@router.put(
    "/api/v1/resource-access/{accessId}",
    responses={
        200: {"model": ResourceAccess, "description": "Updated"},
        400: {"model": Error, "description": "Invalid input"},
        404: {"model": Error, "description": "Resource not found"},
        409: {"model": Error, "description": "Duplicate grant"},
    },
    tags=["ResourceAccess"],
    summary="Update an access grant",
    response_model_by_alias=True,
)
async def update_access_grant(
    accessId: int = Path(..., description=""),
    resource_access_update_request: ResourceAccessUpdateRequest = Body(None, description=""),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth
    ),
) -> ResourceAccess:
    if not BaseResourceAccessApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseResourceAccessApi.subclasses[0]().update_access_grant(accessId, resource_access_update_request)


@router.delete(
    "/api/v1/resource-access/{accessId}",
    responses={
        204: {"description": "Deleted"},
        404: {"model": Error, "description": "Resource not found"},
    },
    tags=["ResourceAccess"],
    summary="Delete an access grant",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model_by_alias=True,
)
async def delete_access_grant(
    accessId: int = Path(..., description=""),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth
    ),
) -> Response:
    if not BaseResourceAccessApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    await BaseResourceAccessApi.subclasses[0]().delete_access_grant(accessId)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
