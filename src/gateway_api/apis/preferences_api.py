# coding: utf-8

from typing import Dict, List, Any  # noqa: F401
import importlib
import pkgutil

from gateway_api.apis.preferences_api_base import BasePreferencesApi
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
from gateway_api.models.error import Error
from gateway_api.models.group_selection_request import GroupSelectionRequest
from gateway_api.models.resolved_preferences_result import ResolvedPreferencesResult
from gateway_api.models.set_preference_request import SetPreferenceRequest
from gateway_api.security_api import get_token_bearerAuth

router = APIRouter()

ns_pkg = gateway_api.impl
for _, name, _ in pkgutil.iter_modules(ns_pkg.__path__, ns_pkg.__name__ + "."):
    importlib.import_module(name)


@router.get(
    "/api/v1/preferences/resolve",
    responses={
        200: {"model": ResolvedPreferencesResult, "description": "Effective preferences"},
        400: {"model": Error, "description": "Invalid input"},
    },
    tags=["Preferences"],
    summary="Resolve effective preferences for a user",
    response_model_by_alias=True,
)
async def resolve_preferences(
    resource_type: PreferenceResourceType = Query(..., description="", alias="resourceType"),
    resource_id: StrictStr = Query(..., description="", alias="resourceId"),
    gateway_id: StrictStr = Query(..., description="", alias="gatewayId"),
    user_id: Optional[StrictStr] = Query(None, description="", alias="userId"),
    group_ids: Optional[StrictStr] = Query(None, description="Comma-separated group ids, in precedence order.", alias="groupIds"),
    with_conflicts: Optional[bool] = Query(False, description="", alias="withConflicts"),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth
    ),
) -> Any:
    if not BasePreferencesApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BasePreferencesApi.subclasses[0]().resolve_preferences(
        resource_type, resource_id, gateway_id, user_id, group_ids, with_conflicts
    )


@router.post(
    "/api/v1/preferences/selection",
    responses={
        204: {"description": "Saved"},
        400: {"model": Error, "description": "Invalid input"},
    },
    tags=["Preferences"],
    summary="Pick the group whose value applies to a conflicting key",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model_by_alias=True,
)
async def set_group_selection(
    gateway_id: StrictStr = Query(..., description="", alias="gatewayId"),
    group_selection_request: GroupSelectionRequest = Body(..., description=""),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth
    ),
) -> Response:
    if not BasePreferencesApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    await BasePreferencesApi.subclasses[0]().set_group_selection(gateway_id, group_selection_request)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/api/v1/preferences/{resourceType}/{resourceId}",
    responses={
        200: {"description": "Preferences stored at exactly one level"},
        400: {"model": Error, "description": "Invalid input"},
    },
    tags=["Preferences"],
    summary="List preferences at one level",
    response_model_by_alias=True,
)
async def get_preferences(
    resourceType: PreferenceResourceType = Path(..., description=""),
    resourceId: StrictStr = Path(..., description=""),
    level: PreferenceLevel = Query(..., description=""),
    owner_id: StrictStr = Query(..., description="", alias="ownerId"),
    detailed: Optional[bool] = Query(False, description="Include enforcement flags.", alias="detailed"),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth
    ),
) -> Any:
    if not BasePreferencesApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BasePreferencesApi.subclasses[0]().get_preferences(resourceType, resourceId, level, owner_id, detailed)


@router.post(
    "/api/v1/preferences",
    responses={
        204: {"description": "Saved"},
        400: {"model": Error, "description": "Invalid input"},
    },
    tags=["Preferences"],
    summary="Set one preference",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model_by_alias=True,
)
async def set_preference(
    set_preference_request: SetPreferenceRequest = Body(..., description=""),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth
    ),
) -> Response:
    if not BasePreferencesApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    await BasePreferencesApi.subclasses[0]().set_preference(set_preference_request)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/api/v1/preferences/{resourceType}/{resourceId}/all",
    responses={
        204: {"description": "Deleted"},
    },
    tags=["Preferences"],
    summary="Delete every preference at one level",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model_by_alias=True,
)
async def delete_all_preferences(
    resourceType: PreferenceResourceType = Path(..., description=""),
    resourceId: StrictStr = Path(..., description=""),
    level: PreferenceLevel = Query(..., description=""),
    owner_id: StrictStr = Query(..., description="", alias="ownerId"),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth
    ),
) -> Response:
    if not BasePreferencesApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    await BasePreferencesApi.subclasses[0]().delete_all_preferences(resourceType, resourceId, level, owner_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/api/v1/preferences/{resourceType}/{resourceId}",
    responses={
        204: {"description": "Deleted"},
    },
    tags=["Preferences"],
    summary="Delete one preference",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model_by_alias=True,
)
async def delete_preference(
    resourceType: PreferenceResourceType = Path(..., description=""),
    resourceId: StrictStr = Path(..., description=""),
    level: PreferenceLevel = Query(..., description=""),
    owner_id: StrictStr = Query(..., description="", alias="ownerId"),
    key: StrictStr = Query(..., description=""),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth
    ),
) -> Response:
    if not BasePreferencesApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    await BasePreferencesApi.subclasses[0]().delete_preference(resourceType, resourceId, level, owner_id, key)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
