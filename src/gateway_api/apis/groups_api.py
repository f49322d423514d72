# coding: utf-8

from typing import Dict, List, Any  # noqa: F401
import importlib
import pkgutil

from gateway_api.apis.groups_api_base import BaseGroupsApi
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
from gateway_api.models.error import Error
from gateway_api.models.group_list import GroupList
from gateway_api.models.group_member_list import GroupMemberList
from gateway_api.models.group_member_request import GroupMemberRequest
from gateway_api.security_api import get_token_bearerAuth

router = APIRouter()

ns_pkg = gateway_api.impl
for _, name, _ in pkgutil.iter_modules(ns_pkg.__path__, ns_pkg.__name__ + "."):
    importlib.import_module(name)


@router.get(
    "/api/v1/groups",
    responses={
        200: {"model": GroupList, "description": "OK"},
    },
    tags=["Groups"],
    summary="List the groups a user belongs to",
    response_model_by_alias=True,
)
async def list_user_groups(
    gateway_id: StrictStr = Query(..., description="", alias="gatewayId"),
    user_id: Optional[StrictStr] = Query(None, description="Defaults to the caller.", alias="userId"),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth
    ),
) -> GroupList:
    if not BaseGroupsApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseGroupsApi.subclasses[0]().list_user_groups(gateway_id, user_id)


@router.get(
    "/api/v1/groups/{groupId}/members",
    responses={
        200: {"model": GroupMemberList, "description": "OK"},
    },
    tags=["Groups"],
    summary="List group members",
    response_model_by_alias=True,
)
async def list_group_members(
    groupId: StrictStr = Path(..., description=""),
    gateway_id: StrictStr = Query(..., description="", alias="gatewayId"),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth
    ),
) -> GroupMemberList:
    if not BaseGroupsApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseGroupsApi.subclasses[0]().list_group_members(groupId, gateway_id)


@router.post(
    "/api/v1/groups/{groupId}/members",
    responses={
        201: {"model": GroupMemberList, "description": "Member added"},
        400: {"model": Error, "description": "Invalid input"},
    },
    tags=["Groups"],
    summary="Add a user to a group",
    status_code=status.HTTP_201_CREATED,
    response_model_by_alias=True,
)
async def add_group_member(
    groupId: StrictStr = Path(..., description=""),
    gateway_id: StrictStr = Query(..., description="", alias="gatewayId"),
    group_member_request: GroupMemberRequest = Body(..., description=""),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth
    ),
) -> GroupMemberList:
    if not BaseGroupsApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    return await BaseGroupsApi.subclasses[0]().add_group_member(groupId, gateway_id, group_member_request)


@router.delete(
    "/api/v1/groups/{groupId}/members/{userId}",
    responses={
        204: {"description": "Removed"},
    },
    tags=["Groups"],
    summary="Remove a user from a group",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model_by_alias=True,
)
async def remove_group_member(
    groupId: StrictStr = Path(..., description=""),
    userId: StrictStr = Path(..., description=""),
    gateway_id: StrictStr = Query(..., description="", alias="gatewayId"),
    token_bearerAuth: TokenModel = Security(
        get_token_bearerAuth
    ),
) -> Response:
    if not BaseGroupsApi.subclasses:
        raise HTTPException(status_code=500, detail="Not implemented")
    await BaseGroupsApi.subclasses[0]().remove_group_member(groupId, userId, gateway_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
