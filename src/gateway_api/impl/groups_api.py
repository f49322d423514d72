from __future__ import annotations

from typing import Optional

from pydantic import StrictStr

from gateway_api.apis.groups_api_base import BaseGroupsApi
from gateway_api.auth.roles import ACCESS_VIEW_ROLES, GROUP_EDIT_ROLES, require_roles
from gateway_api.domain.preferences import user_owner_id
from gateway_api.http.errors import bad_request, forbidden, service_error_to_http
from gateway_api.models.group_list import GroupList
from gateway_api.models.group_member_list import GroupMemberList
from gateway_api.models.group_member_request import GroupMemberRequest
from gateway_api.service.errors import GatewayServiceError
from gateway_api.service.facade import gateway_services


class GroupsApiImpl(BaseGroupsApi):
    async def list_user_groups(self, gateway_id: StrictStr, user_id: Optional[StrictStr]) -> GroupList:
        token = require_roles(*ACCESS_VIEW_ROLES)
        target = str(user_id) if user_id else token.sub
        if user_owner_id(target, str(gateway_id)) != user_owner_id(token.sub, str(gateway_id)):
            if not GROUP_EDIT_ROLES.intersection(token.roles):
                raise forbidden("Insufficient role to view other users' groups.")
        try:
            group_ids = gateway_services.groups.list_user_groups(str(gateway_id), target)
        except GatewayServiceError as exc:
            raise service_error_to_http(exc) from exc
        return GroupList(group_ids=group_ids)

    async def list_group_members(self, groupId: StrictStr, gateway_id: StrictStr) -> GroupMemberList:
        require_roles(*ACCESS_VIEW_ROLES)
        try:
            members = gateway_services.groups.list_members(str(gateway_id), str(groupId))
        except GatewayServiceError as exc:
            raise service_error_to_http(exc) from exc
        return GroupMemberList(group_id=str(groupId), members=members)

    async def add_group_member(
        self,
        groupId: StrictStr,
        gateway_id: StrictStr,
        group_member_request: GroupMemberRequest,
    ) -> GroupMemberList:
        token = require_roles(*GROUP_EDIT_ROLES)
        if group_member_request is None:
            raise bad_request("Missing member payload.")
        try:
            gateway_services.groups.add_member(
                str(gateway_id), str(groupId), group_member_request.user_id, actor_id=token.sub
            )
            members = gateway_services.groups.list_members(str(gateway_id), str(groupId))
        except GatewayServiceError as exc:
            raise service_error_to_http(exc) from exc
        return GroupMemberList(group_id=str(groupId), members=members)

    async def remove_group_member(self, groupId: StrictStr, userId: StrictStr, gateway_id: StrictStr) -> None:
        token = require_roles(*GROUP_EDIT_ROLES)
        try:
            gateway_services.groups.remove_member(str(gateway_id), str(groupId), str(userId), actor_id=token.sub)
        except GatewayServiceError as exc:
            raise service_error_to_http(exc) from exc
        return None
