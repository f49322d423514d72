# coding: utf-8

from typing import ClassVar, Dict, List, Tuple, Any  # noqa: F401

from pydantic import StrictStr
from typing import Optional
from gateway_api.models.group_list import GroupList
from gateway_api.models.group_member_list import GroupMemberList
from gateway_api.models.group_member_request import GroupMemberRequest


class BaseGroupsApi:
    subclasses: ClassVar[Tuple] = ()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        BaseGroupsApi.subclasses = BaseGroupsApi.subclasses + (cls,)
    async def list_user_groups(
        self,
        gateway_id: StrictStr,
        user_id: Optional[StrictStr],
    ) -> GroupList:
        ...


    async def list_group_members(
        self,
        groupId: StrictStr,
        gateway_id: StrictStr,
    ) -> GroupMemberList:
        ...


    async def add_group_member(
        self,
        groupId: StrictStr,
        gateway_id: StrictStr,
        group_member_request: GroupMemberRequest,
    ) -> GroupMemberList:
        ...


    async def remove_group_member(
        self,
        groupId: StrictStr,
        userId: StrictStr,
        gateway_id: StrictStr,
    ) -> None:
        ...
