# coding: utf-8

from typing import ClassVar, Dict, List, Tuple, Any  # noqa: F401

from pydantic import StrictInt, StrictStr
from typing import Optional
from gateway_api.domain.preferences import PreferenceLevel, PreferenceResourceType
from gateway_api.models.access_control_response import AccessControlResponse
from gateway_api.models.accessible_resources import AccessibleResources
from gateway_api.models.resource_access import ResourceAccess
from gateway_api.models.resource_access_create_request import ResourceAccessCreateRequest
from gateway_api.models.resource_access_update_request import ResourceAccessUpdateRequest


class BaseResourceAccessApi:
    subclasses: ClassVar[Tuple] = ()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        BaseResourceAccessApi.subclasses = BaseResourceAccessApi.subclasses + (cls,)
    async def list_access_grants(
        self,
        resource_type: PreferenceResourceType,
        resource_id: StrictStr,
    ) -> List[ResourceAccess]:
        ...


    async def list_access_grants_by_type(
        self,
        gateway_id: StrictStr,
        resource_type: PreferenceResourceType,
    ) -> List[ResourceAccess]:
        ...


    async def list_enabled_access_grants(
        self,
        resource_type: PreferenceResourceType,
        resource_id: StrictStr,
    ) -> List[ResourceAccess]:
        ...


    async def get_access_control(
        self,
        gateway_id: StrictStr,
        user_id: Optional[StrictStr],
    ) -> AccessControlResponse:
        ...


    async def list_access_grants_by_owner(
        self,
        ownerId: StrictStr,
        owner_type: PreferenceLevel,
    ) -> List[ResourceAccess]:
        ...


    async def list_accessible_resources(
        self,
        userId: StrictStr,
        gateway_id: StrictStr,
        resource_type: PreferenceResourceType,
        group_ids: Optional[StrictStr],
    ) -> AccessibleResources:
        ...


    async def create_access_grant(
        self,
        resource_access_create_request: ResourceAccessCreateRequest,
    ) -> ResourceAccess:
        ...


    async def get_access_grant(
        self,
        accessId: StrictInt,
    ) -> ResourceAccess:
        ...


    async def update_access_grant(
        self,
        accessId: StrictInt,
        resource_access_update_request: ResourceAccessUpdateRequest,
    ) -> ResourceAccess:
        ...


    async def delete_access_grant(
        self,
        accessId: StrictInt,
    ) -> None:
        ...
