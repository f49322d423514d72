# coding: utf-8

from typing import ClassVar, Dict, List, Tuple, Any  # noqa: F401

from pydantic import StrictStr
from typing import Optional, Union
from gateway_api.domain.preferences import PreferenceLevel, PreferenceResourceType
from gateway_api.models.group_selection_request import GroupSelectionRequest
from gateway_api.models.preference_entry import PreferenceEntry
from gateway_api.models.resolved_preferences_result import ResolvedPreferencesResult
from gateway_api.models.set_preference_request import SetPreferenceRequest


class BasePreferencesApi:
    subclasses: ClassVar[Tuple] = ()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        BasePreferencesApi.subclasses = BasePreferencesApi.subclasses + (cls,)
    async def resolve_preferences(
        self,
        resource_type: PreferenceResourceType,
        resource_id: StrictStr,
        gateway_id: StrictStr,
        user_id: Optional[StrictStr],
        group_ids: Optional[StrictStr],
        with_conflicts: Optional[bool],
    ) -> Union[Dict[str, str], ResolvedPreferencesResult]:
        ...


    async def get_preferences(
        self,
        resourceType: PreferenceResourceType,
        resourceId: StrictStr,
        level: PreferenceLevel,
        owner_id: StrictStr,
        detailed: Optional[bool],
    ) -> Union[Dict[str, str], List[PreferenceEntry]]:
        ...


    async def set_preference(
        self,
        set_preference_request: SetPreferenceRequest,
    ) -> None:
        ...


    async def delete_preference(
        self,
        resourceType: PreferenceResourceType,
        resourceId: StrictStr,
        level: PreferenceLevel,
        owner_id: StrictStr,
        key: StrictStr,
    ) -> None:
        ...


    async def delete_all_preferences(
        self,
        resourceType: PreferenceResourceType,
        resourceId: StrictStr,
        level: PreferenceLevel,
        owner_id: StrictStr,
    ) -> None:
        ...


    async def set_group_selection(
        self,
        gateway_id: StrictStr,
        group_selection_request: GroupSelectionRequest,
    ) -> None:
        ...
