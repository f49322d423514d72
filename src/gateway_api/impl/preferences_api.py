from __future__ import annotations

from typing import Dict, List, Optional, Union

from pydantic import StrictStr

from gateway_api.apis.preferences_api_base import BasePreferencesApi
from gateway_api.auth.roles import (
    PREFERENCE_EDIT_ROLES,
    PREFERENCE_VIEW_ROLES,
    SELF_SERVICE_ROLES,
    require_roles,
)
from gateway_api.config.settings import get_api_settings
from gateway_api.domain.preferences import (
    PreferenceLevel,
    PreferenceResourceType,
    ResolvedPreferencesResult as ResolvedPreferences,
    allowed_preference_keys,
    is_known_preference_key,
)
from gateway_api.http.errors import bad_request, forbidden, service_error_to_http
from gateway_api.models.group_preference_option import GroupPreferenceOption
from gateway_api.models.group_selection_request import GroupSelectionRequest
from gateway_api.models.preference_entry import PreferenceEntry
from gateway_api.models.resolved_preferences_result import ResolvedPreferencesResult
from gateway_api.models.set_preference_request import SetPreferenceRequest
from gateway_api.service.errors import GatewayServiceError
from gateway_api.service.facade import gateway_services


class PreferencesApiImpl(BasePreferencesApi):
    async def resolve_preferences(
        self,
        resource_type: PreferenceResourceType,
        resource_id: StrictStr,
        gateway_id: StrictStr,
        user_id: Optional[StrictStr],
        group_ids: Optional[StrictStr],
        with_conflicts: Optional[bool],
    ) -> Union[Dict[str, str], ResolvedPreferencesResult]:
        require_roles(*PREFERENCE_VIEW_ROLES)
        groups = [item.strip() for item in (group_ids or "").split(",") if item.strip()]
        try:
            result = gateway_services.resolver.resolve_with_conflicts(
                resource_type,
                str(resource_id),
                str(gateway_id),
                user_id=str(user_id) if user_id else None,
                group_ids=groups,
            )
        except GatewayServiceError as exc:
            raise service_error_to_http(exc) from exc
        if not with_conflicts:
            return result.resolved
        return _to_resolved_model(result)

    async def get_preferences(
        self,
        resourceType: PreferenceResourceType,
        resourceId: StrictStr,
        level: PreferenceLevel,
        owner_id: StrictStr,
        detailed: Optional[bool],
    ) -> Union[Dict[str, str], List[PreferenceEntry]]:
        require_roles(*PREFERENCE_VIEW_ROLES)
        try:
            if detailed:
                entries = gateway_services.preferences.get_preferences_at_level_detailed(
                    resourceType, str(resourceId), str(owner_id), level
                )
                return [PreferenceEntry(key=item.key, value=item.value, enforced=item.enforced) for item in entries]
            return gateway_services.preferences.get_preferences_at_level(resourceType, str(resourceId), str(owner_id), level)
        except GatewayServiceError as exc:
            raise service_error_to_http(exc) from exc

    async def set_preference(self, set_preference_request: SetPreferenceRequest) -> None:
        token = require_roles(*PREFERENCE_EDIT_ROLES)
        if set_preference_request is None:
            raise bad_request("Missing preference payload.")
        request = set_preference_request
        if get_api_settings().strict_preference_keys and not is_known_preference_key(request.resource_type, request.key):
            raise bad_request(
                f"Unknown {request.resource_type.value} preference key '{request.key}'.",
                details={"allowedKeys": sorted(allowed_preference_keys(request.resource_type))},
            )
        try:
            gateway_services.preferences.set_preference(
                request.resource_type,
                request.resource_id,
                request.owner_id,
                request.level,
                request.key,
                request.value,
                bool(request.enforced),
                actor_id=token.sub,
            )
        except GatewayServiceError as exc:
            raise service_error_to_http(exc) from exc
        return None

    async def delete_preference(
        self,
        resourceType: PreferenceResourceType,
        resourceId: StrictStr,
        level: PreferenceLevel,
        owner_id: StrictStr,
        key: StrictStr,
    ) -> None:
        token = require_roles(*PREFERENCE_EDIT_ROLES)
        try:
            gateway_services.preferences.delete_preference(
                resourceType, str(resourceId), str(owner_id), level, str(key), actor_id=token.sub
            )
        except GatewayServiceError as exc:
            raise service_error_to_http(exc) from exc
        return None

    async def delete_all_preferences(
        self,
        resourceType: PreferenceResourceType,
        resourceId: StrictStr,
        level: PreferenceLevel,
        owner_id: StrictStr,
    ) -> None:
        token = require_roles(*PREFERENCE_EDIT_ROLES)
        try:
            gateway_services.preferences.delete_all_preferences(
                resourceType, str(resourceId), str(owner_id), level, actor_id=token.sub
            )
        except GatewayServiceError as exc:
            raise service_error_to_http(exc) from exc
        return None

    async def set_group_selection(
        self,
        gateway_id: StrictStr,
        group_selection_request: GroupSelectionRequest,
    ) -> None:
        token = require_roles(*SELF_SERVICE_ROLES)
        request = group_selection_request
        user_id = request.user_id or token.sub
        if user_id != token.sub and not PREFERENCE_EDIT_ROLES.intersection(token.roles):
            raise forbidden("Only administrators can choose groups for other users.")
        try:
            gateway_services.preferences.set_group_selection(
                str(gateway_id),
                user_id,
                request.resource_type,
                request.resource_id,
                request.selection_key,
                request.selected_group_id,
                actor_id=token.sub,
            )
        except GatewayServiceError as exc:
            raise service_error_to_http(exc) from exc
        return None


def _to_resolved_model(result: ResolvedPreferences) -> ResolvedPreferencesResult:
    return ResolvedPreferencesResult(
        resolved=dict(result.resolved),
        conflict_keys=list(result.conflict_keys),
        conflict_options={
            key: [GroupPreferenceOption(group_id=option.group_id, value=option.value) for option in options]
            for key, options in result.conflict_options.items()
        },
    )
