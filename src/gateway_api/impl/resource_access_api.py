from __future__ import annotations

from typing import List, Optional

from pydantic import StrictStr

from gateway_api.apis.resource_access_api_base import BaseResourceAccessApi
from gateway_api.auth.roles import ACCESS_EDIT_ROLES, ACCESS_VIEW_ROLES, require_roles
from gateway_api.domain.access import AccessControlEntry, ResourceBinding as StoredBinding, StoredAccessGrant
from gateway_api.domain.preferences import PreferenceLevel, PreferenceResourceType, user_owner_id
from gateway_api.http.errors import bad_request, forbidden, service_error_to_http
from gateway_api.models.access_control_credential import AccessControlCredential
from gateway_api.models.access_control_response import AccessControlResponse
from gateway_api.models.accessible_resources import AccessibleResources
from gateway_api.models.resource_access import ResourceAccess
from gateway_api.models.resource_access_create_request import ResourceAccessCreateRequest
from gateway_api.models.resource_access_update_request import ResourceAccessUpdateRequest
from gateway_api.models.resource_binding import ResourceBinding
from gateway_api.service.errors import GatewayServiceError
from gateway_api.service.facade import gateway_services


class ResourceAccessApiImpl(BaseResourceAccessApi):
    async def list_access_grants(
        self,
        resource_type: PreferenceResourceType,
        resource_id: StrictStr,
    ) -> List[ResourceAccess]:
        require_roles(*ACCESS_VIEW_ROLES)
        try:
            grants = gateway_services.access_grants.get_access_grants(resource_type, str(resource_id))
        except GatewayServiceError as exc:
            raise service_error_to_http(exc) from exc
        return [_to_access_model(grant) for grant in grants]

    async def list_access_grants_by_type(
        self,
        gateway_id: StrictStr,
        resource_type: PreferenceResourceType,
    ) -> List[ResourceAccess]:
        require_roles(*ACCESS_VIEW_ROLES)
        try:
            grants = gateway_services.access_grants.get_access_grants_by_type(str(gateway_id), resource_type)
        except GatewayServiceError as exc:
            raise service_error_to_http(exc) from exc
        return [_to_access_model(grant) for grant in grants]

    async def list_enabled_access_grants(
        self,
        resource_type: PreferenceResourceType,
        resource_id: StrictStr,
    ) -> List[ResourceAccess]:
        require_roles(*ACCESS_VIEW_ROLES)
        try:
            grants = gateway_services.access_grants.get_enabled_access_grants(resource_type, str(resource_id))
        except GatewayServiceError as exc:
            raise service_error_to_http(exc) from exc
        return [_to_access_model(grant) for grant in grants]

    async def get_access_control(
        self,
        gateway_id: StrictStr,
        user_id: Optional[StrictStr],
    ) -> AccessControlResponse:
        token = require_roles(*ACCESS_VIEW_ROLES)
        target = str(user_id) if user_id else token.sub
        if _is_other_user(target, token.sub, str(gateway_id)) and not ACCESS_EDIT_ROLES.intersection(token.roles):
            raise forbidden("Insufficient role to view other users' access.")
        try:
            entries = gateway_services.access_control.get_access_control(str(gateway_id), target)
        except GatewayServiceError as exc:
            raise service_error_to_http(exc) from exc
        return AccessControlResponse(credentials=[_to_credential_model(entry) for entry in entries])

    async def list_access_grants_by_owner(
        self,
        ownerId: StrictStr,
        owner_type: PreferenceLevel,
    ) -> List[ResourceAccess]:
        require_roles(*ACCESS_VIEW_ROLES)
        try:
            grants = gateway_services.access_grants.get_access_grants_by_owner(str(ownerId), owner_type)
        except GatewayServiceError as exc:
            raise service_error_to_http(exc) from exc
        return [_to_access_model(grant) for grant in grants]

    async def list_accessible_resources(
        self,
        userId: StrictStr,
        gateway_id: StrictStr,
        resource_type: PreferenceResourceType,
        group_ids: Optional[StrictStr],
    ) -> AccessibleResources:
        require_roles(*ACCESS_VIEW_ROLES)
        try:
            if group_ids is None:
                groups = gateway_services.groups.list_user_groups(str(gateway_id), str(userId))
            else:
                groups = [item.strip() for item in group_ids.split(",") if item.strip()]
            resource_ids = gateway_services.access_grants.get_accessible_resources(
                str(userId),
                str(gateway_id),
                resource_type,
                groups,
            )
        except GatewayServiceError as exc:
            raise service_error_to_http(exc) from exc
        return AccessibleResources(resource_ids=resource_ids)

    async def create_access_grant(
        self,
        resource_access_create_request: ResourceAccessCreateRequest,
    ) -> ResourceAccess:
        token = require_roles(*ACCESS_EDIT_ROLES)
        if resource_access_create_request is None:
            raise bad_request("Missing access grant payload.")
        request = resource_access_create_request
        try:
            grant = gateway_services.access_grants.create_access_grant(
                resource_type=request.resource_type,
                resource_id=request.resource_id,
                owner_id=request.owner_id,
                owner_type=request.owner_type,
                gateway_id=request.gateway_id,
                credential_token=request.credential_token,
                login_username=request.login_username,
                enabled=True if request.enabled is None else request.enabled,
                actor_id=token.sub,
            )
        except GatewayServiceError as exc:
            raise service_error_to_http(exc) from exc
        return _to_access_model(grant)

    async def get_access_grant(self, accessId: int) -> ResourceAccess:
        require_roles(*ACCESS_VIEW_ROLES)
        try:
            grant = gateway_services.access_grants.get_access_grant(int(accessId))
        except GatewayServiceError as exc:
            raise service_error_to_http(exc) from exc
        return _to_access_model(grant)

    async def update_access_grant(
        self,
        accessId: int,
        resource_access_update_request: ResourceAccessUpdateRequest,
    ) -> ResourceAccess:
        token = require_roles(*ACCESS_EDIT_ROLES)
        if resource_access_update_request is None:
            raise bad_request("Missing access grant payload.")
        patch = resource_access_update_request
        try:
            grant = gateway_services.access_grants.update_access_grant(
                int(accessId),
                enabled=patch.enabled,
                credential_token=patch.credential_token,
                login_username=patch.login_username,
                actor_id=token.sub,
            )
        except GatewayServiceError as exc:
            raise service_error_to_http(exc) from exc
        return _to_access_model(grant)

    async def delete_access_grant(self, accessId: int) -> None:
        token = require_roles(*ACCESS_EDIT_ROLES)
        try:
            gateway_services.access_grants.delete_access_grant(int(accessId), actor_id=token.sub)
        except GatewayServiceError as exc:
            raise service_error_to_http(exc) from exc
        return None


def _is_other_user(target: str, subject: str, gateway_id: str) -> bool:
    return user_owner_id(target, gateway_id) != user_owner_id(subject, gateway_id)


def _to_access_model(grant: StoredAccessGrant) -> ResourceAccess:
    return ResourceAccess(
        id=grant.grant_id,
        resource_type=grant.resource_type,
        resource_id=grant.resource_id,
        owner_id=grant.owner_id,
        owner_type=grant.owner_type,
        gateway_id=grant.gateway_id,
        credential_token=grant.credential_token,
        login_username=grant.login_username,
        enabled=grant.enabled,
        created_time=grant.created_at,
        updated_time=grant.updated_at,
    )


def _to_binding_models(bindings: List[StoredBinding]) -> List[ResourceBinding]:
    return [ResourceBinding(resource_id=item.resource_id, login_username=item.login_username) for item in bindings]


def _to_credential_model(entry: AccessControlEntry) -> AccessControlCredential:
    return AccessControlCredential(
        token=entry.token,
        name=entry.name,
        username=entry.username,
        type=entry.credential_type,
        description=entry.description,
        persisted_time=entry.persisted_at,
        ownership=entry.ownership,
        source=entry.source,
        source_id=entry.source_id,
        compute_resources=_to_binding_models(entry.compute_resources),
        storage_resources=_to_binding_models(entry.storage_resources),
    )
