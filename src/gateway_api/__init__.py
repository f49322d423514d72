"""Public exports for the gateway access API request models."""

from __future__ import annotations

from gateway_api.models.credential_create_request import CredentialCreateRequest
from gateway_api.models.group_member_request import GroupMemberRequest
from gateway_api.models.group_selection_request import GroupSelectionRequest
from gateway_api.models.resource_access_create_request import ResourceAccessCreateRequest
from gateway_api.models.resource_access_update_request import ResourceAccessUpdateRequest
from gateway_api.models.set_preference_request import SetPreferenceRequest

__all__ = [
    "CredentialCreateRequest",
    "GroupMemberRequest",
    "GroupSelectionRequest",
    "ResourceAccessCreateRequest",
    "ResourceAccessUpdateRequest",
    "SetPreferenceRequest",
]
