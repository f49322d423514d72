"""Domain models for access grants, credentials and the access-control view."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from gateway_api.domain.preferences import PreferenceLevel, PreferenceResourceType


class CredentialType(str, Enum):
    SSH = "SSH"
    PASSWORD = "PASSWORD"
    CERTIFICATE = "CERTIFICATE"


class CredentialOwnership(str, Enum):
    OWNED = "OWNED"
    INHERITED = "INHERITED"


@dataclass
class StoredAccessGrant:
    grant_id: int
    resource_type: PreferenceResourceType
    resource_id: str
    owner_id: str
    owner_type: PreferenceLevel
    gateway_id: str
    credential_token: str
    enabled: bool
    login_username: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.grant_id,
            "resource_type": self.resource_type.value,
            "resource_id": self.resource_id,
            "owner_id": self.owner_id,
            "owner_type": self.owner_type.value,
            "gateway_id": self.gateway_id,
            "credential_token": self.credential_token,
            "login_username": self.login_username,
            "enabled": self.enabled,
        }


@dataclass
class StoredCredential:
    token: str
    gateway_id: str
    owner_id: str
    name: str
    credential_type: CredentialType
    persisted_at: datetime
    description: Optional[str] = None
    public_key: Optional[str] = None


@dataclass(frozen=True)
class ResourceBinding:
    resource_id: str
    login_username: Optional[str] = None


@dataclass
class AccessControlEntry:
    token: str
    ownership: CredentialOwnership
    source: PreferenceLevel
    source_id: str
    name: Optional[str] = None
    username: Optional[str] = None
    credential_type: Optional[str] = None
    description: Optional[str] = None
    persisted_at: Optional[datetime] = None
    compute_resources: List[ResourceBinding] = field(default_factory=list)
    storage_resources: List[ResourceBinding] = field(default_factory=list)


__all__ = [
    "AccessControlEntry",
    "CredentialOwnership",
    "CredentialType",
    "ResourceBinding",
    "StoredAccessGrant",
    "StoredCredential",
]
