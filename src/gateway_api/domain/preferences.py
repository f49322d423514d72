"""Domain types for level-scoped resource preferences."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Type


class PreferenceLevel(str, Enum):
    """Specificity tier of a preference or grant, least specific first."""

    GATEWAY = "GATEWAY"
    GROUP = "GROUP"
    USER = "USER"

    @property
    def rank(self) -> int:
        return _LEVEL_ORDER.index(self)


_LEVEL_ORDER = (PreferenceLevel.GATEWAY, PreferenceLevel.GROUP, PreferenceLevel.USER)


class PreferenceResourceType(str, Enum):
    COMPUTE = "COMPUTE"
    STORAGE = "STORAGE"


class ComputePreferenceKey(str, Enum):
    LOGIN_USERNAME = "loginUsername"
    PREFERRED_BATCH_QUEUE = "preferredBatchQueue"
    SCRATCH_LOCATION = "scratchLocation"
    ALLOCATION_PROJECT_NUMBER = "allocationProjectNumber"
    RESOURCE_CREDENTIAL_TOKEN = "resourceSpecificCredentialStoreToken"
    QUALITY_OF_SERVICE = "qualityOfService"
    RESERVATION = "reservation"
    RESERVATION_START_TIME = "reservationStartTime"
    RESERVATION_END_TIME = "reservationEndTime"
    PREFERRED_JOB_SUBMISSION_PROTOCOL = "preferredJobSubmissionProtocol"
    PREFERRED_DATA_MOVEMENT_PROTOCOL = "preferredDataMovementProtocol"


class StoragePreferenceKey(str, Enum):
    LOGIN_USERNAME = "loginUsername"
    FILE_SYSTEM_ROOT_LOCATION = "fileSystemRootLocation"
    RESOURCE_CREDENTIAL_TOKEN = "resourceSpecificCredentialStoreToken"


PREFERENCE_KEYS: Dict[PreferenceResourceType, Type[Enum]] = {
    PreferenceResourceType.COMPUTE: ComputePreferenceKey,
    PreferenceResourceType.STORAGE: StoragePreferenceKey,
}


def allowed_preference_keys(resource_type: PreferenceResourceType) -> frozenset[str]:
    return frozenset(member.value for member in PREFERENCE_KEYS[resource_type])


def is_known_preference_key(resource_type: PreferenceResourceType, key: str) -> bool:
    return key in allowed_preference_keys(resource_type)


def user_owner_id(user_id: str, gateway_id: str) -> str:
    """Return the ``user@gateway`` owner id used for USER-level records.

    Ids that already carry the ``@<gateway>`` suffix are returned unchanged, so
    both ``alice`` and ``alice@gw`` map to ``alice@gw`` for gateway ``gw``.
    """

    suffix = f"@{gateway_id}"
    if user_id.endswith(suffix):
        return user_id
    return f"{user_id}{suffix}"


@dataclass
class StoredPreference:
    resource_type: PreferenceResourceType
    resource_id: str
    owner_id: str
    level: PreferenceLevel
    key: str
    value: str
    enforced: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {"key": self.key, "value": self.value, "enforced": self.enforced}


@dataclass(frozen=True)
class GroupPreferenceOption:
    group_id: str
    value: str


@dataclass
class ResolvedPreferencesResult:
    resolved: Dict[str, str] = field(default_factory=dict)
    sources: Dict[str, PreferenceLevel] = field(default_factory=dict)
    conflict_keys: List[str] = field(default_factory=list)
    conflict_options: Dict[str, List[GroupPreferenceOption]] = field(default_factory=dict)


__all__ = [
    "ComputePreferenceKey",
    "GroupPreferenceOption",
    "PREFERENCE_KEYS",
    "PreferenceLevel",
    "PreferenceResourceType",
    "ResolvedPreferencesResult",
    "StoragePreferenceKey",
    "StoredPreference",
    "allowed_preference_keys",
    "is_known_preference_key",
    "user_owner_id",
]
