"""Repository layer for gateway access persistence."""

from .access_grants import AccessGrantRepository
from .audit import AuditRepository
from .credentials import CredentialRepository
from .groups import GroupMembershipRepository
from .preferences import GroupSelectionRepository, PreferenceRepository

__all__ = [
    "AccessGrantRepository",
    "AuditRepository",
    "CredentialRepository",
    "GroupMembershipRepository",
    "GroupSelectionRepository",
    "PreferenceRepository",
]
