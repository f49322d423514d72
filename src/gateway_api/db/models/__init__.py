"""Database model package."""

from .access_grant import AccessGrantRecord
from .audit_event import AuditEventRecord
from .credential import CredentialRecord
from .group import GroupMembershipRecord, GroupSelectionRecord
from .preference import PreferenceRecord

__all__ = [
    "AccessGrantRecord",
    "AuditEventRecord",
    "CredentialRecord",
    "GroupMembershipRecord",
    "GroupSelectionRecord",
    "PreferenceRecord",
]
