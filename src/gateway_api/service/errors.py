"""Exceptions raised by the gateway access services."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from gateway_api.domain.preferences import PreferenceLevel


class GatewayServiceError(Exception):
    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(GatewayServiceError):
    """Raised when a request is missing required fields or carries invalid values."""


class NotFoundError(GatewayServiceError):
    """Raised when an addressed grant, credential or group does not exist."""


class ConflictError(GatewayServiceError):
    """Raised when a write would violate a uniqueness or integrity rule."""


class AccessGrantNotFoundError(NotFoundError):
    def __init__(self, grant_id: int) -> None:
        super().__init__(f"Access grant '{grant_id}' not found.")
        self.grant_id = grant_id


class CredentialNotFoundError(NotFoundError):
    def __init__(self, token: str) -> None:
        super().__init__(f"Credential '{token}' not found.")
        self.token = token


class DuplicateGrantError(ConflictError):
    def __init__(self, existing_id: int) -> None:
        super().__init__(
            "An access grant for this resource, owner and credential already exists.",
            details={"existingId": existing_id},
        )
        self.existing_id = existing_id


class CredentialInUseError(ConflictError):
    def __init__(self, token: str, grant_ids: Sequence[int]) -> None:
        super().__init__(
            f"Credential '{token}' is still referenced by {len(grant_ids)} access grant(s).",
            details={"grantIds": list(grant_ids)},
        )
        self.token = token
        self.grant_ids = list(grant_ids)


def require_text(value: Optional[str], field_name: str) -> str:
    """Return ``value`` stripped, or raise ``ValidationError`` when it is blank."""

    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_owner_id(value: Optional[str], level: PreferenceLevel) -> str:
    """Return a non-blank owner id; USER owners must be in ``user@gateway`` form."""

    owner_id = require_text(value, "ownerId")
    if level is PreferenceLevel.USER:
        user, _, gateway = owner_id.rpartition("@")
        if not user or not gateway:
            raise ValidationError(
                f"USER ownerId '{owner_id}' must be qualified as user@gateway",
                details={"ownerId": owner_id},
            )
    return owner_id


__all__ = [
    "AccessGrantNotFoundError",
    "ConflictError",
    "CredentialInUseError",
    "CredentialNotFoundError",
    "DuplicateGrantError",
    "GatewayServiceError",
    "NotFoundError",
    "ValidationError",
    "require_owner_id",
    "require_text",
]
