"""Service layer for the resource access grant registry."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, Optional, Type, TypeVar, Union

from gateway_api.service.audit import AuditService
from gateway_api.db.models import AccessGrantRecord
from gateway_api.db.session import run_in_session
from gateway_api.domain.access import StoredAccessGrant
from gateway_api.domain.preferences import PreferenceLevel, PreferenceResourceType, user_owner_id
from gateway_api.repo.access_grants import AccessGrantRepository
from gateway_api.service.errors import (
    AccessGrantNotFoundError,
    DuplicateGrantError,
    NotFoundError,
    ValidationError,
    require_owner_id,
    require_text,
)

LOGGER = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


class AccessGrantService:
    def __init__(
        self,
        repo: Optional[AccessGrantRepository] = None,
        audit: Optional[AuditService] = None,
    ) -> None:
        self._repo = repo or AccessGrantRepository()
        self._audit = audit or AuditService()

    def create_access_grant(
        self,
        *,
        resource_type: Union[PreferenceResourceType, str, None],
        resource_id: Optional[str],
        owner_id: Optional[str],
        owner_type: Union[PreferenceLevel, str, None],
        gateway_id: Optional[str],
        credential_token: Optional[str],
        login_username: Optional[str] = None,
        enabled: bool = True,
        actor_id: Optional[str] = None,
    ) -> StoredAccessGrant:
        """Bind a credential to a resource for a gateway, group or user owner.

        Every identifying field is required; nothing is written when one is
        blank. An identical grant (same resource, owner and credential) is a
        conflict, while a different credential for the same owner is allowed.
        USER owner ids are stored in ``user@gateway`` form.
        """

        resource_type = _coerce_enum(PreferenceResourceType, resource_type, "resourceType")
        resource_id = require_text(resource_id, "resourceId")
        owner_id = require_text(owner_id, "ownerId")
        owner_type = _coerce_enum(PreferenceLevel, owner_type, "ownerType")
        gateway_id = require_text(gateway_id, "gatewayId")
        if owner_type is PreferenceLevel.USER:
            owner_id = user_owner_id(owner_id, gateway_id)
        credential_token = require_text(credential_token, "credentialToken")
        login_username = _blank_to_none(login_username)

        def _create(session) -> StoredAccessGrant:
            existing = self._repo.find_duplicate(
                resource_type=resource_type.value,
                resource_id=resource_id,
                owner_id=owner_id,
                owner_type=owner_type.value,
                credential_token=credential_token,
                session=session,
            )
            if existing is not None:
                raise DuplicateGrantError(existing.id)
            record = AccessGrantRecord(
                resource_type=resource_type.value,
                resource_id=resource_id,
                owner_id=owner_id,
                owner_type=owner_type.value,
                gateway_id=gateway_id,
                credential_token=credential_token,
                login_username=login_username,
                enabled=bool(enabled),
            )
            return _record_to_grant(self._repo.save(record, session=session))

        grant = run_in_session(_create)
        LOGGER.info(
            "Created access grant %s on %s %s for %s %s",
            grant.grant_id,
            grant.resource_type.value,
            grant.resource_id,
            grant.owner_type.value,
            grant.owner_id,
        )
        self._audit.record_event(
            actor_id=actor_id,
            action="access_grant.create",
            target_type="access_grant",
            target_id=str(grant.grant_id),
            metadata=grant.to_dict(),
        )
        return grant

    def update_access_grant(
        self,
        grant_id: int,
        *,
        enabled: Optional[bool] = None,
        credential_token: Optional[str] = None,
        login_username: Optional[str] = None,
        actor_id: Optional[str] = None,
    ) -> StoredAccessGrant:
        """Patch a grant. ``None`` leaves a field untouched; a blank login username clears it."""

        if credential_token is not None:
            credential_token = require_text(credential_token, "credentialToken")

        def _update(session) -> StoredAccessGrant:
            record = self._repo.get(grant_id, session=session)
            if record is None:
                raise AccessGrantNotFoundError(grant_id)
            if credential_token is not None and credential_token != record.credential_token:
                existing = self._repo.find_duplicate(
                    resource_type=record.resource_type,
                    resource_id=record.resource_id,
                    owner_id=record.owner_id,
                    owner_type=record.owner_type,
                    credential_token=credential_token,
                    exclude_id=record.id,
                    session=session,
                )
                if existing is not None:
                    raise DuplicateGrantError(existing.id)
                record.credential_token = credential_token
            if enabled is not None:
                record.enabled = bool(enabled)
            if login_username is not None:
                record.login_username = _blank_to_none(login_username)
            return _record_to_grant(self._repo.save(record, session=session))

        grant = run_in_session(_update)
        self._audit.record_event(
            actor_id=actor_id,
            action="access_grant.update",
            target_type="access_grant",
            target_id=str(grant_id),
            metadata={
                key: value
                for key, value in {
                    "enabled": enabled,
                    "credentialToken": credential_token,
                    "loginUsername": login_username,
                }.items()
                if value is not None
            },
        )
        return grant

    def delete_access_grant(self, grant_id: int, *, actor_id: Optional[str] = None) -> None:
        def _delete(session) -> StoredAccessGrant:
            record = self._repo.get(grant_id, session=session)
            if record is None:
                raise AccessGrantNotFoundError(grant_id)
            grant = _record_to_grant(record)
            self._repo.delete(record, session=session)
            return grant

        grant = run_in_session(_delete)
        LOGGER.info("Deleted access grant %s", grant_id)
        self._audit.record_event(
            actor_id=actor_id,
            action="access_grant.delete",
            target_type="access_grant",
            target_id=str(grant_id),
            metadata=grant.to_dict(),
        )

    def get_access_grant(self, grant_id: int) -> StoredAccessGrant:
        def _get(session) -> StoredAccessGrant:
            record = self._repo.get(grant_id, session=session)
            if record is None:
                raise AccessGrantNotFoundError(grant_id)
            return _record_to_grant(record)

        return run_in_session(_get)

    def get_access_grants(
        self,
        resource_type: PreferenceResourceType,
        resource_id: str,
    ) -> list[StoredAccessGrant]:
        return self._list(resource_type=resource_type.value, resource_id=require_text(resource_id, "resourceId"))

    def get_access_grants_by_type(
        self,
        gateway_id: str,
        resource_type: PreferenceResourceType,
    ) -> list[StoredAccessGrant]:
        return self._list(gateway_id=require_text(gateway_id, "gatewayId"), resource_type=resource_type.value)

    def get_enabled_access_grants(
        self,
        resource_type: PreferenceResourceType,
        resource_id: str,
    ) -> list[StoredAccessGrant]:
        return self._list(
            resource_type=resource_type.value,
            resource_id=require_text(resource_id, "resourceId"),
            enabled_only=True,
        )

    def get_access_grants_by_owner(
        self,
        owner_id: str,
        owner_type: PreferenceLevel,
    ) -> list[StoredAccessGrant]:
        return self._list(owner_id=require_owner_id(owner_id, owner_type), owner_type=owner_type.value)

    def get_access_grants_by_credential(self, credential_token: str) -> list[StoredAccessGrant]:
        return self._list(credential_token=require_text(credential_token, "credentialToken"))

    def get_effective_access_grant(
        self,
        resource_type: PreferenceResourceType,
        resource_id: str,
        owner_id: str,
        owner_type: PreferenceLevel,
    ) -> StoredAccessGrant:
        """Return the most recently created enabled grant for one owner on one resource."""

        grants = self._list(
            resource_type=resource_type.value,
            resource_id=require_text(resource_id, "resourceId"),
            owner_id=require_owner_id(owner_id, owner_type),
            owner_type=owner_type.value,
            enabled_only=True,
        )
        if not grants:
            raise NotFoundError(
                f"No enabled access grant for {owner_type.value} '{owner_id}' on {resource_type.value} '{resource_id}'."
            )
        return max(grants, key=lambda grant: grant.grant_id)

    def get_accessible_resources(
        self,
        user_id: str,
        gateway_id: str,
        resource_type: PreferenceResourceType,
        group_ids: Optional[Iterable[str]] = None,
    ) -> list[str]:
        gateway_id = require_text(gateway_id, "gatewayId")
        owner = user_owner_id(require_text(user_id, "userId"), gateway_id)
        groups = [group_id for group_id in (group_ids or []) if group_id]

        def _list(session) -> list[str]:
            records = self._repo.list_reachable(
                gateway_id=gateway_id,
                user_owner_id=owner,
                group_ids=groups,
                resource_type=resource_type.value,
                session=session,
            )
            return sorted({record.resource_id for record in records})

        return run_in_session(_list)

    def _list(self, **filters) -> list[StoredAccessGrant]:
        def _query(session) -> list[StoredAccessGrant]:
            return [_record_to_grant(record) for record in self._repo.list(session=session, **filters)]

        return run_in_session(_query)


def _coerce_enum(enum_type: Type[E], value, field_name: str) -> E:
    if isinstance(value, enum_type):
        return value
    text = require_text(value, field_name)
    try:
        return enum_type(text.upper())
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_type)
        raise ValidationError(f"{field_name} must be one of {allowed}") from exc


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _record_to_grant(record: AccessGrantRecord) -> StoredAccessGrant:
    return StoredAccessGrant(
        grant_id=record.id,
        resource_type=PreferenceResourceType(record.resource_type),
        resource_id=record.resource_id,
        owner_id=record.owner_id,
        owner_type=PreferenceLevel(record.owner_type),
        gateway_id=record.gateway_id,
        credential_token=record.credential_token,
        enabled=bool(record.enabled),
        login_username=record.login_username,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


__all__ = ["AccessGrantService"]
