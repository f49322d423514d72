"""Service layer for the credential catalog."""

from __future__ import annotations

import logging
from typing import Optional, Union

from gateway_api.service.audit import AuditService
from gateway_api.db.models import CredentialRecord
from gateway_api.db.session import run_in_session
from gateway_api.domain.access import CredentialType, StoredCredential
from gateway_api.domain.preferences import user_owner_id
from gateway_api.repo.access_grants import AccessGrantRepository
from gateway_api.repo.credentials import CredentialRepository
from gateway_api.service.errors import (
    CredentialInUseError,
    CredentialNotFoundError,
    ValidationError,
    require_text,
)

LOGGER = logging.getLogger(__name__)


class CredentialService:
    """Catalog of stored credentials. Secret material is written but never read back."""

    def __init__(
        self,
        repo: Optional[CredentialRepository] = None,
        grant_repo: Optional[AccessGrantRepository] = None,
        audit: Optional[AuditService] = None,
    ) -> None:
        self._repo = repo or CredentialRepository()
        self._grants = grant_repo or AccessGrantRepository()
        self._audit = audit or AuditService()

    def create_credential(
        self,
        *,
        gateway_id: str,
        owner_id: str,
        name: str,
        credential_type: Union[CredentialType, str],
        description: Optional[str] = None,
        public_key: Optional[str] = None,
        secret: Optional[str] = None,
        actor_id: Optional[str] = None,
    ) -> StoredCredential:
        gateway_id = require_text(gateway_id, "gatewayId")
        owner_id = require_text(owner_id, "ownerId")
        if owner_id != gateway_id:
            owner_id = user_owner_id(owner_id, gateway_id)
        name = require_text(name, "name")
        if not isinstance(credential_type, CredentialType):
            try:
                credential_type = CredentialType(require_text(credential_type, "type").upper())
            except ValueError as exc:
                allowed = ", ".join(member.value for member in CredentialType)
                raise ValidationError(f"type must be one of {allowed}") from exc

        def _create(session) -> StoredCredential:
            record = CredentialRecord(
                gateway_id=gateway_id,
                owner_id=owner_id,
                name=name,
                credential_type=credential_type.value,
                description=description,
                public_key=public_key,
                secret=secret,
            )
            return _record_to_credential(self._repo.save(record, session=session))

        credential = run_in_session(_create)
        LOGGER.info("Stored %s credential %s for %s", credential.credential_type.value, credential.token, owner_id)
        self._audit.record_event(
            actor_id=actor_id,
            action="credential.create",
            target_type="credential",
            target_id=credential.token,
            metadata={"gatewayId": gateway_id, "ownerId": owner_id, "type": credential.credential_type.value},
        )
        return credential

    def get_credential_summary(self, token: str) -> StoredCredential:
        token = require_text(token, "token")

        def _get(session) -> StoredCredential:
            record = self._repo.get(token, session=session)
            if record is None:
                raise CredentialNotFoundError(token)
            return _record_to_credential(record)

        return run_in_session(_get)

    def list_credentials(self, gateway_id: str, owner_id: Optional[str] = None) -> list[StoredCredential]:
        gateway_id = require_text(gateway_id, "gatewayId")
        if owner_id and owner_id != gateway_id:
            owner_id = user_owner_id(owner_id, gateway_id)

        def _list(session) -> list[StoredCredential]:
            records = self._repo.list(gateway_id=gateway_id, owner_id=owner_id, session=session)
            return [_record_to_credential(record) for record in records]

        return run_in_session(_list)

    def delete_credential(self, token: str, *, actor_id: Optional[str] = None) -> None:
        """Remove a credential; refused while any access grant still points at it."""

        token = require_text(token, "token")

        def _delete(session) -> None:
            record = self._repo.get(token, session=session)
            if record is None:
                raise CredentialNotFoundError(token)
            grants = self._grants.list(credential_token=token, session=session)
            if grants:
                raise CredentialInUseError(token, [grant.id for grant in grants])
            self._repo.delete(record, session=session)

        run_in_session(_delete)
        LOGGER.info("Deleted credential %s", token)
        self._audit.record_event(
            actor_id=actor_id,
            action="credential.delete",
            target_type="credential",
            target_id=token,
        )


def _record_to_credential(record: CredentialRecord) -> StoredCredential:
    return StoredCredential(
        token=record.token,
        gateway_id=record.gateway_id,
        owner_id=record.owner_id,
        name=record.name,
        credential_type=CredentialType(record.credential_type),
        persisted_at=record.persisted_at,
        description=record.description,
        public_key=record.public_key,
    )


__all__ = ["CredentialService"]
