"""Service layer for the level-scoped preference store."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from sqlalchemy.exc import IntegrityError

from gateway_api.service.audit import AuditService
from gateway_api.db.models import PreferenceRecord
from gateway_api.db.session import run_in_session
from gateway_api.domain.preferences import PreferenceLevel, PreferenceResourceType, StoredPreference, user_owner_id
from gateway_api.repo.preferences import GroupSelectionRepository, PreferenceRepository
from gateway_api.service.errors import require_owner_id, require_text

LOGGER = logging.getLogger(__name__)


class PreferenceService:
    """Persists key/value settings per (resource type, resource, owner, level).

    The store is key-agnostic: any string key is accepted here and validation
    against the per-resource key enums happens at the API boundary.
    """

    def __init__(
        self,
        repo: Optional[PreferenceRepository] = None,
        selection_repo: Optional[GroupSelectionRepository] = None,
        audit: Optional[AuditService] = None,
    ) -> None:
        self._repo = repo or PreferenceRepository()
        self._selections = selection_repo or GroupSelectionRepository()
        self._audit = audit or AuditService()

    def set_preference(
        self,
        resource_type: PreferenceResourceType,
        resource_id: str,
        owner_id: str,
        level: PreferenceLevel,
        key: str,
        value: str,
        enforced: bool = False,
        *,
        actor_id: Optional[str] = None,
    ) -> StoredPreference:
        resource_id = require_text(resource_id, "resourceId")
        owner_id = require_owner_id(owner_id, level)
        key = require_text(key, "key")
        value = "" if value is None else str(value)

        def _upsert(session):
            record = self._repo.upsert(
                resource_type=resource_type.value,
                resource_id=resource_id,
                owner_id=owner_id,
                level=level.value,
                key=key,
                value=value,
                enforced=bool(enforced),
                session=session,
            )
            return _record_to_preference(record)

        try:
            stored = run_in_session(_upsert)
        except IntegrityError:
            # A concurrent writer inserted the same composite key first; overwrite it.
            LOGGER.debug("Preference insert raced for %s/%s key=%s; retrying as update", resource_id, owner_id, key)
            stored = run_in_session(_upsert)

        self._audit.record_event(
            actor_id=actor_id,
            action="preference.set",
            target_type="preference",
            target_id=f"{resource_type.value}:{resource_id}",
            metadata={"ownerId": owner_id, "level": level.value, "key": key, "enforced": bool(enforced)},
        )
        return stored

    def set_preferences(
        self,
        resource_type: PreferenceResourceType,
        resource_id: str,
        owner_id: str,
        level: PreferenceLevel,
        preferences: Mapping[str, str],
        enforced: bool = False,
        *,
        actor_id: Optional[str] = None,
    ) -> list[StoredPreference]:
        """Upsert each key on its own; a failure leaves earlier keys committed."""

        return [
            self.set_preference(
                resource_type,
                resource_id,
                owner_id,
                level,
                key,
                value,
                enforced,
                actor_id=actor_id,
            )
            for key, value in preferences.items()
        ]

    def get_preferences_at_level(
        self,
        resource_type: PreferenceResourceType,
        resource_id: str,
        owner_id: str,
        level: PreferenceLevel,
    ) -> dict[str, str]:
        return {
            item.key: item.value
            for item in self.get_preferences_at_level_detailed(resource_type, resource_id, owner_id, level)
        }

    def get_preferences_at_level_detailed(
        self,
        resource_type: PreferenceResourceType,
        resource_id: str,
        owner_id: str,
        level: PreferenceLevel,
    ) -> list[StoredPreference]:
        owner_id = require_owner_id(owner_id, level)

        def _list(session):
            records = self._repo.list_at_level(
                resource_type=resource_type.value,
                resource_id=resource_id,
                owner_id=owner_id,
                level=level.value,
                session=session,
            )
            return [_record_to_preference(record) for record in records]

        return run_in_session(_list)

    def delete_preference(
        self,
        resource_type: PreferenceResourceType,
        resource_id: str,
        owner_id: str,
        level: PreferenceLevel,
        key: str,
        *,
        actor_id: Optional[str] = None,
    ) -> None:
        owner_id = require_owner_id(owner_id, level)

        def _delete(session) -> bool:
            return self._repo.delete(
                resource_type=resource_type.value,
                resource_id=resource_id,
                owner_id=owner_id,
                level=level.value,
                key=key,
                session=session,
            )

        if not run_in_session(_delete):
            return
        self._audit.record_event(
            actor_id=actor_id,
            action="preference.delete",
            target_type="preference",
            target_id=f"{resource_type.value}:{resource_id}",
            metadata={"ownerId": owner_id, "level": level.value, "key": key},
        )

    def delete_all_preferences(
        self,
        resource_type: PreferenceResourceType,
        resource_id: str,
        owner_id: str,
        level: PreferenceLevel,
        *,
        actor_id: Optional[str] = None,
    ) -> int:
        owner_id = require_owner_id(owner_id, level)

        def _delete(session) -> int:
            return self._repo.delete_level(
                resource_type=resource_type.value,
                resource_id=resource_id,
                owner_id=owner_id,
                level=level.value,
                session=session,
            )

        removed = run_in_session(_delete)
        if removed:
            LOGGER.info(
                "Removed %d %s preference(s) for %s %s owner=%s",
                removed,
                level.value,
                resource_type.value,
                resource_id,
                owner_id,
            )
            self._audit.record_event(
                actor_id=actor_id,
                action="preference.delete_all",
                target_type="preference",
                target_id=f"{resource_type.value}:{resource_id}",
                metadata={"ownerId": owner_id, "level": level.value, "removed": removed},
            )
        return removed

    def set_group_selection(
        self,
        gateway_id: str,
        user_id: str,
        resource_type: PreferenceResourceType,
        resource_id: str,
        selection_key: str,
        selected_group_id: str,
        *,
        actor_id: Optional[str] = None,
    ) -> None:
        """Record which group's value a user picked for a conflicting key."""

        gateway_id = require_text(gateway_id, "gatewayId")
        owner = user_owner_id(require_text(user_id, "userId"), gateway_id)
        resource_id = require_text(resource_id, "resourceId")
        selection_key = require_text(selection_key, "selectionKey")
        selected_group_id = require_text(selected_group_id, "selectedGroupId")

        def _save(session) -> None:
            self._selections.upsert(
                gateway_id=gateway_id,
                user_id=owner,
                resource_type=resource_type.value,
                resource_id=resource_id,
                selection_key=selection_key,
                selected_group_id=selected_group_id,
                session=session,
            )

        run_in_session(_save)
        self._audit.record_event(
            actor_id=actor_id,
            action="preference.select_group",
            target_type="preference",
            target_id=f"{resource_type.value}:{resource_id}",
            metadata={"userId": owner, "key": selection_key, "groupId": selected_group_id},
        )


def _record_to_preference(record: PreferenceRecord) -> StoredPreference:
    return StoredPreference(
        resource_type=PreferenceResourceType(record.resource_type),
        resource_id=record.resource_id,
        owner_id=record.owner_id,
        level=PreferenceLevel(record.level),
        key=record.key,
        value=record.value,
        enforced=bool(record.enforced),
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


__all__ = ["PreferenceService"]
