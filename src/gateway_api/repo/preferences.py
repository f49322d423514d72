"""Repository for level-scoped preference records."""

from __future__ import annotations

from typing import Iterable, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from gateway_api.db.models import GroupSelectionRecord, PreferenceRecord


class PreferenceRepository:
    def list_at_level(
        self,
        *,
        resource_type: str,
        resource_id: str,
        owner_id: str,
        level: str,
        session: Session,
    ) -> list[PreferenceRecord]:
        stmt = (
            select(PreferenceRecord)
            .where(
                PreferenceRecord.resource_type == resource_type,
                PreferenceRecord.resource_id == resource_id,
                PreferenceRecord.owner_id == owner_id,
                PreferenceRecord.level == level,
            )
            .order_by(PreferenceRecord.key)
        )
        return list(session.execute(stmt).scalars().all())

    def list_for_owners(
        self,
        *,
        resource_type: str,
        resource_id: str,
        owner_ids: Iterable[str],
        level: str,
        session: Session,
    ) -> list[PreferenceRecord]:
        owners = list(owner_ids)
        if not owners:
            return []
        stmt = select(PreferenceRecord).where(
            PreferenceRecord.resource_type == resource_type,
            PreferenceRecord.resource_id == resource_id,
            PreferenceRecord.owner_id.in_(owners),
            PreferenceRecord.level == level,
        )
        return list(session.execute(stmt).scalars().all())

    def get(
        self,
        *,
        resource_type: str,
        resource_id: str,
        owner_id: str,
        level: str,
        key: str,
        session: Session,
    ) -> Optional[PreferenceRecord]:
        stmt = select(PreferenceRecord).where(
            PreferenceRecord.resource_type == resource_type,
            PreferenceRecord.resource_id == resource_id,
            PreferenceRecord.owner_id == owner_id,
            PreferenceRecord.level == level,
            PreferenceRecord.key == key,
        )
        return session.execute(stmt).scalar_one_or_none()

    def upsert(
        self,
        *,
        resource_type: str,
        resource_id: str,
        owner_id: str,
        level: str,
        key: str,
        value: str,
        enforced: bool,
        session: Session,
    ) -> PreferenceRecord:
        existing = self.get(
            resource_type=resource_type,
            resource_id=resource_id,
            owner_id=owner_id,
            level=level,
            key=key,
            session=session,
        )
        if existing:
            existing.value = value
            existing.enforced = enforced
            session.add(existing)
            return existing
        record = PreferenceRecord(
            resource_type=resource_type,
            resource_id=resource_id,
            owner_id=owner_id,
            level=level,
            key=key,
            value=value,
            enforced=enforced,
        )
        session.add(record)
        session.flush()
        return record

    def delete(
        self,
        *,
        resource_type: str,
        resource_id: str,
        owner_id: str,
        level: str,
        key: str,
        session: Session,
    ) -> bool:
        record = self.get(
            resource_type=resource_type,
            resource_id=resource_id,
            owner_id=owner_id,
            level=level,
            key=key,
            session=session,
        )
        if record is None:
            return False
        session.delete(record)
        return True

    def delete_level(
        self,
        *,
        resource_type: str,
        resource_id: str,
        owner_id: str,
        level: str,
        session: Session,
    ) -> int:
        result = session.execute(
            delete(PreferenceRecord).where(
                PreferenceRecord.resource_type == resource_type,
                PreferenceRecord.resource_id == resource_id,
                PreferenceRecord.owner_id == owner_id,
                PreferenceRecord.level == level,
            )
        )
        return result.rowcount or 0


class GroupSelectionRepository:
    def list_for_user(
        self,
        *,
        gateway_id: str,
        user_id: str,
        resource_type: str,
        resource_id: str,
        session: Session,
    ) -> list[GroupSelectionRecord]:
        stmt = select(GroupSelectionRecord).where(
            GroupSelectionRecord.gateway_id == gateway_id,
            GroupSelectionRecord.user_id == user_id,
            GroupSelectionRecord.resource_type == resource_type,
            GroupSelectionRecord.resource_id == resource_id,
        )
        return list(session.execute(stmt).scalars().all())

    def upsert(
        self,
        *,
        gateway_id: str,
        user_id: str,
        resource_type: str,
        resource_id: str,
        selection_key: str,
        selected_group_id: str,
        session: Session,
    ) -> GroupSelectionRecord:
        existing = session.execute(
            select(GroupSelectionRecord).where(
                GroupSelectionRecord.gateway_id == gateway_id,
                GroupSelectionRecord.user_id == user_id,
                GroupSelectionRecord.resource_type == resource_type,
                GroupSelectionRecord.resource_id == resource_id,
                GroupSelectionRecord.selection_key == selection_key,
            )
        ).scalar_one_or_none()
        if existing:
            existing.selected_group_id = selected_group_id
            session.add(existing)
            return existing
        record = GroupSelectionRecord(
            gateway_id=gateway_id,
            user_id=user_id,
            resource_type=resource_type,
            resource_id=resource_id,
            selection_key=selection_key,
            selected_group_id=selected_group_id,
        )
        session.add(record)
        return record


__all__ = ["GroupSelectionRepository", "PreferenceRepository"]
