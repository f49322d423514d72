"""Repository for group membership records."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from gateway_api.db.models import GroupMembershipRecord


class GroupMembershipRepository:
    def get(
        self,
        *,
        gateway_id: str,
        group_id: str,
        user_id: str,
        session: Session,
    ) -> Optional[GroupMembershipRecord]:
        stmt = select(GroupMembershipRecord).where(
            GroupMembershipRecord.gateway_id == gateway_id,
            GroupMembershipRecord.group_id == group_id,
            GroupMembershipRecord.user_id == user_id,
        )
        return session.execute(stmt).scalar_one_or_none()

    def add(
        self,
        *,
        gateway_id: str,
        group_id: str,
        user_id: str,
        session: Session,
    ) -> GroupMembershipRecord:
        existing = self.get(gateway_id=gateway_id, group_id=group_id, user_id=user_id, session=session)
        if existing:
            return existing
        record = GroupMembershipRecord(gateway_id=gateway_id, group_id=group_id, user_id=user_id)
        session.add(record)
        session.flush()
        return record

    def remove(
        self,
        *,
        gateway_id: str,
        group_id: str,
        user_id: str,
        session: Session,
    ) -> None:
        record = self.get(gateway_id=gateway_id, group_id=group_id, user_id=user_id, session=session)
        if record:
            session.delete(record)

    def list_user_groups(self, *, gateway_id: str, user_id: str, session: Session) -> list[str]:
        stmt = (
            select(GroupMembershipRecord.group_id)
            .where(
                GroupMembershipRecord.gateway_id == gateway_id,
                GroupMembershipRecord.user_id == user_id,
            )
            .order_by(GroupMembershipRecord.id)
        )
        return list(session.execute(stmt).scalars().all())

    def list_members(self, *, gateway_id: str, group_id: str, session: Session) -> list[GroupMembershipRecord]:
        stmt = (
            select(GroupMembershipRecord)
            .where(
                GroupMembershipRecord.gateway_id == gateway_id,
                GroupMembershipRecord.group_id == group_id,
            )
            .order_by(GroupMembershipRecord.user_id)
        )
        return list(session.execute(stmt).scalars().all())


__all__ = ["GroupMembershipRepository"]
