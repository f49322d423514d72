"""Repository for audit events."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from gateway_api.db.models import AuditEventRecord


class AuditRepository:
    def create_event(self, record: AuditEventRecord, *, session: Session) -> None:
        session.add(record)

    def list_events(
        self,
        *,
        target_type: str,
        target_id: Optional[str],
        action: Optional[str],
        limit: int,
        session: Session,
    ) -> list[AuditEventRecord]:
        stmt = select(AuditEventRecord).where(AuditEventRecord.target_type == target_type)
        if target_id:
            stmt = stmt.where(AuditEventRecord.target_id == target_id)
        if action:
            stmt = stmt.where(AuditEventRecord.action == action)
        stmt = stmt.order_by(AuditEventRecord.created_at.desc(), AuditEventRecord.id.desc()).limit(limit)
        return list(session.scalars(stmt))
