"""Service layer for the audit trail of grant, preference, credential and group changes."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from gateway_api.db.models import AuditEventRecord
from gateway_api.db.session import run_in_session
from gateway_api.repo.audit import AuditRepository
from gateway_api.service.errors import require_text


@dataclass(frozen=True)
class AuditEvent:
    event_id: str
    actor_id: Optional[str]
    action: str
    target_type: str
    target_id: Optional[str]
    metadata: Optional[dict[str, Any]]
    created_at: datetime


class AuditService:
    def __init__(self, repo: Optional[AuditRepository] = None) -> None:
        self._repo = repo or AuditRepository()

    def record_event(
        self,
        *,
        actor_id: Optional[str],
        action: str,
        target_type: str,
        target_id: Optional[str],
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Append one event; metadata values that are not JSON types are stored as strings."""

        record = AuditEventRecord(
            actor_id=actor_id,
            action=action,
            target_type=target_type,
            target_id=target_id,
            details=json.dumps(dict(metadata), ensure_ascii=False, default=str) if metadata else None,
        )
        run_in_session(lambda session: self._repo.create_event(record, session=session))

    def list_events(
        self,
        target_type: str,
        target_id: Optional[str] = None,
        *,
        action: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[AuditEvent]:
        """Newest first, at most ``limit`` events (clamped to 1..200, default 50)."""

        target_type = require_text(target_type, "targetType")
        page_size = min(max(limit or 50, 1), 200)

        def _list(session):
            return self._repo.list_events(
                target_type=target_type,
                target_id=target_id,
                action=action,
                limit=page_size,
                session=session,
            )

        return [_record_to_event(row) for row in run_in_session(_list)]


def _record_to_event(row: AuditEventRecord) -> AuditEvent:
    metadata = None
    if row.details:
        try:
            metadata = json.loads(row.details)
        except json.JSONDecodeError:
            metadata = {"raw": row.details}
    return AuditEvent(
        event_id=row.id,
        actor_id=row.actor_id,
        action=row.action,
        target_type=row.target_type,
        target_id=row.target_id,
        metadata=metadata,
        created_at=row.created_at,
    )


__all__ = ["AuditEvent", "AuditService"]
