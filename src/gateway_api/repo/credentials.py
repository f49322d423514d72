"""Repository for credential catalog records."""

from __future__ import annotations

from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from gateway_api.db.models import CredentialRecord


class CredentialRepository:
    def get(self, token: str, *, session: Session) -> Optional[CredentialRecord]:
        return session.get(CredentialRecord, token)

    def get_many(self, tokens: Iterable[str], *, session: Session) -> dict[str, CredentialRecord]:
        wanted = list(tokens)
        if not wanted:
            return {}
        stmt = select(CredentialRecord).where(CredentialRecord.token.in_(wanted))
        return {record.token: record for record in session.execute(stmt).scalars().all()}

    def list(
        self,
        *,
        gateway_id: str,
        owner_id: Optional[str] = None,
        session: Session,
    ) -> list[CredentialRecord]:
        stmt = select(CredentialRecord).where(CredentialRecord.gateway_id == gateway_id)
        if owner_id:
            stmt = stmt.where(CredentialRecord.owner_id == owner_id)
        stmt = stmt.order_by(CredentialRecord.persisted_at, CredentialRecord.token)
        return list(session.execute(stmt).scalars().all())

    def save(self, record: CredentialRecord, *, session: Session) -> CredentialRecord:
        session.add(record)
        session.flush()
        return record

    def delete(self, record: CredentialRecord, *, session: Session) -> None:
        session.delete(record)


__all__ = ["CredentialRepository"]
