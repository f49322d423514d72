"""Repository for resource access grant records."""

from __future__ import annotations

from typing import Iterable, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from gateway_api.db.models import AccessGrantRecord


class AccessGrantRepository:
    def get(self, grant_id: int, *, session: Session) -> Optional[AccessGrantRecord]:
        return session.get(AccessGrantRecord, grant_id)

    def save(self, record: AccessGrantRecord, *, session: Session) -> AccessGrantRecord:
        session.add(record)
        session.flush()
        return record

    def delete(self, record: AccessGrantRecord, *, session: Session) -> None:
        session.delete(record)

    def find_duplicate(
        self,
        *,
        resource_type: str,
        resource_id: str,
        owner_id: str,
        owner_type: str,
        credential_token: str,
        exclude_id: Optional[int] = None,
        session: Session,
    ) -> Optional[AccessGrantRecord]:
        stmt = select(AccessGrantRecord).where(
            AccessGrantRecord.resource_type == resource_type,
            AccessGrantRecord.resource_id == resource_id,
            AccessGrantRecord.owner_id == owner_id,
            AccessGrantRecord.owner_type == owner_type,
            AccessGrantRecord.credential_token == credential_token,
        )
        if exclude_id is not None:
            stmt = stmt.where(AccessGrantRecord.id != exclude_id)
        return session.execute(stmt.order_by(AccessGrantRecord.id)).scalars().first()

    def list(
        self,
        *,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        gateway_id: Optional[str] = None,
        owner_id: Optional[str] = None,
        owner_type: Optional[str] = None,
        credential_token: Optional[str] = None,
        enabled_only: bool = False,
        session: Session,
    ) -> list[AccessGrantRecord]:
        stmt = select(AccessGrantRecord)
        if resource_type:
            stmt = stmt.where(AccessGrantRecord.resource_type == resource_type)
        if resource_id:
            stmt = stmt.where(AccessGrantRecord.resource_id == resource_id)
        if gateway_id:
            stmt = stmt.where(AccessGrantRecord.gateway_id == gateway_id)
        if owner_id:
            stmt = stmt.where(AccessGrantRecord.owner_id == owner_id)
        if owner_type:
            stmt = stmt.where(AccessGrantRecord.owner_type == owner_type)
        if credential_token:
            stmt = stmt.where(AccessGrantRecord.credential_token == credential_token)
        if enabled_only:
            stmt = stmt.where(AccessGrantRecord.enabled.is_(True))
        return list(session.execute(stmt.order_by(AccessGrantRecord.id)).scalars().all())

    def list_reachable(
        self,
        *,
        gateway_id: str,
        user_owner_id: str,
        group_ids: Iterable[str],
        resource_type: Optional[str] = None,
        session: Session,
    ) -> list[AccessGrantRecord]:
        """Enabled grants in a gateway owned by the gateway, one of ``group_ids`` or the user."""

        owners = [
            (AccessGrantRecord.owner_type == "GATEWAY") & (AccessGrantRecord.owner_id == gateway_id),
            (AccessGrantRecord.owner_type == "USER") & (AccessGrantRecord.owner_id == user_owner_id),
        ]
        groups = list(group_ids)
        if groups:
            owners.append(
                (AccessGrantRecord.owner_type == "GROUP") & (AccessGrantRecord.owner_id.in_(groups))
            )
        stmt = select(AccessGrantRecord).where(
            AccessGrantRecord.gateway_id == gateway_id,
            AccessGrantRecord.enabled.is_(True),
            or_(*owners),
        )
        if resource_type:
            stmt = stmt.where(AccessGrantRecord.resource_type == resource_type)
        return list(session.execute(stmt.order_by(AccessGrantRecord.id)).scalars().all())


__all__ = ["AccessGrantRepository"]
