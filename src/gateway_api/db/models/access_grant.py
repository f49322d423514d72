"""ORM model for credential-to-resource access grants."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ..base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AccessGrantRecord(Base):
    __tablename__ = "resource_access_grants"
    __table_args__ = (
        Index("ix_resource_access_grants_resource", "resource_type", "resource_id"),
        Index("ix_resource_access_grants_owner", "owner_id", "owner_type"),
        Index("ix_resource_access_grants_credential", "credential_token"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    resource_type: Mapped[str] = mapped_column(String(32), nullable=False)
    resource_id: Mapped[str] = mapped_column(String(255), nullable=False)
    owner_id: Mapped[str] = mapped_column(String(255), nullable=False)
    owner_type: Mapped[str] = mapped_column(String(16), nullable=False)
    gateway_id: Mapped[str] = mapped_column(String(255), nullable=False)
    credential_token: Mapped[str] = mapped_column(String(255), nullable=False)
    login_username: Mapped[str | None] = mapped_column(String(255), nullable=True)
    enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        nullable=False,
    )
