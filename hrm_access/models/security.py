from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from hrm_access.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserAccount(Base):
    __tablename__ = "user_accounts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)

    # admin | hr | manager | employee
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    # Snapshot of the role's catalog entry taken at creation.
    permissions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    employee_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(500), nullable=True)

    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)
