from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from hrm_access.security.catalog import Role


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class User:
    """
    Authenticated principal.

    Credentials are deliberately not part of this object; the repository keeps
    the password hash next to the account so a ``User`` can be handed to any
    caller (or serialized) without leaking it.
    """

    id: str
    email: str
    name: str
    role: Role
    permissions: frozenset[str]
    employee_id: str | None = None
    avatar: str | None = None
    created_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class UserUpdate:
    """
    Partial update for an account.

    Only profile fields are here: ``role`` and ``permissions`` are fixed at
    creation. ``None`` means "leave unchanged".
    """

    name: str | None = None
    email: str | None = None
    employee_id: str | None = None
    avatar: str | None = None

    def apply(self, user: User) -> User:
        changes = {k: v for k, v in self.__dict__.items() if v is not None}
        return replace(user, **changes)
