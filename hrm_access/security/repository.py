"""
User storage behind a small repository interface.

The session store only talks to ``UserRepository``; ``InMemoryUserRepository``
backs tests and throwaway demos, ``SqlUserRepository`` persists through
SQLAlchemy.
"""

from __future__ import annotations

import logging
from datetime import timezone
from typing import Protocol

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, sessionmaker

from hrm_access.models.security import UserAccount
from hrm_access.security.catalog import Role
from hrm_access.security.errors import NotFound
from hrm_access.security.user import User

logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    def find_by_email(self, email: str) -> User | None: ...

    def find_by_id(self, user_id: str) -> User | None: ...

    def password_hash_for(self, user_id: str) -> str | None: ...

    def list_all(self) -> list[User]: ...

    def insert(self, user: User, password_hash: str) -> User: ...

    def update(self, user: User) -> User: ...

    def delete(self, user_id: str) -> None: ...


class InMemoryUserRepository:
    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._password_hashes: dict[str, str] = {}

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def find_by_id(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def password_hash_for(self, user_id: str) -> str | None:
        return self._password_hashes.get(user_id)

    def list_all(self) -> list[User]:
        return sorted(self._users.values(), key=lambda u: u.created_at)

    def insert(self, user: User, password_hash: str) -> User:
        self._users[user.id] = user
        self._password_hashes[user.id] = password_hash
        return user

    def update(self, user: User) -> User:
        if user.id not in self._users:
            raise NotFound(f"User not found: {user.id}")
        self._users[user.id] = user
        return user

    def delete(self, user_id: str) -> None:
        if self._users.pop(user_id, None) is None:
            raise NotFound(f"User not found: {user_id}")
        self._password_hashes.pop(user_id, None)


def _to_user(row: UserAccount) -> User:
    created_at = row.created_at
    # SQLite drops tzinfo on the way back.
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return User(
        id=row.id,
        email=row.email,
        name=row.name,
        role=Role(row.role),
        permissions=frozenset(row.permissions),
        employee_id=row.employee_id,
        avatar=row.avatar,
        created_at=created_at,
    )


class SqlUserRepository:
    """One short-lived ORM session per call."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def find_by_email(self, email: str) -> User | None:
        with self._session_factory() as db:
            row = db.execute(select(UserAccount).where(UserAccount.email == email)).scalar_one_or_none()
            return _to_user(row) if row else None

    def find_by_id(self, user_id: str) -> User | None:
        with self._session_factory() as db:
            row = db.get(UserAccount, user_id)
            return _to_user(row) if row else None

    def password_hash_for(self, user_id: str) -> str | None:
        with self._session_factory() as db:
            return db.execute(
                select(UserAccount.password_hash).where(UserAccount.id == user_id)
            ).scalar_one_or_none()

    def list_all(self) -> list[User]:
        with self._session_factory() as db:
            rows = db.scalars(select(UserAccount).order_by(UserAccount.created_at, UserAccount.id)).all()
            return [_to_user(r) for r in rows]

    def insert(self, user: User, password_hash: str) -> User:
        with self._session_factory() as db:
            row = UserAccount(
                id=user.id,
                email=user.email,
                name=user.name,
                role=Role(user.role).value,
                permissions=sorted(user.permissions),
                employee_id=user.employee_id,
                avatar=user.avatar,
                password_hash=password_hash,
                created_at=user.created_at,
            )
            db.add(row)
            db.commit()
            logger.debug("Inserted user id=%s role=%s", user.id, row.role)
            return _to_user(row)

    def update(self, user: User) -> User:
        with self._session_factory() as db:
            row = db.get(UserAccount, user.id)
            if row is None:
                raise NotFound(f"User not found: {user.id}")
            row.email = user.email
            row.name = user.name
            row.employee_id = user.employee_id
            row.avatar = user.avatar
            db.commit()
            return _to_user(row)

    def delete(self, user_id: str) -> None:
        with self._session_factory() as db:
            result = db.execute(delete(UserAccount).where(UserAccount.id == user_id))
            if result.rowcount == 0:
                raise NotFound(f"User not found: {user_id}")
            db.commit()
