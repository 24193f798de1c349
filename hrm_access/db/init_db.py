from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import Engine

from hrm_access.db.base import Base
from hrm_access.security.catalog import Role, permissions_for_role
from hrm_access.security.passwords import PasswordHasher
from hrm_access.security.repository import UserRepository
from hrm_access.security.user import User
from hrm_access.settings import Settings

logger = logging.getLogger(__name__)

_SEED_CREATED_AT = datetime(2024, 1, 1, tzinfo=timezone.utc)


def demo_users(settings: Settings) -> list[User]:
    """The four built-in accounts, one per role."""

    def make(user_id: str, email: str, name: str, role: Role, employee_id: str | None = None) -> User:
        return User(
            id=user_id,
            email=email,
            name=name,
            role=role,
            permissions=permissions_for_role(role),
            employee_id=employee_id,
            created_at=_SEED_CREATED_AT,
        )

    return [
        make("1", settings.admin_email, "System Admin", Role.ADMIN),
        make("2", settings.hr_email, "HR Manager", Role.HR),
        make("3", settings.manager_email, "Department Manager", Role.MANAGER, employee_id="3"),
        make("4", settings.employee_email, "Regular Employee", Role.EMPLOYEE, employee_id="1"),
    ]


def seed_demo_users(repository: UserRepository, settings: Settings, hasher: PasswordHasher) -> int:
    """
    Insert the demo accounts that are missing. Returns how many were added.

    All demo accounts share ``settings.demo_password`` but each gets its own
    salted hash.
    """

    added = 0
    for user in demo_users(settings):
        if repository.find_by_id(user.id) or repository.find_by_email(user.email):
            continue
        repository.insert(user, hasher.hash(settings.demo_password))
        added += 1
    return added


def init_db(engine: Engine, repository: UserRepository, settings: Settings, hasher: PasswordHasher) -> None:
    """Create tables + seed demo accounts."""

    Base.metadata.create_all(bind=engine)
    added = seed_demo_users(repository, settings, hasher)
    if added:
        logger.info("Seeded %d demo accounts", added)
