"""
Pytest fixtures for the test suite.

Data-layer tests get a fresh in-memory SQLite engine per test, so nothing
leaks between tests. Security tests use the in-memory repository and
session slot.
"""
from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from hrm_access.db.init_db import seed_demo_users
from hrm_access.db.session import make_session_factory
from hrm_access.security.config import load_access_config
from hrm_access.security.engine import AuthorizationEngine
from hrm_access.security.passwords import PasswordHasher
from hrm_access.security.repository import InMemoryUserRepository
from hrm_access.security.session_store import SessionStore
from hrm_access.security.storage import InMemorySessionStorage
from hrm_access.settings import Settings


TEST_DB_URL = "sqlite://"
TEST_SECRET = "test-session-secret-0123456789abcdef"


@pytest.fixture
def engine():
    """Create a fresh in-memory SQLite engine for each test."""
    return create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )


@pytest.fixture
def tables(engine):
    """Create all ORM tables on the test engine."""
    from hrm_access.db.base import Base
    import hrm_access.models.security  # noqa: F401  (register tables)

    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture
def session_factory(tables):
    """Session factory bound to the per-test engine; the database dies with it."""
    return make_session_factory(tables)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        db_url=TEST_DB_URL,
        session_secret=TEST_SECRET,
        password_time_cost=1,
        password_memory_cost=8,
        password_parallelism=1,
    )


@pytest.fixture
def session_secret() -> str:
    return TEST_SECRET


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def repository(settings, hasher) -> InMemoryUserRepository:
    repo = InMemoryUserRepository()
    seed_demo_users(repo, settings, hasher)
    return repo


@pytest.fixture
def storage() -> InMemorySessionStorage:
    return InMemorySessionStorage()


@pytest.fixture
def store(repository, storage, hasher, session_secret) -> SessionStore:
    s = SessionStore(repository, storage, session_secret=session_secret, hasher=hasher)
    s.resolve()
    return s


@pytest.fixture
def access_engine() -> AuthorizationEngine:
    return AuthorizationEngine(load_access_config())


@pytest.fixture
def admin(repository):
    return repository.find_by_id("1")


@pytest.fixture
def hr_user(repository):
    return repository.find_by_id("2")


@pytest.fixture
def manager(repository):
    return repository.find_by_id("3")


@pytest.fixture
def employee(repository):
    return repository.find_by_id("4")


@pytest.fixture
def client(settings):
    from fastapi.testclient import TestClient

    from hrm_access.main import create_app

    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def login(client):
    def _login(email: str, password: str = "demo123"):
        return client.post("/auth/login", json={"email": email, "password": password})

    return _login
