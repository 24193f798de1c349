from __future__ import annotations

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


def create_db_engine(db_url: str) -> Engine:
    """
    Build the engine for ``db_url``.

    In-memory SQLite gets a single shared connection, otherwise every pooled
    connection would see its own empty database.
    """

    if not db_url.startswith("sqlite"):
        return create_engine(db_url)

    kwargs: dict = {"connect_args": {"check_same_thread": False}}
    if db_url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return create_engine(db_url, **kwargs)


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False, class_=Session)
