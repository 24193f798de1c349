from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from hrm_access.db.init_db import init_db
from hrm_access.db.session import create_db_engine, make_session_factory
from hrm_access.logging_config import configure_app_logging
from hrm_access.routers import access, admin, auth, health
from hrm_access.security.config import load_access_config
from hrm_access.security.dependencies import enforce_route_access
from hrm_access.security.engine import AuthorizationEngine
from hrm_access.security.errors import AuthError
from hrm_access.security.passwords import PasswordHasher
from hrm_access.security.repository import SqlUserRepository
from hrm_access.security.session_store import open_session_store
from hrm_access.security.storage import InMemorySessionStorage
from hrm_access.settings import Settings, get_settings

logger = logging.getLogger(__name__)


async def _auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


def create_app(settings: Settings | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        resolved = settings or get_settings()
        configure_app_logging(resolved.log_level)
        logger.info("App startup beginning")

        config_path = resolved.resolved_access_config_path()
        app.state.access_engine = AuthorizationEngine(load_access_config(config_path))
        logger.info("Loaded access config: %s", config_path)

        engine = create_db_engine(resolved.resolved_db_url())
        repository = SqlUserRepository(make_session_factory(engine))
        hasher = PasswordHasher(
            time_cost=resolved.password_time_cost,
            memory_cost=resolved.password_memory_cost,
            parallelism=resolved.password_parallelism,
        )
        init_db(engine, repository, resolved, hasher)
        logger.info("Database initialized (tables ensured + demo accounts seeded if needed)")

        # Each HTTP client carries its own token, so the store's own slot stays empty.
        app.state.settings = resolved
        app.state.session_store = open_session_store(
            repository,
            InMemorySessionStorage(),
            session_secret=resolved.session_secret,
            session_ttl_seconds=resolved.session_ttl_seconds,
            hasher=hasher,
        )

        yield
        # Shutdown
        engine.dispose()

    # Global dependency: guards every path listed in the route table.
    app = FastAPI(dependencies=[Depends(enforce_route_access)], lifespan=lifespan)
    app.add_exception_handler(AuthError, _auth_error_handler)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(admin.router)
    app.include_router(access.router)

    return app


app = create_app()
