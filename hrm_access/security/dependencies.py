from __future__ import annotations

import logging
from collections.abc import Callable

from fastapi import Depends, HTTPException, Request, status

from hrm_access.security.engine import AuthorizationEngine
from hrm_access.security.session_store import SessionStore
from hrm_access.security.user import User
from hrm_access.settings import Settings

logger = logging.getLogger(__name__)


def get_access_engine(request: Request) -> AuthorizationEngine:
    engine = getattr(request.app.state, "access_engine", None)
    if engine is None:
        raise RuntimeError("Access engine not loaded. Did app startup run?")
    return engine


def get_session_store(request: Request) -> SessionStore:
    store = getattr(request.app.state, "session_store", None)
    if store is None:
        raise RuntimeError("Session store not loaded. Did app startup run?")
    return store


def get_app_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        raise RuntimeError("Settings not loaded. Did app startup run?")
    return settings


def extract_session_token(request: Request, settings: Settings = Depends(get_app_settings)) -> str | None:
    """
    Session token of this request: `Authorization: Bearer <token>` first, then the session cookie.

    A present but malformed header is a client error (400), not an anonymous request.
    """

    raw = request.headers.get("Authorization")
    if raw:
        prefix = "Bearer "
        if not raw.startswith(prefix):
            logger.warning("Invalid Authorization header format path=%s method=%s", request.url.path, request.method)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid Authorization. Expected 'Bearer <token>'.",
            )

        token = raw[len(prefix) :].strip()
        if not token:
            logger.warning("Empty bearer token path=%s method=%s", request.url.path, request.method)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid Authorization. Missing token after 'Bearer'.",
            )
        return token

    return request.cookies.get(settings.session_cookie_name)


def get_optional_user(
    token: str | None = Depends(extract_session_token),
    store: SessionStore = Depends(get_session_store),
) -> User | None:
    return store.user_for_token(token)


def get_current_user(user: User | None = Depends(get_optional_user)) -> User:
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return user


def enforce_route_access(
    request: Request,
    engine: AuthorizationEngine = Depends(get_access_engine),
    user: User | None = Depends(get_optional_user),
) -> None:
    """
    Global route guard (configuration-driven).

    Paths without an entry in the route table pass through untouched; guarded
    paths need a signed-in user who passes ``can_access_route``.
    """

    path = request.url.path
    if not engine.is_guarded_route(path):
        return

    if user is None:
        logger.info("Guarded route requested without a session path=%s method=%s", path, request.method)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")

    if not engine.can_access_route(user, path):
        logger.info("Route access denied user_id=%s path=%s", user.id, path)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")


def require_operation(operation: str) -> Callable[..., User]:
    """
    Dependency factory for handlers that perform a sensitive operation.

        @router.delete("/employees/{id}", dependencies=[Depends(require_operation("delete:employee"))])
    """

    def dependency(
        engine: AuthorizationEngine = Depends(get_access_engine),
        user: User = Depends(get_current_user),
    ) -> User:
        if not engine.can_perform_sensitive_operation(user, operation):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=f"Operation not permitted: {operation}")
        return user

    return dependency
