"""
Authorization core: permission catalog, authorization engine and session store.

This package has no dependency on FastAPI; ``hrm_access.security.dependencies``
is the only module that plugs it into the web app.
"""

from .catalog import ROLE_PERMISSIONS, WILDCARD, Role, permissions_for_role
from .config import AccessConfig, AccessConfigError, load_access_config
from .engine import AuthorizationEngine, has_permission, has_role
from .errors import AlreadyExists, AuthError, InvalidCredentials, NotFound, ProtectedAccount, Unauthorized
from .session_store import SessionState, SessionStore, open_session_store
from .user import User, UserUpdate

__all__ = [
    "ROLE_PERMISSIONS",
    "WILDCARD",
    "Role",
    "permissions_for_role",
    "AccessConfig",
    "AccessConfigError",
    "load_access_config",
    "AuthorizationEngine",
    "has_permission",
    "has_role",
    "AuthError",
    "InvalidCredentials",
    "Unauthorized",
    "NotFound",
    "AlreadyExists",
    "ProtectedAccount",
    "SessionState",
    "SessionStore",
    "open_session_store",
    "User",
    "UserUpdate",
]
