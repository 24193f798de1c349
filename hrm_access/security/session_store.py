"""
Session store: who is signed in, plus account administration.

State machine::

    uninitialized --resolve()--> loading --> authenticated | anonymous
    anonymous     --sign_in()--> loading --> authenticated
    authenticated --sign_out()-> loading --> anonymous

A failed operation always lands back in a defined state (the one before the
attempt, or ``anonymous`` when resolution itself fails).

The persisted slot holds a signed token naming the user id, never the user
record itself, so the user and its permissions are always re-read from the
repository.

The state machine models one client (a single app instance or script). A
server with many clients must not read ``user``; it issues a token per client
(``authenticate`` + ``issue_token``) and resolves each request with
``user_for_token``.
"""

from __future__ import annotations

import logging
import time
import uuid
from enum import Enum

import jwt

from hrm_access.security.catalog import ASSIGNABLE_ROLES, Role, permissions_for_role
from hrm_access.security.engine import has_permission
from hrm_access.security.errors import AlreadyExists, InvalidCredentials, NotFound, ProtectedAccount, Unauthorized
from hrm_access.security.passwords import PasswordHasher
from hrm_access.security.repository import UserRepository
from hrm_access.security.storage import CURRENT_USER_KEY, SessionStorage
from hrm_access.security.user import User, UserUpdate

logger = logging.getLogger(__name__)

_TOKEN_ALGORITHM = "HS256"
DEFAULT_SESSION_TTL_SECONDS = 8 * 60 * 60


class SessionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


class SessionStore:
    def __init__(
        self,
        repository: UserRepository,
        storage: SessionStorage,
        *,
        session_secret: str,
        session_ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS,
        hasher: PasswordHasher | None = None,
    ) -> None:
        if not session_secret:
            raise ValueError("session_secret must not be empty")
        self._repository = repository
        self._storage = storage
        self._secret = session_secret
        self._ttl = session_ttl_seconds
        self._hasher = hasher or PasswordHasher()

        self._state = SessionState.UNINITIALIZED
        self._user: User | None = None

    # ---- Session state --------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def user(self) -> User | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._state is SessionState.AUTHENTICATED

    @property
    def is_loading(self) -> bool:
        """True until the session is resolved; callers should not decide access yet."""
        return self._state in (SessionState.UNINITIALIZED, SessionState.LOADING)

    def _settle(self, user: User | None) -> None:
        self._user = user
        self._state = SessionState.AUTHENTICATED if user else SessionState.ANONYMOUS

    def resolve(self) -> User | None:
        """Load the persisted session, if any."""

        self._state = SessionState.LOADING
        try:
            user = self.get_current_user()
        except Exception:
            logger.exception("Session resolution failed; continuing anonymous")
            user = None
        self._settle(user)
        return user

    # ---- Sign-in / sign-out ---------------------------------------------------------

    def authenticate(self, email: str, password: str) -> User:
        """
        Check credentials without touching this store's session.

        Multi-client callers (the HTTP app) use this with ``issue_token`` and
        ``user_for_token`` so each client carries its own token.
        """

        user = self._repository.find_by_email(email)
        if user is None or not self._hasher.verify(password, self._repository.password_hash_for(user.id)):
            logger.info("Sign-in rejected")
            raise InvalidCredentials()
        return user

    def sign_in(self, email: str, password: str) -> User:
        previous_state, previous_user = self._state, self._user
        self._state = SessionState.LOADING

        try:
            user = self.authenticate(email, password)
            self._storage.set(CURRENT_USER_KEY, self.issue_token(user))
        except Exception:
            self._state, self._user = previous_state, previous_user
            raise

        logger.info("Signed in user_id=%s role=%s", user.id, Role(user.role).value)
        self._settle(user)
        return user

    def sign_out(self) -> None:
        self._state = SessionState.LOADING
        try:
            self._storage.delete(CURRENT_USER_KEY)
        finally:
            self._settle(None)

    def get_current_user(self) -> User | None:
        return self.user_for_token(self._storage.get(CURRENT_USER_KEY))

    def user_for_token(self, token: str | None) -> User | None:
        """
        Verify a session token and load its user.

        Missing, malformed, expired or foreign-signed tokens and tokens naming
        a deleted account all yield ``None``.
        """

        if not token:
            return None

        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[_TOKEN_ALGORITHM],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            logger.info("Session token expired")
            return None
        except jwt.InvalidTokenError as exc:
            logger.warning("Session token rejected: %s", type(exc).__name__)
            return None

        user = self._repository.find_by_id(str(claims["sub"]))
        if user is None:
            logger.info("Session token names an unknown user")
        return user

    def issue_token(self, user: User) -> str:
        now = int(time.time())
        payload = {"sub": user.id, "iat": now, "exp": now + self._ttl}
        return jwt.encode(payload, self._secret, algorithm=_TOKEN_ALGORITHM)

    # ---- Account administration -----------------------------------------------------

    def _require(self, requesting_user: User | None, permission: str) -> None:
        if not has_permission(requesting_user, permission):
            logger.warning(
                "Privileged operation refused user_id=%s permission=%s",
                getattr(requesting_user, "id", None),
                permission,
            )
            raise Unauthorized(f"Unauthorized: '{permission}' is required")

    def create_user_account(
        self,
        email: str,
        password: str,
        name: str,
        role: Role | str,
        requesting_user: User | None,
    ) -> User:
        self._require(requesting_user, "users:create")

        role = Role(role)
        if role not in ASSIGNABLE_ROLES:
            raise ValueError(f"Accounts cannot be created with role {role.value!r}")

        if self._repository.find_by_email(email) is not None:
            raise AlreadyExists("User already exists")

        user = User(
            id=uuid.uuid4().hex,
            email=email,
            name=name,
            role=role,
            permissions=permissions_for_role(role),
        )
        created = self._repository.insert(user, self._hasher.hash(password))
        logger.info("Created user_id=%s role=%s by=%s", created.id, role.value, requesting_user.id)
        return created

    def update_user(self, user_id: str, changes: UserUpdate, requesting_user: User | None) -> User:
        self._require(requesting_user, "users:update")

        current = self._repository.find_by_id(user_id)
        if current is None:
            raise NotFound("User not found")

        if changes.email is not None:
            if not changes.email.strip():
                raise ValueError("email must not be blank")
            if changes.email != current.email and self._repository.find_by_email(changes.email):
                raise AlreadyExists("User already exists")

        updated = self._repository.update(changes.apply(current))
        if self._user is not None and self._user.id == updated.id:
            self._user = updated
        return updated

    def delete_user(self, user_id: str, requesting_user: User | None) -> None:
        self._require(requesting_user, "users:delete")

        target = self._repository.find_by_id(user_id)
        if target is None:
            raise NotFound("User not found")
        if Role(target.role) is Role.ADMIN:
            raise ProtectedAccount("Cannot delete administrator account")

        self._repository.delete(user_id)
        logger.info("Deleted user_id=%s by=%s", user_id, requesting_user.id)

    def list_users(self, requesting_user: User | None) -> list[User]:
        """All accounts except administrators, oldest first."""

        self._require(requesting_user, "users:read")
        return [u for u in self._repository.list_all() if Role(u.role) is not Role.ADMIN]


def open_session_store(
    repository: UserRepository,
    storage: SessionStorage,
    *,
    session_secret: str,
    session_ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS,
    hasher: PasswordHasher | None = None,
) -> SessionStore:
    """Create a store and resolve any persisted session right away."""

    store = SessionStore(
        repository,
        storage,
        session_secret=session_secret,
        session_ttl_seconds=session_ttl_seconds,
        hasher=hasher,
    )
    store.resolve()
    return store
