"""
Authorization engine.

Answers three questions for a user snapshot (or ``None`` when nobody is
signed in):

    has_permission(user, "employees:read")
    can_access_route(user, "/employees")
    can_perform_sensitive_operation(user, "delete:employee")

Routes are allow-by-default (only listed paths are guarded); sensitive
operations are deny-by-default (an unlisted operation is refused). Both tables
come from ``AccessConfig`` so new entries need no code change here.

This module has no FastAPI dependency.
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol

from hrm_access.security.catalog import WILDCARD, Role
from hrm_access.security.config import AccessConfig, Requirement

logger = logging.getLogger(__name__)


class Principal(Protocol):
    role: Role
    permissions: frozenset[str]


def has_permission(user: Principal | None, permission: str) -> bool:
    if user is None:
        return False
    if WILDCARD in user.permissions:
        return True
    return permission in user.permissions


def has_role(user: Principal | None, roles: Iterable[Role | str]) -> bool:
    if user is None:
        return False
    return Role(user.role) in {Role(r) for r in roles}


def _satisfies(user: Principal, requirement: Requirement) -> bool:
    if requirement.roles:
        return has_role(user, requirement.roles)
    return has_permission(user, requirement.permission or "")


class AuthorizationEngine:
    """
    Route and operation checks over a loaded ``AccessConfig``.

    Usage:
        engine = AuthorizationEngine(load_access_config())
        engine.can_access_route(user, "/admin/users")
    """

    def __init__(self, config: AccessConfig) -> None:
        self._config = config

    @property
    def config(self) -> AccessConfig:
        return self._config

    # Re-exported so callers holding an engine need nothing else.
    has_permission = staticmethod(has_permission)
    has_role = staticmethod(has_role)

    def is_guarded_route(self, route_path: str) -> bool:
        return self._config.route_requirement(route_path) is not None

    def can_access_route(self, user: Principal | None, route_path: str) -> bool:
        if user is None:
            logger.debug("Route denied (anonymous) path=%s", route_path)
            return False

        requirement = self._config.route_requirement(route_path)
        if requirement is None:
            return True

        allowed = _satisfies(user, requirement)
        logger.debug(
            "Route %s role=%s path=%s requirement=%s",
            "allowed" if allowed else "denied",
            Role(user.role).value,
            route_path,
            requirement,
        )
        return allowed

    def can_perform_sensitive_operation(self, user: Principal | None, operation: str) -> bool:
        if user is None:
            logger.debug("Operation denied (anonymous) operation=%s", operation)
            return False

        requirement = self._config.operation_requirement(operation)
        if requirement is None:
            logger.debug("Operation denied (unmapped) operation=%s", operation)
            return False

        allowed = _satisfies(user, requirement)
        logger.debug(
            "Operation %s role=%s operation=%s requirement=%s",
            "allowed" if allowed else "denied",
            Role(user.role).value,
            operation,
            requirement,
        )
        return allowed
