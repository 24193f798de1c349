"""
Permission catalog: the fixed role → permission mapping.

Permission strings are opaque ``resource:action[:scope]`` tokens compared by
exact equality. The single token ``*`` is the admin wildcard.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


WILDCARD = "*"


class Role(str, Enum):
    ADMIN = "admin"
    HR = "hr"
    MANAGER = "manager"
    EMPLOYEE = "employee"


# Roles an administrator may assign when creating an account.
ASSIGNABLE_ROLES: frozenset[Role] = frozenset({Role.HR, Role.MANAGER, Role.EMPLOYEE})


ROLE_PERMISSIONS: Mapping[Role, frozenset[str]] = MappingProxyType(
    {
        Role.ADMIN: frozenset({WILDCARD}),
        Role.HR: frozenset(
            {
                "employees:read",
                "employees:write",
                "performance:read",
                "performance:write",
                "analytics:read:basic",
            }
        ),
        Role.MANAGER: frozenset(
            {
                "employees:read",
                "performance:read",
                "performance:write:team",
                "analytics:read:basic",
            }
        ),
        Role.EMPLOYEE: frozenset(
            {
                "employees:read:own",
                "performance:read:own",
            }
        ),
    }
)


def permissions_for_role(role: Role | str) -> frozenset[str]:
    """Return the permission set a new account with ``role`` receives."""

    return ROLE_PERMISSIONS[Role(role)]
