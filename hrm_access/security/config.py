from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from hrm_access.security.catalog import Role


DEFAULT_ACCESS_CONFIG_PATH = Path(__file__).with_name("access_config.yaml")


class AccessConfigError(ValueError):
    """Raised when the access YAML configuration is invalid."""


class _Requirement(BaseModel):
    permission: str | None = None
    roles: list[Role] = Field(default_factory=list)

    @model_validator(mode="after")
    def _exactly_one_requirement(self) -> "_Requirement":
        if bool(self.permission) == bool(self.roles):
            raise ValueError("exactly one of 'permission' or 'roles' must be set")
        return self


class RouteRule(_Requirement):
    path: str


class OperationRule(_Requirement):
    name: str


class AccessConfigModel(BaseModel):
    routes: list[RouteRule] = Field(default_factory=list)
    operations: list[OperationRule] = Field(default_factory=list)


@dataclass(frozen=True)
class Requirement:
    """
    What a user must have to pass a route or operation check.

    Either a permission string (subject to the admin wildcard) or an explicit
    set of roles (no wildcard bypass).
    """

    permission: str | None
    roles: frozenset[Role]


def _path_template_to_regex(path_template: str) -> re.Pattern[str]:
    # Convert "/admin/users/{id}" -> r"^/admin/users/[^/]+$"
    regex = re.sub(r"\{[^/]+\}", r"[^/]+", path_template)
    return re.compile(rf"^{regex}$")


def _requirement(rule: _Requirement) -> Requirement:
    return Requirement(permission=rule.permission, roles=frozenset(rule.roles))


class AccessConfig:
    """
    Runtime helper around the validated route and operation tables.
    """

    def __init__(self, model: AccessConfigModel):
        self.model = model

        self._exact_routes: dict[str, Requirement] = {}
        self._template_routes: list[tuple[re.Pattern[str], Requirement]] = []
        for rule in model.routes:
            if "{" in rule.path:
                self._template_routes.append((_path_template_to_regex(rule.path), _requirement(rule)))
            else:
                self._exact_routes[rule.path] = _requirement(rule)

        self._operations: dict[str, Requirement] = {op.name: _requirement(op) for op in model.operations}

    def route_requirement(self, path: str) -> Requirement | None:
        """
        Find the requirement for ``path``; ``None`` when the route is unmapped.

        Exact paths win over templates; templates are tried in file order.
        """

        exact = self._exact_routes.get(path)
        if exact is not None:
            return exact

        for regex, requirement in self._template_routes:
            if regex.match(path):
                return requirement

        return None

    def operation_requirement(self, operation: str) -> Requirement | None:
        return self._operations.get(operation)


def load_access_config(path: Path | None = None) -> AccessConfig:
    path = path or DEFAULT_ACCESS_CONFIG_PATH
    raw_text = path.read_text(encoding="utf-8")
    raw: dict[str, Any] = yaml.safe_load(raw_text) or {}

    if "access" not in raw:
        raise AccessConfigError(f"Missing top-level 'access' key in config: {path}")

    try:
        model = AccessConfigModel.model_validate(raw["access"] or {})
    except ValidationError as exc:
        raise AccessConfigError(f"Invalid access config {path}: {exc}") from exc
    return AccessConfig(model)
