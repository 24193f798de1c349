from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hrm_access.security.catalog import Role


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    role: Role
    permissions: list[str]
    employee_id: str | None
    avatar: str | None
    created_at: datetime

    @field_validator("permissions", mode="before")
    @classmethod
    def _sorted(cls, value: object) -> object:
        if isinstance(value, (set, frozenset)):
            return sorted(value)
        return value


class LoginIn(BaseModel):
    email: str
    password: str


class LoginOut(BaseModel):
    access_token: str
    token_type: Literal["bearer"] = "bearer"
    expires_in: int
    user: UserOut


class UserCreateIn(BaseModel):
    email: str = Field(min_length=3)
    password: str = Field(min_length=1)
    name: str = Field(min_length=1)
    role: Literal["hr", "manager", "employee"]


class UserUpdateIn(BaseModel):
    # Role and permissions are not editable.
    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    email: str | None = Field(default=None, min_length=3)
    employee_id: str | None = None
    avatar: str | None = None


class AccessDecisionOut(BaseModel):
    target: str
    allowed: bool
