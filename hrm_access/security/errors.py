"""Errors raised by the authorization core. The API maps each to an HTTP status."""

from __future__ import annotations


class AuthError(Exception):
    status_code: int = 400


class InvalidCredentials(AuthError):
    status_code = 401

    def __init__(self, message: str = "Invalid email or password") -> None:
        super().__init__(message)


class Unauthorized(AuthError):
    status_code = 403


class NotFound(AuthError):
    status_code = 404


class AlreadyExists(AuthError):
    status_code = 409


class ProtectedAccount(AuthError):
    status_code = 403
