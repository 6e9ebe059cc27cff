# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from resumatch_auth.shared.errors.base import DomainError, InfrastructureError


class InvalidInputError(DomainError):
    code = "invalid_input"
    status = HTTPStatus.BAD_REQUEST


class PasswordMismatchError(InvalidInputError):
    code = "password_mismatch"
    message = "Passwords do not match"


class InvalidEmailError(InvalidInputError):
    code = "invalid_email"
    message = "Invalid email format"


class NotFoundError(DomainError):
    code = "not_found"
    status = HTTPStatus.NOT_FOUND


class UserNotFoundError(NotFoundError):
    code = "user_not_found"
    message = "User not found"


class SessionNotFoundError(NotFoundError):
    code = "session_not_found"
    message = "Session not found"


class ConflictError(DomainError):
    code = "conflict"
    status = HTTPStatus.CONFLICT


class EmailAlreadyExistsError(ConflictError):
    code = "email_already_exists"
    message = "Email already exists"


class UnauthorizedError(DomainError):
    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED
    message = "Unauthorized"


class InvalidCredentialsError(UnauthorizedError):
    code = "invalid_credentials"
    message = "Invalid credentials"


class InternalError(InfrastructureError):
    def __init__(self, message: str = "Internal error", *, code: str = "internal_error") -> None:
        super().__init__(code=code, message=message)


__all__ = [
    "ConflictError",
    "EmailAlreadyExistsError",
    "InternalError",
    "InvalidCredentialsError",
    "InvalidEmailError",
    "InvalidInputError",
    "NotFoundError",
    "PasswordMismatchError",
    "SessionNotFoundError",
    "UnauthorizedError",
    "UserNotFoundError",
]
