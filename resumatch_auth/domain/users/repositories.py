# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import Session, User


class UserStore(Protocol):
    def find_by_email(self, email: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...

    def add(
        self,
        *,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        company_name: str,
        company_address: str,
    ) -> int:
        """Insert a user and return its id.

        Raises EmailAlreadyExistsError when the email is taken, even if a
        concurrent writer took it after the caller's own lookup, and
        InternalError on any storage failure.
        """
        ...


class SessionStore(Protocol):
    def create(self, user_id: int) -> Session:
        """Issue a fresh token for ``user_id``; never replaces a live session."""
        ...

    def get_user_id(self, token: str) -> int:
        """Resolve an active token. Absent and expired tokens both raise UnauthorizedError."""
        ...

    def kill(self, token: str) -> None:
        """Remove the session, raising SessionNotFoundError if there is none."""
        ...

    def purge_expired(self) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class EmailValidator(Protocol):
    def is_valid(self, email: str) -> bool: ...
