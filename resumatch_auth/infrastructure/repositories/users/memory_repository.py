# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Process-local user and session stores.

Sessions and accounts are lost on restart and are not shared between worker
processes; use them for tests and single-process development. Each public
method holds the store's lock for its whole read-modify-write, so the
uniqueness checks are atomic with respect to concurrent callers.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from itertools import count
from threading import Lock

from resumatch_auth.domain.users.entities import Session, User
from resumatch_auth.domain.users.exceptions import (
    EmailAlreadyExistsError,
    InternalError,
    SessionNotFoundError,
    UnauthorizedError,
)
from resumatch_auth.domain.users.repositories import SessionStore, UserStore
from resumatch_auth.infrastructure.repositories.users.tokens import (
    DEFAULT_SESSION_TTL,
    DEFAULT_TOKEN_ATTEMPTS,
    new_session_token,
    utc_now,
)
from resumatch_auth.shared.logging import logger


class InMemoryUserStore(UserStore):
    def __init__(self, *, clock: Callable[[], datetime] = utc_now) -> None:
        self._lock = Lock()
        self._by_id: dict[int, User] = {}
        self._by_email: dict[str, User] = {}
        self._ids = count(1)
        self._clock = clock

    def find_by_email(self, email: str) -> User | None:
        with self._lock:
            return self._by_email.get(email)

    def find_by_id(self, user_id: int) -> User | None:
        with self._lock:
            return self._by_id.get(user_id)

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
        with self._lock:
            if email in self._by_email:
                raise EmailAlreadyExistsError()
            user = User(
                id=next(self._ids),
                email=email,
                password_hash=password_hash,
                first_name=first_name,
                last_name=last_name,
                company_name=company_name,
                company_address=company_address,
                created_at=self._clock(),
            )
            self._by_id[user.id] = user
            self._by_email[email] = user
            return user.id


class InMemorySessionStore(SessionStore):
    def __init__(
        self,
        *,
        ttl: timedelta = DEFAULT_SESSION_TTL,
        max_attempts: int = DEFAULT_TOKEN_ATTEMPTS,
        clock: Callable[[], datetime] = utc_now,
        token_factory: Callable[[], str] = new_session_token,
    ) -> None:
        self._lock = Lock()
        self._sessions: dict[str, Session] = {}
        self._ttl = ttl
        self._max_attempts = max_attempts
        self._clock = clock
        self._token_factory = token_factory

    def create(self, user_id: int) -> Session:
        with self._lock:
            created_at = self._clock()
            for attempt in range(1, self._max_attempts + 1):
                token = self._token_factory()
                if token in self._sessions:
                    logger.warning(
                        f"sessions.create: token collision user={user_id} attempt={attempt}"
                    )
                    continue
                session = Session(
                    token=token,
                    user_id=user_id,
                    created_at=created_at,
                    expires_at=created_at + self._ttl,
                )
                self._sessions[token] = session
                return session

        logger.error(f"sessions.create: gave up after {self._max_attempts} attempts user={user_id}")
        raise InternalError("failed to create session")

    def get_user_id(self, token: str) -> int:
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                raise UnauthorizedError()
            if not session.is_active_at(self._clock()):
                del self._sessions[token]
                raise UnauthorizedError()
            return session.user_id

    def kill(self, token: str) -> None:
        with self._lock:
            if self._sessions.pop(token, None) is None:
                raise SessionNotFoundError()

    def purge_expired(self) -> int:
        with self._lock:
            now = self._clock()
            expired = [
                token for token, session in self._sessions.items()
                if not session.is_active_at(now)
            ]
            for token in expired:
                del self._sessions[token]
            return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
