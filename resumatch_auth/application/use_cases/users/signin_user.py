# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from resumatch_auth.domain.users.entities import Session, User
from resumatch_auth.domain.users.exceptions import InvalidCredentialsError, UserNotFoundError
from resumatch_auth.domain.users.repositories import PasswordHasher, SessionStore, UserStore
from resumatch_auth.shared.logging import logger

_DUMMY_PASSWORD = "resumatch_timing_dummy"


class SigninUserUseCase:
    def __init__(
        self,
        *,
        users: UserStore,
        sessions: SessionStore,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher
        # Verified against when the email is unknown so both failure paths pay for one hash check.
        self._dummy_hash = password_hasher.hash(_DUMMY_PASSWORD)

    def execute(self, email: str, password: str) -> tuple[Session, User]:
        user = self._users.find_by_email(email)
        if user is None:
            self._password_hasher.verify(password, self._dummy_hash)
            logger.info("auth.signin: unknown email")
            raise UserNotFoundError()

        if not self._password_hasher.verify(password, user.password_hash):
            logger.info(f"auth.signin: bad password user_id={user.id}")
            raise InvalidCredentialsError()

        session = self._sessions.create(user.id)
        logger.info(f"auth.signin: ok user_id={user.id} exp={session.expires_at.isoformat()}")
        return session, user
