# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from resumatch_auth.domain.users.entities import User
from resumatch_auth.domain.users.exceptions import (
    InternalError,
    UnauthorizedError,
    UserNotFoundError,
)
from resumatch_auth.domain.users.repositories import SessionStore, UserStore
from resumatch_auth.shared.errors.base import AppError
from resumatch_auth.shared.logging import logger


class AuthenticateUserUseCase:
    """Resolve a session token to the signed-in user.

    Every way the token can fail to resolve (missing, unknown, expired,
    storage trouble) is reported as the same UnauthorizedError. A token that
    resolves to a user id with no record behind it is an orphaned session and
    yields UserNotFoundError instead.
    """

    def __init__(self, *, users: UserStore, sessions: SessionStore) -> None:
        self._users = users
        self._sessions = sessions

    def execute(self, token: str | None) -> User:
        if not token:
            raise UnauthorizedError()

        try:
            user_id = self._sessions.get_user_id(token)
        except UnauthorizedError:
            logger.info("auth.authenticate: invalid session")
            raise UnauthorizedError() from None
        except InternalError as exc:
            logger.error(f"auth.authenticate: session lookup failed: {exc}")
            raise UnauthorizedError() from exc
        except AppError as exc:
            logger.warning(f"auth.authenticate: session rejected code={exc.code}")
            raise UnauthorizedError() from exc

        user = self._users.find_by_id(user_id)
        if user is None:
            logger.warning(f"auth.authenticate: orphaned session user_id={user_id}")
            raise UserNotFoundError()
        return user
