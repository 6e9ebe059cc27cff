"""Use-case for revoking session tokens."""

from __future__ import annotations

from resumatch_auth.domain.users.exceptions import SessionNotFoundError, UnauthorizedError
from resumatch_auth.domain.users.repositories import SessionStore
from resumatch_auth.shared.logging import logger


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionStore) -> None:
        self._sessions = sessions

    def execute(self, token: str | None) -> None:
        if not token:
            raise UnauthorizedError("No session")
        try:
            self._sessions.kill(token)
        except SessionNotFoundError:
            # Logging out twice is not an error for the caller.
            logger.info("auth.logout: session already gone")
