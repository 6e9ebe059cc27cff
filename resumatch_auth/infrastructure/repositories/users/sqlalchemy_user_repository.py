# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from resumatch_auth.domain.users.entities import Session as DomainSession
from resumatch_auth.domain.users.entities import User as DomainUser
from resumatch_auth.domain.users.exceptions import (
    EmailAlreadyExistsError,
    InternalError,
    SessionNotFoundError,
    UnauthorizedError,
)
from resumatch_auth.domain.users.repositories import SessionStore, UserStore
from resumatch_auth.infrastructure.db.models import SessionToken, User
from resumatch_auth.infrastructure.db.session import SessionFactory, session_scope
from resumatch_auth.infrastructure.repositories.users.tokens import (
    DEFAULT_SESSION_TTL,
    DEFAULT_TOKEN_ATTEMPTS,
    new_session_token,
    utc_now,
)
from resumatch_auth.shared.logging import logger


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is written as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _row_to_user(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        email=row.email,
        password_hash=row.password_hash,
        first_name=row.first_name or "",
        last_name=row.last_name or "",
        company_name=row.company_name or "",
        company_address=row.company_address or "",
        created_at=_as_utc(row.created_at),
    )


class SqlAlchemyUserStore(UserStore):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def find_by_email(self, email: str) -> DomainUser | None:
        try:
            with session_scope(self._session_factory) as session:
                row = session.query(User).filter(User.email == email).first()
                return _row_to_user(row) if row else None
        except SQLAlchemyError as exc:
            logger.error(f"users.find_by_email: storage failure: {exc}")
            raise InternalError("failed to look up user") from exc

    def find_by_id(self, user_id: int) -> DomainUser | None:
        try:
            with session_scope(self._session_factory) as session:
                row = session.get(User, user_id)
                return _row_to_user(row) if row else None
        except SQLAlchemyError as exc:
            logger.error(f"users.find_by_id: storage failure: {exc}")
            raise InternalError("failed to look up user") from exc

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
        try:
            with session_scope(self._session_factory) as session:
                row = User(
                    email=email,
                    password_hash=password_hash,
                    first_name=first_name,
                    last_name=last_name,
                    company_name=company_name,
                    company_address=company_address,
                    created_at=utc_now(),
                )
                session.add(row)
                session.flush()
                user_id = row.id
        except IntegrityError as exc:
            logger.info("users.add: email already registered")
            raise EmailAlreadyExistsError() from exc
        except SQLAlchemyError as exc:
            logger.error(f"users.add: storage failure: {exc}")
            raise InternalError("failed to create user") from exc
        return user_id


class SqlAlchemySessionStore(SessionStore):
    def __init__(
        self,
        session_factory: SessionFactory,
        *,
        ttl: timedelta = DEFAULT_SESSION_TTL,
        max_attempts: int = DEFAULT_TOKEN_ATTEMPTS,
        clock: Callable[[], datetime] = utc_now,
        token_factory: Callable[[], str] = new_session_token,
    ) -> None:
        self._session_factory = session_factory
        self._ttl = ttl
        self._max_attempts = max_attempts
        self._clock = clock
        self._token_factory = token_factory

    def create(self, user_id: int) -> DomainSession:
        created_at = self._clock()
        expires_at = created_at + self._ttl
        for attempt in range(1, self._max_attempts + 1):
            token = self._token_factory()
            try:
                # The UNIQUE index on token rejects a collision instead of overwriting.
                with session_scope(self._session_factory) as session:
                    session.add(
                        SessionToken(
                            user_id=user_id,
                            token=token,
                            created_at=created_at,
                            expires_at=expires_at,
                        )
                    )
            except IntegrityError as exc:
                if not self._token_taken(token):
                    logger.error(f"sessions.create: rejected user={user_id}: {exc.orig}")
                    raise InternalError("failed to create session") from exc
                logger.warning(f"sessions.create: token collision user={user_id} attempt={attempt}")
                continue
            except SQLAlchemyError as exc:
                logger.error(f"sessions.create: storage failure user={user_id}: {exc}")
                raise InternalError("failed to create session") from exc

            logger.info(
                f"sessions.create: issued user={user_id} exp={expires_at.isoformat()} tok={token[:6]}…"
            )
            return DomainSession(
                token=token, user_id=user_id, created_at=created_at, expires_at=expires_at
            )

        logger.error(f"sessions.create: gave up after {self._max_attempts} attempts user={user_id}")
        raise InternalError("failed to create session")

    def _token_taken(self, token: str) -> bool:
        try:
            with session_scope(self._session_factory) as session:
                row = session.query(SessionToken.id).filter(SessionToken.token == token).first()
                return row is not None
        except SQLAlchemyError as exc:
            logger.error(f"sessions.create: collision check failed: {exc}")
            raise InternalError("failed to create session") from exc

    def get_user_id(self, token: str) -> int:
        now = self._clock()
        user_id: int | None = None
        try:
            with session_scope(self._session_factory) as session:
                row = session.query(SessionToken).filter(SessionToken.token == token).first()
                if row is not None:
                    if _as_utc(row.expires_at) > now:
                        user_id = row.user_id
                    else:
                        session.query(SessionToken).filter(SessionToken.id == row.id).delete(
                            synchronize_session=False
                        )
                        logger.debug(f"sessions.get: purged expired session user={row.user_id}")
        except SQLAlchemyError as exc:
            logger.error(f"sessions.get: storage failure: {exc}")
            raise InternalError("failed to resolve session") from exc

        if user_id is None:
            raise UnauthorizedError()
        return user_id

    def kill(self, token: str) -> None:
        try:
            with session_scope(self._session_factory) as session:
                deleted = (
                    session.query(SessionToken)
                    .filter(SessionToken.token == token)
                    .delete(synchronize_session=False)
                )
        except SQLAlchemyError as exc:
            logger.error(f"sessions.kill: storage failure: {exc}")
            raise InternalError("failed to kill session") from exc

        if not deleted:
            raise SessionNotFoundError()
        logger.info("sessions.kill: session revoked")

    def purge_expired(self) -> int:
        now = self._clock()
        try:
            with session_scope(self._session_factory) as session:
                purged = (
                    session.query(SessionToken)
                    .filter(SessionToken.expires_at <= now)
                    .delete(synchronize_session=False)
                )
        except SQLAlchemyError as exc:
            logger.error(f"sessions.purge: storage failure: {exc}")
            raise InternalError("failed to purge sessions") from exc

        if purged:
            logger.info(f"sessions.purge: removed {purged} expired sessions")
        return purged
