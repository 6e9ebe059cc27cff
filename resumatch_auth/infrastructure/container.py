"""Application dependency container."""

from __future__ import annotations

from functools import cached_property, partial

from sqlalchemy.engine import Engine

from resumatch_auth.application.auth_core import AuthCore
from resumatch_auth.application.services.email_address import PydanticEmailValidator
from resumatch_auth.application.services.password_hashing import WerkzeugPasswordHasher
from resumatch_auth.domain.users.repositories import SessionStore, UserStore
from resumatch_auth.infrastructure.db import SessionFactory, create_db_engine, create_session_factory
from resumatch_auth.infrastructure.health import check_database
from resumatch_auth.infrastructure.repositories.users import (
    InMemorySessionStore,
    InMemoryUserStore,
    SqlAlchemySessionStore,
    SqlAlchemyUserStore,
)
from resumatch_auth.infrastructure.session_sweeper import SessionSweeper
from resumatch_auth.interfaces.http.controllers import AuthController, MiscController
from resumatch_auth.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @property
    def uses_sql(self) -> bool:
        return self.config.storage_backend == "sql"

    @cached_property
    def engine(self) -> Engine:
        return create_db_engine(self.config.database)

    @cached_property
    def session_factory(self) -> SessionFactory:
        return create_session_factory(self.engine)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def email_validator(self) -> PydanticEmailValidator:
        return PydanticEmailValidator()

    @cached_property
    def user_store(self) -> UserStore:
        if self.uses_sql:
            return SqlAlchemyUserStore(self.session_factory)
        return InMemoryUserStore()

    @cached_property
    def session_store(self) -> SessionStore:
        sessions = self.config.sessions
        if self.uses_sql:
            return SqlAlchemySessionStore(
                self.session_factory,
                ttl=sessions.ttl,
                max_attempts=sessions.token_attempts,
            )
        return InMemorySessionStore(ttl=sessions.ttl, max_attempts=sessions.token_attempts)

    @cached_property
    def auth_core(self) -> AuthCore:
        return AuthCore(
            users=self.user_store,
            sessions=self.session_store,
            password_hasher=self.password_hasher,
            email_validator=self.email_validator,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            auth_core=self.auth_core,
            session_config=self.config.sessions,
            security_config=self.config.security,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        if self.uses_sql:
            return MiscController(database_check=partial(check_database, self.engine))
        return MiscController()

    @cached_property
    def sweeper(self) -> SessionSweeper | None:
        interval = self.config.sessions.sweep_interval
        if interval <= 0:
            return None
        return SessionSweeper(self.session_store, interval_seconds=interval)


__all__ = ["Container"]
