from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from resumatch_auth.application.auth_core import AuthCore
from resumatch_auth.application.services.email_address import PydanticEmailValidator
from resumatch_auth.domain.users.repositories import PasswordHasher
from resumatch_auth.infrastructure.repositories.users import InMemorySessionStore, InMemoryUserStore

T0 = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


class FrozenClock:
    def __init__(self, start: datetime = T0) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> None:
        self.now += timedelta(**delta)


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture()
def users(clock: FrozenClock) -> InMemoryUserStore:
    return InMemoryUserStore(clock=clock)


@pytest.fixture()
def sessions(clock: FrozenClock) -> InMemorySessionStore:
    return InMemorySessionStore(clock=clock)


@pytest.fixture()
def password_hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def auth_core(
    users: InMemoryUserStore,
    sessions: InMemorySessionStore,
    password_hasher: DeterministicHasher,
) -> AuthCore:
    return AuthCore(
        users=users,
        sessions=sessions,
        password_hasher=password_hasher,
        email_validator=PydanticEmailValidator(),
    )
