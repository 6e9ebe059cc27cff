from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import event, select

from resumatch_auth.application.auth_core import AuthCore
from resumatch_auth.application.services.email_address import PydanticEmailValidator
from resumatch_auth.domain.users.exceptions import (
    EmailAlreadyExistsError,
    InternalError,
    SessionNotFoundError,
    UnauthorizedError,
)
from resumatch_auth.infrastructure.db import (
    create_db_engine,
    create_session_factory,
    init_db,
    session_scope,
)
from resumatch_auth.infrastructure.db.models import SessionToken
from resumatch_auth.infrastructure.repositories.users import (
    SqlAlchemySessionStore,
    SqlAlchemyUserStore,
)
from resumatch_auth.shared.config import DatabaseConfig


@pytest.fixture()
def session_factory(tmp_path):
    engine = create_db_engine(DatabaseConfig(DATABASE_URL=f"sqlite:///{tmp_path / 'auth.db'}"))
    init_db(engine)
    yield create_session_factory(engine)
    engine.dispose()


@pytest.fixture()
def user_store(session_factory) -> SqlAlchemyUserStore:
    return SqlAlchemyUserStore(session_factory)


@pytest.fixture()
def session_store(session_factory, clock) -> SqlAlchemySessionStore:
    return SqlAlchemySessionStore(session_factory, clock=clock)


def _add(store: SqlAlchemyUserStore, email: str, **profile: str) -> int:
    return store.add(
        email=email,
        password_hash="hashed:secret",
        first_name=profile.get("first_name", ""),
        last_name=profile.get("last_name", ""),
        company_name=profile.get("company_name", ""),
        company_address=profile.get("company_address", ""),
    )


def test_add_and_find_user(user_store: SqlAlchemyUserStore) -> None:
    user_id = _add(user_store, "alice@example.com", first_name="Alice", company_name="Wonder")

    by_email = user_store.find_by_email("alice@example.com")
    by_id = user_store.find_by_id(user_id)

    assert by_email == by_id
    assert by_email is not None
    assert by_email.first_name == "Alice"
    assert by_email.company_name == "Wonder"
    assert by_email.last_name == ""
    assert by_email.created_at.tzinfo is not None
    assert user_store.find_by_email("ALICE@example.com") is None


def test_duplicate_email_is_conflict(user_store: SqlAlchemyUserStore) -> None:
    _add(user_store, "alice@example.com")

    with pytest.raises(EmailAlreadyExistsError):
        _add(user_store, "alice@example.com")


def test_concurrent_duplicate_signups_create_one_row(user_store: SqlAlchemyUserStore) -> None:
    def attempt(_: int) -> bool:
        try:
            _add(user_store, "race@example.com")
        except EmailAlreadyExistsError:
            return False
        return True

    with ThreadPoolExecutor(max_workers=4) as pool:
        outcomes = list(pool.map(attempt, range(8)))

    assert outcomes.count(True) == 1


def test_session_lookup_honours_expiry(session_store: SqlAlchemySessionStore, clock) -> None:
    session = session_store.create(1)

    clock.advance(hours=9, minutes=59)
    assert session_store.get_user_id(session.token) == 1

    clock.advance(minutes=2)
    with pytest.raises(UnauthorizedError):
        session_store.get_user_id(session.token)
    # The expired row was removed by the lookup.
    with pytest.raises(SessionNotFoundError):
        session_store.kill(session.token)


def test_kill_then_lookup_is_unauthorized(session_store: SqlAlchemySessionStore) -> None:
    session = session_store.create(5)

    session_store.kill(session.token)

    with pytest.raises(UnauthorizedError):
        session_store.get_user_id(session.token)
    with pytest.raises(SessionNotFoundError):
        session_store.kill(session.token)


def test_token_collision_retries_on_unique_index(session_factory, clock) -> None:
    tokens = iter(["dup", "dup", "fresh"])
    store = SqlAlchemySessionStore(session_factory, clock=clock, token_factory=lambda: next(tokens))

    store.create(1)
    second = store.create(2)

    assert second.token == "fresh"
    assert store.get_user_id("dup") == 1
    assert store.get_user_id("fresh") == 2


def test_token_collision_exhaustion_is_internal(session_factory, clock) -> None:
    store = SqlAlchemySessionStore(
        session_factory, clock=clock, max_attempts=2, token_factory=lambda: "dup"
    )
    store.create(1)

    with pytest.raises(InternalError):
        store.create(2)


def test_purge_expired(session_store: SqlAlchemySessionStore, session_factory, clock) -> None:
    session_store.create(1)
    clock.advance(hours=6)
    fresh = session_store.create(2)
    clock.advance(hours=5)

    assert session_store.purge_expired() == 1

    with session_scope(session_factory) as db:
        remaining = db.scalars(select(SessionToken.token)).all()
    assert remaining == [fresh.token]


def test_constraint_failure_other_than_token_is_not_retried(tmp_path, clock) -> None:
    engine = create_db_engine(DatabaseConfig(DATABASE_URL=f"sqlite:///{tmp_path / 'fk.db'}"))

    @event.listens_for(engine, "connect")
    def _enforce_foreign_keys(dbapi_connection, _record) -> None:
        dbapi_connection.execute("PRAGMA foreign_keys=ON")

    init_db(engine)
    issued: list[str] = []

    def token_factory() -> str:
        issued.append(f"tok-{len(issued)}")
        return issued[-1]

    store = SqlAlchemySessionStore(
        create_session_factory(engine), clock=clock, token_factory=token_factory
    )
    try:
        with pytest.raises(InternalError):
            store.create(999)
    finally:
        engine.dispose()

    assert issued == ["tok-0"]


@pytest.fixture()
def sql_auth_core(user_store, session_store, password_hasher) -> AuthCore:
    return AuthCore(
        users=user_store,
        sessions=session_store,
        password_hasher=password_hasher,
        email_validator=PydanticEmailValidator(),
    )


def test_auth_core_flow_on_sql(sql_auth_core: AuthCore, clock) -> None:
    user_id = sql_auth_core.signup("alice@example.com", "secret123", "secret123")

    session, user = sql_auth_core.signin("alice@example.com", "secret123")
    assert user.id == user_id
    assert sql_auth_core.authenticate(session.token).email == "alice@example.com"

    sql_auth_core.logout(session.token)
    with pytest.raises(UnauthorizedError):
        sql_auth_core.authenticate(session.token)

    again, _ = sql_auth_core.signin("alice@example.com", "secret123")
    clock.advance(hours=10, minutes=1)
    with pytest.raises(UnauthorizedError):
        sql_auth_core.authenticate(again.token)


def test_concurrent_signups_through_auth_core_on_sql(sql_auth_core: AuthCore) -> None:
    def attempt(_: int) -> str:
        try:
            sql_auth_core.signup("race@example.com", "secret123", "secret123")
        except EmailAlreadyExistsError:
            return "conflict"
        return "created"

    with ThreadPoolExecutor(max_workers=8) as pool:
        outcomes = list(pool.map(attempt, range(16)))

    assert outcomes.count("created") == 1
    assert outcomes.count("conflict") == 15


def test_concurrent_signins_on_sql_issue_distinct_valid_tokens(sql_auth_core: AuthCore) -> None:
    user_id = sql_auth_core.signup("alice@example.com", "secret123", "secret123")

    def signin(_: int) -> str:
        session, _ = sql_auth_core.signin("alice@example.com", "secret123")
        return session.token

    with ThreadPoolExecutor(max_workers=8) as pool:
        tokens = list(pool.map(signin, range(16)))

    assert len(set(tokens)) == 16
    assert all(sql_auth_core.authenticate(token).id == user_id for token in tokens)
