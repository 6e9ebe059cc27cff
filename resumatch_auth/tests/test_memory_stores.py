from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from resumatch_auth.domain.users.exceptions import (
    EmailAlreadyExistsError,
    InternalError,
    SessionNotFoundError,
    UnauthorizedError,
)
from resumatch_auth.infrastructure.repositories.users import InMemorySessionStore, InMemoryUserStore


def _add(store: InMemoryUserStore, email: str) -> int:
    return store.add(
        email=email,
        password_hash="hashed:secret",
        first_name="",
        last_name="",
        company_name="",
        company_address="",
    )


def test_user_store_assigns_ids_and_finds(users: InMemoryUserStore) -> None:
    first = _add(users, "alice@example.com")
    second = _add(users, "bob@example.com")

    assert (first, second) == (1, 2)
    found = users.find_by_email("bob@example.com")
    assert found is not None and found.id == second
    assert users.find_by_id(first).email == "alice@example.com"
    assert users.find_by_email("carol@example.com") is None
    assert users.find_by_id(99) is None


def test_user_store_email_match_is_case_sensitive(users: InMemoryUserStore) -> None:
    _add(users, "alice@example.com")

    assert users.find_by_email("Alice@example.com") is None
    _add(users, "Alice@example.com")


def test_user_store_rejects_duplicate(users: InMemoryUserStore) -> None:
    _add(users, "alice@example.com")

    with pytest.raises(EmailAlreadyExistsError):
        _add(users, "alice@example.com")


def test_concurrent_signups_for_one_email_yield_one_account(users: InMemoryUserStore) -> None:
    def attempt(_: int) -> str:
        try:
            _add(users, "race@example.com")
        except EmailAlreadyExistsError:
            return "conflict"
        return "created"

    with ThreadPoolExecutor(max_workers=8) as pool:
        outcomes = list(pool.map(attempt, range(32)))

    assert outcomes.count("created") == 1
    assert outcomes.count("conflict") == 31


def test_session_expires_after_ttl(sessions: InMemorySessionStore, clock) -> None:
    session = sessions.create(1)

    clock.advance(hours=9, minutes=59)
    assert sessions.get_user_id(session.token) == 1

    clock.advance(minutes=2)
    with pytest.raises(UnauthorizedError):
        sessions.get_user_id(session.token)
    assert len(sessions) == 0


def test_session_window_is_ten_hours(sessions: InMemorySessionStore, clock) -> None:
    session = sessions.create(1)

    assert session.created_at == clock.now
    assert (session.expires_at - session.created_at).total_seconds() == 10 * 3600


def test_unknown_token_is_unauthorized(sessions: InMemorySessionStore) -> None:
    with pytest.raises(UnauthorizedError):
        sessions.get_user_id("nope")


def test_kill_removes_session(sessions: InMemorySessionStore) -> None:
    session = sessions.create(1)

    sessions.kill(session.token)

    with pytest.raises(UnauthorizedError):
        sessions.get_user_id(session.token)
    with pytest.raises(SessionNotFoundError):
        sessions.kill(session.token)


def test_token_collision_is_retried(clock) -> None:
    tokens = iter(["dup", "dup", "fresh"])
    store = InMemorySessionStore(clock=clock, token_factory=lambda: next(tokens))

    first = store.create(1)
    second = store.create(2)

    assert first.token == "dup"
    assert second.token == "fresh"
    assert store.get_user_id("dup") == 1
    assert store.get_user_id("fresh") == 2


def test_token_collision_gives_up_after_max_attempts(clock) -> None:
    store = InMemorySessionStore(clock=clock, max_attempts=3, token_factory=lambda: "dup")
    store.create(1)

    with pytest.raises(InternalError):
        store.create(2)
    assert store.get_user_id("dup") == 1


def test_concurrent_creates_issue_distinct_tokens(sessions: InMemorySessionStore) -> None:
    with ThreadPoolExecutor(max_workers=8) as pool:
        created = list(pool.map(sessions.create, range(64)))

    assert len({session.token for session in created}) == 64
    assert len(sessions) == 64


def test_purge_expired_only_drops_stale(sessions: InMemorySessionStore, clock) -> None:
    old = sessions.create(1)
    clock.advance(hours=6)
    fresh = sessions.create(2)
    clock.advance(hours=5)

    assert sessions.purge_expired() == 1
    assert sessions.get_user_id(fresh.token) == 2
    with pytest.raises(SessionNotFoundError):
        sessions.kill(old.token)
