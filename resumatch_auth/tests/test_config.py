from __future__ import annotations

from datetime import timedelta

import pytest
from pydantic import ValidationError

from resumatch_auth.shared.config import AppConfig, SecurityConfig, SessionConfig, load_config

_ENV_VARS = (
    "APP_ENV",
    "SECRET_KEY",
    "STORAGE_BACKEND",
    "SESSION_TTL_HOURS",
    "SESSION_COOKIE_NAME",
    "SESSION_SWEEP_INTERVAL",
    "COOKIE_SECURE",
    "COOKIE_SAMESITE",
    "ALLOWED_ORIGINS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    load_config.cache_clear()
    yield
    load_config.cache_clear()


def test_session_defaults() -> None:
    config = SessionConfig()

    assert config.ttl == timedelta(hours=10)
    assert config.cookie_name == "session_id"
    assert config.sweep_interval == 0


def test_security_defaults() -> None:
    config = SecurityConfig()

    assert config.cookie_samesite == "Strict"
    assert config.cookie_secure is False
    assert config.allowed_origins == ["*"]


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SESSION_TTL_HOURS", "2")
    monkeypatch.setenv("COOKIE_SECURE", "true")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("STORAGE_BACKEND", "memory")

    config = load_config()

    assert config.sessions.ttl == timedelta(hours=2)
    assert config.security.cookie_secure is True
    assert config.security.allowed_origins == ["https://a.example", "https://b.example"]
    assert config.storage_backend == "memory"
    assert load_config() is config


def test_unknown_storage_backend_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STORAGE_BACKEND", "redis")

    with pytest.raises(ValidationError):
        AppConfig()


def test_production_refuses_default_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "production")

    with pytest.raises(SystemExit):
        AppConfig()


def test_production_with_strong_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setenv("SECRET_KEY", "x" * 40)

    config = AppConfig()

    assert config.is_production()
