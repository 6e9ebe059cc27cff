# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from datetime import UTC, datetime, timedelta

DEFAULT_SESSION_TTL = timedelta(hours=10)
DEFAULT_TOKEN_ATTEMPTS = 5


def new_session_token() -> str:
    # 32 random bytes: collisions are negligible, and still retried by the stores.
    return secrets.token_urlsafe(32)


def utc_now() -> datetime:
    return datetime.now(UTC)


__all__ = ["DEFAULT_SESSION_TTL", "DEFAULT_TOKEN_ATTEMPTS", "new_session_token", "utc_now"]
