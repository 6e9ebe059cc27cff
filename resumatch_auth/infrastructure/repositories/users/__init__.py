# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .memory_repository import InMemorySessionStore, InMemoryUserStore
from .sqlalchemy_user_repository import SqlAlchemySessionStore, SqlAlchemyUserStore

__all__ = [
    "InMemorySessionStore",
    "InMemoryUserStore",
    "SqlAlchemySessionStore",
    "SqlAlchemyUserStore",
]
