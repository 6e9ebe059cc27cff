# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Session, User
from .repositories import EmailValidator, PasswordHasher, SessionStore, UserStore

__all__ = [
    "EmailValidator",
    "PasswordHasher",
    "Session",
    "SessionStore",
    "User",
    "UserStore",
]
