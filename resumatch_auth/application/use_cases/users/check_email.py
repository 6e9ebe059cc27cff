# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from resumatch_auth.domain.users.repositories import UserStore


class CheckEmailUseCase:
    def __init__(self, *, users: UserStore) -> None:
        self._users = users

    def execute(self, email: str) -> bool:
        return self._users.find_by_email(email) is not None
