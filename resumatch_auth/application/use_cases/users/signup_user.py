# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from resumatch_auth.domain.users.exceptions import (
    EmailAlreadyExistsError,
    InvalidEmailError,
    PasswordMismatchError,
)
from resumatch_auth.domain.users.repositories import EmailValidator, PasswordHasher, UserStore
from resumatch_auth.shared.logging import logger


class SignupUserUseCase:
    def __init__(
        self,
        *,
        users: UserStore,
        password_hasher: PasswordHasher,
        email_validator: EmailValidator,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._email_validator = email_validator

    def execute(
        self,
        *,
        email: str,
        password: str,
        repeat_password: str,
        first_name: str = "",
        last_name: str = "",
        company_name: str = "",
        company_address: str = "",
    ) -> int:
        # Structural checks run before any store access.
        if password != repeat_password:
            raise PasswordMismatchError()
        if not self._email_validator.is_valid(email):
            raise InvalidEmailError()

        if self._users.find_by_email(email) is not None:
            logger.info("auth.signup: email already registered")
            raise EmailAlreadyExistsError()

        # The store re-checks uniqueness atomically; a racing signup surfaces as a conflict there.
        user_id = self._users.add(
            email=email,
            password_hash=self._password_hasher.hash(password),
            first_name=first_name,
            last_name=last_name,
            company_name=company_name,
            company_address=company_address,
        )
        logger.info(f"auth.signup: ok user_id={user_id}")
        return user_id
