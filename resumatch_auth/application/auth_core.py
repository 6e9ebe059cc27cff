# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Authentication service handed to the HTTP layer.

AuthCore keeps no state of its own between calls: everything lives in the
injected stores, which are responsible for their own synchronization. One
instance is shared by every request handler.
"""

from __future__ import annotations

from resumatch_auth.application.use_cases.users.authenticate_user import AuthenticateUserUseCase
from resumatch_auth.application.use_cases.users.check_email import CheckEmailUseCase
from resumatch_auth.application.use_cases.users.logout_user import LogoutUserUseCase
from resumatch_auth.application.use_cases.users.signin_user import SigninUserUseCase
from resumatch_auth.application.use_cases.users.signup_user import SignupUserUseCase
from resumatch_auth.domain.users.entities import Session, User
from resumatch_auth.domain.users.repositories import (
    EmailValidator,
    PasswordHasher,
    SessionStore,
    UserStore,
)


class AuthCore:
    def __init__(
        self,
        *,
        users: UserStore,
        sessions: SessionStore,
        password_hasher: PasswordHasher,
        email_validator: EmailValidator,
    ) -> None:
        self._signin = SigninUserUseCase(
            users=users, sessions=sessions, password_hasher=password_hasher
        )
        self._signup = SignupUserUseCase(
            users=users, password_hasher=password_hasher, email_validator=email_validator
        )
        self._logout = LogoutUserUseCase(sessions=sessions)
        self._authenticate = AuthenticateUserUseCase(users=users, sessions=sessions)
        self._check_email = CheckEmailUseCase(users=users)

    def signin(self, email: str, password: str) -> tuple[Session, User]:
        """Verify credentials and open a session; the token is ``session.token``."""
        return self._signin.execute(email, password)

    def signup(
        self,
        email: str,
        password: str,
        repeat_password: str,
        first_name: str = "",
        last_name: str = "",
        company_name: str = "",
        company_address: str = "",
    ) -> int:
        return self._signup.execute(
            email=email,
            password=password,
            repeat_password=repeat_password,
            first_name=first_name,
            last_name=last_name,
            company_name=company_name,
            company_address=company_address,
        )

    def logout(self, token: str | None) -> None:
        self._logout.execute(token)

    def authenticate(self, token: str | None) -> User:
        return self._authenticate.execute(token)

    def email_exists(self, email: str) -> bool:
        return self._check_email.execute(email)


__all__ = ["AuthCore"]
