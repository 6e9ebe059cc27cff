# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import TypeVar

from flask import Blueprint, Response, jsonify, request
from pydantic import BaseModel, ValidationError

from resumatch_auth.application.auth_core import AuthCore
from resumatch_auth.infrastructure.audit import AuditAction, audit_log
from resumatch_auth.interfaces.http.dto.auth import (
    CheckEmailRequestDTO,
    MessageDTO,
    SessionResponseDTO,
    SigninRequestDTO,
    SignupRequestDTO,
    UserProfileDTO,
)
from resumatch_auth.shared.config import SecurityConfig, SessionConfig
from resumatch_auth.shared.errors import AppError, InvalidRequestBodyError, raise_validation_error
from resumatch_auth.shared.logging import logger

_DTO = TypeVar("_DTO", bound=BaseModel)


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


def _parse_body(model: type[_DTO]) -> _DTO:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise InvalidRequestBodyError()
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise_validation_error(exc)


class AuthController:
    def __init__(
        self,
        *,
        auth_core: AuthCore,
        session_config: SessionConfig,
        security_config: SecurityConfig,
    ) -> None:
        self._auth = auth_core
        self._sessions = session_config
        self._security = security_config

    def _set_session_cookie(self, response: Response, token: str, expires_at: datetime) -> None:
        response.set_cookie(
            self._sessions.cookie_name,
            token,
            expires=expires_at,
            httponly=True,
            samesite=self._security.cookie_samesite,
            secure=self._security.cookie_secure,
        )

    def _expire_session_cookie(self, response: Response) -> None:
        response.delete_cookie(
            self._sessions.cookie_name,
            httponly=True,
            samesite=self._security.cookie_samesite,
            secure=self._security.cookie_secure,
        )

    def signin(self) -> tuple[Response, int]:
        dto = _parse_body(SigninRequestDTO)
        ip_address = _get_client_ip()

        try:
            session, user = self._auth.signin(dto.email, dto.password)
        except AppError as exc:
            audit_log(
                AuditAction.SIGNIN_FAILED,
                ip_address=ip_address,
                details={"email": dto.email, "error": exc.code},
                success=False,
            )
            raise

        audit_log(AuditAction.SIGNIN_SUCCESS, user_id=user.id, ip_address=ip_address)

        response = jsonify(SessionResponseDTO(session_id=session.token).model_dump())
        self._set_session_cookie(response, session.token, session.expires_at)
        response.headers["Cache-Control"] = "no-store"
        return response, 200

    def signup(self) -> tuple[Response, int]:
        dto = _parse_body(SignupRequestDTO)
        ip_address = _get_client_ip()

        try:
            user_id = self._auth.signup(
                dto.email,
                dto.password,
                dto.repeat_password,
                first_name=dto.first_name,
                last_name=dto.last_name,
                company_name=dto.company_name,
                company_address=dto.company_address,
            )
        except AppError as exc:
            audit_log(
                AuditAction.SIGNUP_FAILED,
                ip_address=ip_address,
                details={"email": dto.email, "error": exc.code},
                success=False,
            )
            raise

        audit_log(AuditAction.SIGNUP, user_id=user_id, ip_address=ip_address)
        return jsonify(MessageDTO(message="User created successfully").model_dump()), 201

    def logout(self) -> tuple[Response, int]:
        token = request.cookies.get(self._sessions.cookie_name)

        self._auth.logout(token)

        audit_log(AuditAction.LOGOUT, ip_address=_get_client_ip())

        response = jsonify(MessageDTO(message="Logged out successfully").model_dump())
        self._expire_session_cookie(response)
        return response, 200

    def check_email(self) -> tuple[Response, int]:
        dto = _parse_body(CheckEmailRequestDTO)

        # A missing email answers 400 with a message body, not an error body.
        if self._auth.email_exists(dto.email):
            return jsonify(MessageDTO(message="Email already exists").model_dump()), 200
        return jsonify(MessageDTO(message="Email not found").model_dump()), 400

    def me(self) -> tuple[Response, int]:
        token = request.cookies.get(self._sessions.cookie_name)

        user = self._auth.authenticate(token)

        logger.debug(f"auth.me: ok user_id={user.id}")
        return jsonify(UserProfileDTO.from_domain(user).model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/signin", view_func=self.signin, methods=["POST"])
        bp.add_url_rule("/signup", view_func=self.signup, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule("/check-email", view_func=self.check_email, methods=["POST"])
        bp.add_url_rule("/auth", view_func=self.me, methods=["GET"])
        return bp
