# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from flask import Blueprint, jsonify
from sqlalchemy.exc import SQLAlchemyError

from resumatch_auth.shared.logging import logger


class MiscController:
    def __init__(self, *, database_check: Callable[[], bool] | None = None) -> None:
        self._database_check = database_check

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/api/health", view_func=self.health, methods=["GET"])
        return bp

    def health(self):
        status: dict[str, object] = {"ok": True}
        if self._database_check is None:
            status["database"] = "memory"
            return jsonify(status)
        try:
            self._database_check()
            status["database"] = "ok"
        except SQLAlchemyError as exc:
            logger.warning(f"health: database check failed {type(exc).__name__}")
            status["ok"] = False
            status["database"] = "error"
        return jsonify(status), (200 if status["ok"] else 503)
