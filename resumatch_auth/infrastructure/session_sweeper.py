# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import threading

from resumatch_auth.domain.users.repositories import SessionStore
from resumatch_auth.shared.errors.base import AppError
from resumatch_auth.shared.logging import logger


class SessionSweeper:
    """Background eviction of expired sessions.

    Lookups already treat expired sessions as absent, so the sweeper only
    bounds storage growth; its timing never affects what callers see.
    """

    def __init__(self, sessions: SessionStore, *, interval_seconds: float) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._sessions = sessions
        self._interval = interval_seconds
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_once(self) -> int:
        try:
            return self._sessions.purge_expired()
        except AppError as exc:
            logger.warning(f"sessions.sweeper: purge failed code={exc.code}")
            return 0

    def _run(self) -> None:
        logger.info(f"sessions.sweeper: started interval={self._interval}s")
        while not self._stop.wait(self._interval):
            self.run_once()
        logger.info("sessions.sweeper: stopped")

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="session-sweeper", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None


__all__ = ["SessionSweeper"]
