# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(slots=True, frozen=True)
class User:

    id: int
    email: str
    password_hash: str
    first_name: str
    last_name: str
    company_name: str
    company_address: str
    created_at: datetime

    def to_public_dict(self) -> dict[str, Any]:
        """Profile fields safe to hand back to the client; never the credential."""
        return {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "company_name": self.company_name,
            "company_address": self.company_address,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(slots=True, frozen=True)
class Session:

    token: str
    user_id: int
    created_at: datetime
    expires_at: datetime

    def is_active_at(self, now: datetime) -> bool:
        return now < self.expires_at
