# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .users import Session, User

__all__ = ["Session", "User"]
