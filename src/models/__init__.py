# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Database models package."""

from src.models.base import Base, TimestampMixin
from src.models.rate_cache import RateCache
from src.models.user_settings import UserSettings

__all__ = [
    "Base",
    "RateCache",
    "TimestampMixin",
    "UserSettings",
]
