# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Services package."""
from src.services import currency_service, memory_cache, user_settings_service

__all__ = [
    "currency_service",
    "memory_cache",
    "user_settings_service",
]
