# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Pydantic schemas package."""
from src.schemas.common import HealthResponse
from src.schemas.rates import ConversionResponse, RatesResponse
from src.schemas.user_settings import UserSettingsResponse, UserSettingsUpdate

__all__ = [
    "ConversionResponse",
    "HealthResponse",
    "RatesResponse",
    "UserSettingsResponse",
    "UserSettingsUpdate",
]
