# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Visitor settings schemas."""
import datetime
import re

from pydantic import BaseModel, Field, field_validator

CURRENCY_CODE_PATTERN = re.compile(r"^[A-Z]{3}$")


def _normalize_code(code: str) -> str:
    code = code.strip().upper()
    if not CURRENCY_CODE_PATTERN.match(code):
        raise ValueError(f"Invalid currency code: {code}")
    return code


class UserSettingsUpdate(BaseModel):
    """Schema for updating visitor settings. Both fields are optional."""

    base_currency: str | None = Field(None, examples=["EUR"])
    favorites: list[str] | None = Field(None, examples=[["USD", "GBP"]])

    @field_validator("base_currency")
    @classmethod
    def validate_base_currency(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _normalize_code(v)

    @field_validator("favorites")
    @classmethod
    def validate_favorites(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return v
        codes: list[str] = []
        for item in v:
            code = _normalize_code(item)
            if code not in codes:
                codes.append(code)
        return codes


class UserSettingsResponse(BaseModel):
    """Schema for visitor settings response."""

    user_id: str
    base_currency: str
    favorites: list[str]
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = {"from_attributes": True}
