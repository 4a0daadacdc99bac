# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Exchange rate schemas."""
from pydantic import BaseModel


class RatesResponse(BaseModel):
    """Rates for the requested targets against one base currency."""

    base: str
    rates: dict[str, float]


class ConversionResponse(BaseModel):
    """Currency conversion response."""

    original_amount: str
    original_currency: str
    converted_amount: str
    target_currency: str
    exchange_rate: str
