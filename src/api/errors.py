# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Translation of service errors into HTTP errors."""

from fastapi import HTTPException, status

from src.services.currency_service import (
    CurrencyServiceError,
    InvalidCurrencyError,
    MissingTargetsError,
    ProviderAuthError,
    ProviderRateLimitError,
    ProviderResponseError,
    ProviderUnavailableError,
)


def http_error_for(
    error: CurrencyServiceError, fallback_detail: str
) -> HTTPException:
    """Map a currency service error to the HTTPException to raise.

    Upstream auth failures and error statuses become 502, rate limiting
    and unreachable upstreams 503, bad input 400 and anything else 500.
    """
    if isinstance(error, (MissingTargetsError, InvalidCurrencyError)):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(error)
        )
    if isinstance(error, ProviderAuthError):
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Rate provider authorization failed (invalid API key)",
        )
    if isinstance(error, ProviderRateLimitError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Rate provider request limit exceeded",
        )
    if isinstance(error, ProviderUnavailableError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Rate provider is unavailable",
        )
    if isinstance(error, ProviderResponseError):
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Rate provider returned an error: {error.status_code}",
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=fallback_detail,
    )
