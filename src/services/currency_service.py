# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Exchange rate lookups backed by Open Exchange Rates.

Rates are served from three layers in order: the in-process response
cache, the persisted 24-hour rate cache, and finally the upstream
provider. Rates fetched upstream are written back to both caches.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.config import settings
from src.models import RateCache
from src.services import memory_cache, user_settings_service
from src.services.memory_cache import SUPPORTED_CURRENCIES_KEY, MemoryCache

logger = logging.getLogger(__name__)


@dataclass
class RatesResult:
    """Rates for a set of targets relative to one base currency."""

    base: str
    rates: dict[str, Decimal]


@dataclass
class ConversionResult:
    """Result of a currency conversion."""

    original_amount: Decimal
    original_currency: str
    converted_amount: Decimal
    target_currency: str
    exchange_rate: Decimal


class CurrencyServiceError(Exception):
    """Base exception for currency service errors."""


class MissingTargetsError(CurrencyServiceError):
    """No target currencies were requested."""


class InvalidCurrencyError(CurrencyServiceError):
    """A currency code is not known to the provider."""


class ProviderError(CurrencyServiceError):
    """The upstream rate provider failed."""


class ProviderAuthError(ProviderError):
    """The provider rejected our API key."""


class ProviderRateLimitError(ProviderError):
    """The provider's request quota is exhausted."""


class ProviderUnavailableError(ProviderError):
    """The provider could not be reached."""


class ProviderResponseError(ProviderError):
    """The provider answered with an unexpected error status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


def parse_currency_codes(raw: str | list[str] | None) -> list[str]:
    """Normalize a comma separated string or list of codes.

    Codes are stripped and uppercased, empty items dropped and duplicates
    removed while keeping the first occurrence.
    """
    if not raw:
        return []
    items = raw.split(",") if isinstance(raw, str) else raw
    codes: list[str] = []
    for item in items:
        code = item.strip().upper()
        if code and code not in codes:
            codes.append(code)
    return codes


class CurrencyService:
    """Service for exchange rate lookups and their caching."""

    def __init__(
        self,
        db: Session,
        response_cache: MemoryCache | None = None,
        currencies_cache: MemoryCache | None = None,
    ) -> None:
        """Initialize the currency service.

        Args:
            db: Database session for the persisted rate cache and settings.
            response_cache: Short-lived cache of computed rate responses.
            currencies_cache: Cache of the supported-currency list.
        """
        self.db = db
        self.response_cache = response_cache or memory_cache.response_cache
        self.currencies_cache = currencies_cache or memory_cache.currencies_cache
        self._http_client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(
                base_url=settings.open_exchange_api_url,
                timeout=settings.provider_timeout_seconds,
            )
        return self._http_client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def fetch_latest_rates(self) -> dict[str, Decimal]:
        """Fetch the latest USD based rates from the provider.

        Returns:
            Mapping of currency code to rate against USD.

        Raises:
            ProviderAuthError: On HTTP 401.
            ProviderRateLimitError: On HTTP 429.
            ProviderResponseError: On any other HTTP error status.
            ProviderUnavailableError: If the provider cannot be reached.
            CurrencyServiceError: On any other failure.
        """
        try:
            client = await self._get_client()
            response = await client.get(
                "/latest.json",
                params={"app_id": settings.open_exchange_api_key},
            )
            response.raise_for_status()
            data = response.json()
            return {
                code: Decimal(str(value)) for code, value in data["rates"].items()
            }
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(f"Rate provider returned HTTP {status_code}")
            if status_code == 401:
                raise ProviderAuthError(
                    "Rate provider rejected the API key"
                ) from e
            if status_code == 429:
                raise ProviderRateLimitError(
                    "Rate provider request limit exceeded"
                ) from e
            raise ProviderResponseError(
                f"Rate provider returned an error: {status_code}", status_code
            ) from e
        except (httpx.ConnectError, httpx.ConnectTimeout) as e:
            logger.error(f"Rate provider unreachable: {e}")
            raise ProviderUnavailableError("Rate provider is unavailable") from e
        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch rates: {e}")
            raise CurrencyServiceError(f"Failed to fetch rates: {e}") from e
        except (
            KeyError, TypeError, ValueError, AttributeError, ArithmeticError
        ) as e:
            logger.error(f"Invalid API response: {e}")
            raise CurrencyServiceError(f"Invalid API response: {e}") from e

    async def get_supported_currencies(self) -> list[str]:
        """Return the sorted list of currency codes the provider knows.

        The list is cached in memory for an hour.
        """
        cached = self.currencies_cache.get(SUPPORTED_CURRENCIES_KEY)
        if cached is not None:
            return list(cached)

        rates = await self.fetch_latest_rates()
        currencies = sorted(rates)
        self.currencies_cache.set(SUPPORTED_CURRENCIES_KEY, currencies)
        return list(currencies)

    async def get_rates(
        self,
        user_id: str,
        targets: str | list[str] | None,
        base: str | None = None,
    ) -> RatesResult:
        """Get rates from base to each of targets.

        When base is omitted the visitor's preferred base currency is used.
        Each target is looked up in the persisted cache first; the provider
        is called once for whatever is missing.

        Args:
            user_id: Visitor identifier.
            targets: Target codes, as a list or comma separated string.
            base: Base currency code.

        Returns:
            RatesResult with one rate per target, in request order.

        Raises:
            MissingTargetsError: If no targets were given.
            InvalidCurrencyError: If base or a target is unknown.
            ProviderError: If the provider call fails.
            SQLAlchemyError: If the database cannot be read.
        """
        target_codes = parse_currency_codes(targets)
        if not target_codes:
            raise MissingTargetsError("targets is required")

        base = base.strip().upper() if base else None
        if not base:
            base = user_settings_service.get_or_create_settings(
                self.db, user_id
            ).base_currency

        cache_key = f"{user_id}_{base}_{','.join(target_codes)}"
        cached = self.response_cache.get(cache_key)
        if cached is not None:
            return cached

        rates: dict[str, Decimal] = {}
        missing_targets: list[str] = []
        for target in target_codes:
            cached_rate = self._get_cached_rate(base, target)
            if cached_rate is not None:
                rates[target] = cached_rate
            else:
                missing_targets.append(target)

        if missing_targets:
            logger.info(
                f"24h cache miss for {base} -> {','.join(missing_targets)}, "
                "calling rate provider"
            )
            rates.update(await self._fetch_and_cache_rates(base, missing_targets))

        result = RatesResult(
            base=base,
            rates={target: rates[target] for target in target_codes},
        )
        self.response_cache.set(cache_key, result)
        return result

    def _get_cached_rate(self, base: str, target: str) -> Decimal | None:
        """Return the persisted rate for a pair if it is still fresh."""
        fresh_after = datetime.utcnow() - timedelta(
            hours=settings.rate_cache_freshness_hours
        )
        cached = (
            self.db.query(RateCache)
            .filter(
                RateCache.base_currency == base,
                RateCache.target_currency == target,
                RateCache.created_at > fresh_after,
            )
            .first()
        )
        return cached.rate if cached is not None else None

    async def _fetch_and_cache_rates(
        self, base: str, targets: list[str]
    ) -> dict[str, Decimal]:
        """Fetch rates for targets from the provider and persist them.

        The provider quotes everything against USD, so cross rates are
        derived as rates[target] / rates[base].
        """
        provider_rates = await self.fetch_latest_rates()

        base_rate = provider_rates.get(base)
        if not base_rate:
            raise InvalidCurrencyError(f"Invalid base currency: {base}")
        unknown = [target for target in targets if not provider_rates.get(target)]
        if unknown:
            raise InvalidCurrencyError(f"Invalid currency code: {','.join(unknown)}")

        fetched: dict[str, Decimal] = {}
        for target in targets:
            rate = provider_rates[target] / base_rate
            fetched[target] = rate
            self._cache_rate(base, target, rate)
        return fetched

    def _cache_rate(self, base: str, target: str, rate: Decimal) -> None:
        """Store a rate in the persisted cache, updating if it exists.

        A failed write is logged and rolled back; the fetched rate is
        still served.
        """
        try:
            existing = (
                self.db.query(RateCache)
                .filter(
                    RateCache.base_currency == base,
                    RateCache.target_currency == target,
                )
                .first()
            )

            if existing:
                existing.rate = rate
                existing.created_at = datetime.utcnow()
            else:
                self.db.add(
                    RateCache(
                        base_currency=base,
                        target_currency=target,
                        rate=rate,
                        created_at=datetime.utcnow(),
                    )
                )

            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to cache rate {base} -> {target}: {e}")

    async def convert(
        self,
        user_id: str,
        amount: Decimal,
        to_currency: str,
        from_currency: str | None = None,
    ) -> ConversionResult:
        """Convert an amount from one currency to another.

        Args:
            user_id: Visitor identifier, used when from_currency is omitted.
            amount: Amount to convert.
            to_currency: Target currency code.
            from_currency: Source currency code, defaults to the visitor's base.

        Returns:
            ConversionResult with the amount rounded to two decimal places.
        """
        result = await self.get_rates(user_id, [to_currency], from_currency)
        target, rate = next(iter(result.rates.items()))
        converted = (amount * rate).quantize(Decimal("0.01"))

        return ConversionResult(
            original_amount=amount,
            original_currency=result.base,
            converted_amount=converted,
            target_currency=target,
            exchange_rate=rate,
        )
