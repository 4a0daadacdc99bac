# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""In-process TTL caches and their periodic cleanup."""

import asyncio
import logging
import time
from collections.abc import Callable, Iterable
from typing import Any

from cachetools import TTLCache

from src.config import settings

logger = logging.getLogger(__name__)

# Key under which the supported-currency list is stored
SUPPORTED_CURRENCIES_KEY = "supported_currencies"


class MemoryCache:
    """Named wrapper around ``cachetools.TTLCache``.

    Expired entries are never returned; they are dropped lazily on access
    and eagerly by ``expire()``.
    """

    def __init__(
        self,
        name: str,
        ttl: float,
        maxsize: int = 1024,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self.name = name
        self._cache: TTLCache[str, Any] = TTLCache(
            maxsize=maxsize, ttl=ttl, timer=timer
        )

    def get(self, key: str) -> Any | None:
        """Return the cached value for key, or None if missing or expired."""
        value = self._cache.get(key)
        if value is None:
            logger.debug(f"{self.name} cache miss: {key}")
        else:
            logger.debug(f"{self.name} cache hit: {key}")
        return value

    def set(self, key: str, value: Any) -> None:
        """Store value under key, restarting its time-to-live."""
        self._cache[key] = value

    def clear(self) -> None:
        """Drop every entry."""
        self._cache.clear()

    def expire(self) -> None:
        """Remove all entries whose time-to-live has elapsed."""
        self._cache.expire()

    def __contains__(self, key: str) -> bool:
        return key in self._cache


response_cache = MemoryCache(
    "rates",
    ttl=settings.response_cache_ttl_seconds,
    maxsize=settings.memory_cache_max_entries,
)
currencies_cache = MemoryCache(
    "currencies",
    ttl=settings.currencies_cache_ttl_seconds,
    maxsize=1,
)


async def run_cleanup_loop(caches: Iterable[MemoryCache], interval: float) -> None:
    """Purge expired entries from every cache each interval seconds.

    Runs until cancelled.
    """
    caches = list(caches)
    while True:
        await asyncio.sleep(interval)
        for cache in caches:
            cache.expire()
            logger.debug(f"Expired stale entries from {cache.name} cache")
