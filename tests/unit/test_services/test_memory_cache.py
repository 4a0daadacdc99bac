# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for memory_cache."""

import asyncio
from unittest.mock import MagicMock

import pytest

from src.services.memory_cache import MemoryCache, run_cleanup_loop


class FakeClock:
    """Manually advanced clock for TTL caches."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return MemoryCache("test", ttl=300, timer=clock)


class TestMemoryCache:
    """Tests for MemoryCache."""

    def test_get_missing_returns_none(self, cache):
        assert cache.get("missing") is None

    def test_returns_value_within_ttl(self, cache, clock):
        cache.set("key", {"base": "USD"})
        clock.now += 299
        assert cache.get("key") == {"base": "USD"}

    def test_expired_value_is_not_returned(self, cache, clock):
        cache.set("key", "value")
        clock.now += 301
        assert cache.get("key") is None
        assert "key" not in cache

    def test_set_restarts_ttl(self, cache, clock):
        cache.set("key", "old")
        clock.now += 200
        cache.set("key", "new")
        clock.now += 200
        assert cache.get("key") == "new"

    def test_expire_keeps_fresh_entries(self, cache, clock):
        cache.set("old", 1)
        clock.now += 200
        cache.set("fresh", 2)
        clock.now += 150
        cache.expire()
        assert "old" not in cache
        assert cache.get("fresh") == 2

    def test_clear(self, cache):
        cache.set("key", "value")
        cache.clear()
        assert cache.get("key") is None


class TestCleanupLoop:
    """Tests for run_cleanup_loop."""

    @pytest.mark.asyncio
    async def test_expires_every_cache_until_cancelled(self):
        first = MagicMock(spec=MemoryCache)
        first.name = "first"
        second = MagicMock(spec=MemoryCache)
        second.name = "second"

        task = asyncio.create_task(run_cleanup_loop([first, second], 0))
        for _ in range(5):
            await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert first.expire.call_count >= 1
        assert second.expire.call_count >= 1

    @pytest.mark.asyncio
    async def test_waits_for_interval_before_first_pass(self):
        cache = MagicMock(spec=MemoryCache)
        cache.name = "cache"

        task = asyncio.create_task(run_cleanup_loop([cache], 60))
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        cache.expire.assert_not_called()
