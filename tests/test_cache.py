from __future__ import annotations

import asyncio

import pytest

from errors import UpstreamFetchError
from services.cache import TTLCache


class CountingFetch:
    def __init__(self, *values):
        self.values = list(values)
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        value = self.values.pop(0)
        if isinstance(value, Exception):
            raise value
        return value


@pytest.mark.asyncio
async def test_second_call_within_ttl_does_not_refetch(clock) -> None:
    cache = TTLCache(clock=clock)
    fetch = CountingFetch("a", "b")

    assert await cache.get_or_fetch("commits", 300, fetch) == "a"
    clock.advance(299)
    assert await cache.get_or_fetch("commits", 300, fetch) == "a"
    assert fetch.calls == 1


@pytest.mark.asyncio
async def test_expired_entry_is_refetched(clock) -> None:
    cache = TTLCache(clock=clock)
    fetch = CountingFetch("a", "b")

    await cache.get_or_fetch("commits", 300, fetch)
    clock.advance(300)

    assert await cache.get_or_fetch("commits", 300, fetch) == "b"
    assert fetch.calls == 2


@pytest.mark.asyncio
async def test_live_value_served_without_calling_upstream(clock) -> None:
    cache = TTLCache(clock=clock)
    await cache.get_or_fetch("weather", 900, CountingFetch("sunny"))

    failing = CountingFetch(UpstreamFetchError("owm", "down"))
    clock.advance(899)

    assert await cache.get_or_fetch("weather", 900, failing) == "sunny"
    assert failing.calls == 0


@pytest.mark.asyncio
async def test_failed_fetch_after_expiry_propagates_and_does_not_extend_entry(clock) -> None:
    cache = TTLCache(clock=clock)
    await cache.get_or_fetch("weather", 900, CountingFetch("sunny"))
    clock.advance(900)

    with pytest.raises(UpstreamFetchError):
        await cache.get_or_fetch("weather", 900, CountingFetch(UpstreamFetchError("owm", "down")))

    # The stale value is not served and its timestamp was not refreshed
    assert cache.get("weather") is None
    fetch = CountingFetch("rain")
    assert await cache.get_or_fetch("weather", 900, fetch) == "rain"
    assert fetch.calls == 1


@pytest.mark.asyncio
async def test_concurrent_misses_share_one_fetch(clock) -> None:
    cache = TTLCache(clock=clock)
    calls = 0

    async def slow_fetch():
        nonlocal calls
        calls += 1
        await asyncio.sleep(0.01)
        return calls

    results = await asyncio.gather(*[cache.get_or_fetch("contributions", 60, slow_fetch) for _ in range(5)])

    assert results == [1, 1, 1, 1, 1]
    assert calls == 1


def test_get_set_and_invalidate(clock) -> None:
    cache = TTLCache(clock=clock)
    cache.set("k", 0, ttl_seconds=10)
    assert cache.get("k") == 0

    cache.invalidate("k")
    assert cache.get("k") is None
    cache.invalidate("missing")
