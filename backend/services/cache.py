"""Simple in-memory TTL cache, one slot per feed.

Note: each uvicorn worker has its own cache instance. With more than one
worker an upstream may be fetched once per worker. Acceptable for a single
display polling a handful of endpoints.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    value: Any
    fetched_at: float
    ttl_seconds: float

    def is_live(self, now: float) -> bool:
        return now - self.fetched_at < self.ttl_seconds


class TTLCache:
    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._store: dict[str, CacheEntry] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def get(self, key: str) -> Any | None:
        entry = self._store.get(key)
        if entry is not None and entry.is_live(self._clock()):
            return entry.value
        return None

    def set(self, key: str, value: Any, ttl_seconds: float = 60) -> None:
        self._store[key] = CacheEntry(value, self._clock(), ttl_seconds)

    def invalidate(self, key: str) -> None:
        self._store.pop(key, None)

    async def get_or_fetch(
        self,
        key: str,
        ttl_seconds: float,
        fetch: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Return the live value for ``key`` or refresh it with ``fetch``.

        A failing fetch propagates and leaves the previous entry as it was,
        including its original timestamp, so it expires on schedule.
        Concurrent misses on the same key wait for a single fetch.
        """
        entry = self._store.get(key)
        if entry is not None and entry.is_live(self._clock()):
            return entry.value

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            # Another caller may have refreshed while we waited
            entry = self._store.get(key)
            if entry is not None and entry.is_live(self._clock()):
                return entry.value

            logger.debug("Cache miss for %s, fetching", key)
            value = await fetch()
            self.set(key, value, ttl_seconds=ttl_seconds)
            return value
