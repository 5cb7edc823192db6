"""
In-memory TTL cache for the derived collections.

Each key holds (payload, timestamp). A read hits while now - timestamp < ttl;
otherwise the caller's compute function runs and its result replaces the
entry. Failed computations are not cached. Concurrent misses on one key
share a single computation.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TTL_SECONDS = 600.0


@dataclass(frozen=True)
class CacheEntry:
    data: Any
    timestamp: float


class TTLCache:
    def __init__(
        self,
        ttls: Optional[Dict[str, float]] = None,
        default_ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.ttls = dict(ttls or {})
        self.default_ttl = default_ttl
        self.clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    def ttl_for(self, key: str) -> float:
        return self.ttls.get(key, self.default_ttl)

    def get_entry(self, key: str) -> Optional[CacheEntry]:
        """The entry for key if it is still fresh, else None."""
        entry = self._entries.get(key)
        if entry is not None and self.clock() - entry.timestamp < self.ttl_for(key):
            return entry
        return None

    def set(self, key: str, data: Any) -> None:
        self._entries[key] = CacheEntry(data=data, timestamp=self.clock())

    async def get_or_compute(self, key: str, compute: Callable[[], Awaitable[T]]) -> T:
        entry = self.get_entry(key)
        if entry is not None:
            logger.debug(f"Cache hit for {key}")
            return entry.data

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            # Another task may have refreshed the key while we waited
            entry = self.get_entry(key)
            if entry is not None:
                return entry.data

            logger.info(f"Cache miss for {key}, refreshing")
            data = await compute()
            self.set(key, data)
            return data
