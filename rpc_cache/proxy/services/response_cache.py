"""
Response Cache - per-entry TTL cache for upstream replies.

The proxy only depends on the ResponseCache protocol; InMemoryResponseCache
is the default backend.
"""

import logging
import time
from typing import Callable, Optional, Protocol

from cachetools import TLRUCache

from ..models import CacheEntry

logger = logging.getLogger("proxy.response_cache")


class ResponseCache(Protocol):
    """Key/value store of cached responses with TTL-aware eviction."""

    async def get(self, key: str) -> Optional[CacheEntry]:
        """Return the live entry for key, or None."""
        ...

    async def put(self, key: str, entry: CacheEntry, ttl: int) -> None:
        """Store entry under key for ttl seconds."""
        ...


def _expires_at(_key: str, entry: CacheEntry, _now: float) -> float:
    return entry.expires_at


class InMemoryResponseCache:
    """
    TLRU cache of CacheEntry objects using cachetools.

    Note: This cache is designed for single-threaded async environments (FastAPI/uvicorn).
    All operations are atomic in this context, so no locking is required.
    """

    def __init__(self, max_size: int = 10000, timer: Callable[[], float] = time.time):
        """
        Args:
            max_size: Maximum number of entries before LRU eviction
            timer: Clock returning epoch seconds (injectable for tests)
        """
        self.max_size = max_size
        self._timer = timer
        self._cache = TLRUCache(maxsize=max_size, ttu=_expires_at, timer=timer)

        logger.debug(f"InMemoryResponseCache initialized: max_size={max_size}")

    async def get(self, key: str) -> Optional[CacheEntry]:
        # TLRUCache.get() drops expired entries on access.
        return self._cache.get(key)

    async def put(self, key: str, entry: CacheEntry, ttl: int) -> None:
        if ttl <= 0:
            return
        stored = entry.model_copy(update={"ttl": ttl, "expires_at": self._timer() + ttl})
        self._cache[key] = stored
        logger.debug(f"Cached {key} for {ttl}s")

    def __len__(self) -> int:
        self._cache.expire()
        return len(self._cache)
