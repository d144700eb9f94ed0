"""
Embedding cache and rate limiter.

Deduplicates embedding requests by normalized text and spaces outbound
embedding calls at least MIN_REQUEST_INTERVAL_SECONDS apart. One instance is
shared by every workspace of the process and injected into the ingestion
and retrieval call sites.

State is deliberately unsynchronized: two concurrent misses for the same
text both pay the embedding cost, and the limiter timestamp update is not
atomic against concurrent readers.

Dependencies: asyncio, time
System role: Best-effort optimization layer in front of the embedding model
"""

import asyncio
import logging
import time
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from devmind.observability.log_utils import safe_log_value

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 30 * 60
MAX_CACHE_ENTRIES = 500
MIN_REQUEST_INTERVAL_SECONDS = 1.0


@dataclass
class CacheEntry:
    """Cached vector and the clock reading at insertion."""

    vector: list[float]
    inserted_at: float


class EmbeddingCache:
    """
    TTL cache of query embeddings plus a process-wide call limiter.

    Eviction is by insertion order, not recency of use.
    """

    def __init__(
        self,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        max_entries: int = MAX_CACHE_ENTRIES,
        min_interval_seconds: float = MIN_REQUEST_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """
        Initialize an empty cache.

        Args:
            ttl_seconds: Lifetime of an entry
            max_entries: Entry count ceiling
            min_interval_seconds: Minimum spacing between two embedding calls
            clock: Monotonic clock in seconds
            sleep: Coroutine suspending the caller for a number of seconds
        """
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")

        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._min_interval = min_interval_seconds
        self._clock = clock
        self._sleep = sleep
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._last_request_at: float | None = None

    @staticmethod
    def normalize(text: str) -> str:
        """Cache key for a text: trimmed and case-folded."""
        return text.strip().casefold()

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, text: str) -> list[float] | None:
        """
        Return the cached vector for text, or None on miss.

        An expired entry is evicted on read and reported as a miss.
        """
        key = self.normalize(text)
        entry = self._entries.get(key)
        if entry is None:
            return None

        if self._clock() - entry.inserted_at < self._ttl:
            logger.debug(f"{__name__}:lookup - Cache HIT for '{safe_log_value(text, 30)}'")
            return entry.vector

        del self._entries[key]
        return None

    def store(self, text: str, vector: list[float]) -> None:
        """
        Cache a vector under the normalized text.

        Storing an existing key re-inserts it as the newest entry. When a new
        key would exceed the ceiling, the oldest-inserted entry is evicted first.
        """
        key = self.normalize(text)
        if key in self._entries:
            del self._entries[key]
        elif len(self._entries) >= self._max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"{__name__}:store - Evicted oldest entry '{safe_log_value(evicted, 30)}'")

        self._entries[key] = CacheEntry(vector=vector, inserted_at=self._clock())
        logger.debug(f"{__name__}:store - Cache SET, total cached: {len(self._entries)}")

    async def throttle(self) -> float:
        """
        Suspend until the next embedding call may be emitted, then stamp it.

        Returns:
            float: Seconds spent waiting
        """
        waited = 0.0
        if self._last_request_at is not None:
            elapsed = self._clock() - self._last_request_at
            if elapsed < self._min_interval:
                waited = self._min_interval - elapsed
                logger.info(f"{__name__}:throttle - Waiting {waited * 1000:.0f}ms before next request")
                await self._sleep(waited)

        self._last_request_at = self._clock()
        return waited

    def clear(self) -> None:
        """Drop every cached embedding."""
        self._entries.clear()
        logger.info(f"{__name__}:clear - Cleared all cached embeddings")
