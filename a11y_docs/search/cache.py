"""
Content Cache

Maps article path to previously fetched body text and is checked before any
network retrieval. One instance is shared by every search running in the
process, so all access goes through a lock.

Defaults keep every entry for the life of the process and remember failed
fetches as empty strings, which bounds external calls for a small, slowly
changing collection. Long-lived deployments can cap the entry count (LRU
eviction), expire entries after a TTL, or turn failure caching off.
"""

import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass


@dataclass
class CacheStats:
    """Counters for cache activity."""

    hits: int = 0
    misses: int = 0
    evictions: int = 0
    expirations: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "expirations": self.expirations,
        }


class ContentCache:
    """Thread-safe path → content store.

    Attributes:
        max_entries: Capacity before LRU eviction (None: unbounded)
        ttl_seconds: Entry lifetime (None: never expires)
        cache_failures: Whether empty content from failed fetches is stored
        stats: Hit/miss/eviction counters
    """

    def __init__(
        self,
        max_entries: int | None = None,
        ttl_seconds: float | None = None,
        cache_failures: bool = True,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            max_entries: Maximum number of entries kept (None for unbounded)
            ttl_seconds: Seconds before an entry expires (None for never)
            cache_failures: Store empty-string results of failed fetches
            clock: Optional monotonic clock for testing (defaults to time.monotonic)

        Raises:
            ValueError: If max_entries or ttl_seconds is not positive
        """
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        if ttl_seconds is not None and ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")

        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self.cache_failures = cache_failures
        self.stats = CacheStats()

        self._clock = clock or time.monotonic
        self._lock = threading.Lock()
        # path -> (content, stored_at)
        self._entries: OrderedDict[str, tuple[str, float]] = OrderedDict()

    def get(self, path: str) -> str | None:
        """Return cached content for ``path``, or None on a miss.

        An empty string is a hit: it records an earlier failed fetch.
        """
        with self._lock:
            entry = self._entries.get(path)
            if entry is None:
                self.stats.misses += 1
                return None

            content, stored_at = entry
            if self._is_expired(stored_at):
                del self._entries[path]
                self.stats.expirations += 1
                self.stats.misses += 1
                return None

            self._entries.move_to_end(path)
            self.stats.hits += 1
            return content

    def put(self, path: str, content: str) -> None:
        """Store ``content`` for ``path``.

        Empty content is dropped when failure caching is off.
        """
        if not content and not self.cache_failures:
            return

        with self._lock:
            self._entries[path] = (content, self._clock())
            self._entries.move_to_end(path)
            if self.max_entries is not None:
                while len(self._entries) > self.max_entries:
                    self._entries.popitem(last=False)
                    self.stats.evictions += 1

    def clear(self) -> None:
        """Drop every entry (counters are kept)."""
        with self._lock:
            self._entries.clear()

    def _is_expired(self, stored_at: float) -> bool:
        if self.ttl_seconds is None:
            return False
        return self._clock() - stored_at >= self.ttl_seconds

    def __contains__(self, path: object) -> bool:
        with self._lock:
            entry = self._entries.get(path)  # type: ignore[call-overload]
            return entry is not None and not self._is_expired(entry[1])

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
