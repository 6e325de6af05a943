"""In-memory implementation of ContentStore.

The process-wide poster cache. Eviction is delegated to a byte-bounded
``cachetools.LRUCache``; this class only adds locking, entry wrapping and
hit/miss counters.
"""

import threading
from collections.abc import Hashable

import structlog
from cachetools import LRUCache

from poster_cache.config import settings
from poster_cache.entities import CacheEntry

logger = structlog.get_logger(__name__)


class ContentCache:
    """Thread-safe, byte-bounded key to blob cache.

    This class satisfies the ContentStore protocol through structural
    typing - no explicit inheritance needed.

    The bound is the total size of stored content in bytes. When a put would
    exceed it, the underlying store discards the least recently used entries.
    Entries are immutable, so a reader that already holds one keeps valid
    bytes even if the entry is evicted mid-read.

    All operations are guarded by a reentrant lock.
    """

    def __init__(self, max_bytes: int | None = None) -> None:
        """Initialize the content cache.

        Args:
            max_bytes: Total content size bound. Defaults to settings.cache_max_bytes.

        Raises:
            ValueError: If max_bytes is not positive
        """
        if max_bytes is None:
            max_bytes = settings.cache_max_bytes
        if max_bytes <= 0:
            raise ValueError(f"max_bytes must be positive, got {max_bytes}")

        self._max_bytes = max_bytes
        self._store: LRUCache = LRUCache(maxsize=self._max_bytes, getsizeof=lambda entry: entry.size)
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0

    @classmethod
    def create(cls, max_bytes: int | None = None) -> "ContentCache":
        """Factory method to create ContentCache with defaults.

        Args:
            max_bytes: Size bound in bytes. If None, uses settings.

        Returns:
            Configured ContentCache
        """
        return cls(max_bytes=max_bytes)

    def get(self, key: Hashable) -> CacheEntry | None:
        """Look up an entry.

        Args:
            key: The cache key

        Returns:
            The stored entry, or None if absent
        """
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                self._misses += 1
            else:
                self._hits += 1
            return entry

    def put(self, key: Hashable, content: bytes) -> None:
        """Insert or overwrite an entry.

        Content larger than the whole bound is not stored.

        Args:
            key: The cache key
            content: Raw bytes to store
        """
        entry = CacheEntry(key=key, content=bytes(content))
        with self._lock:
            if entry.size > self._max_bytes:
                # Overwriting with an uncacheable value must not leave the stale one behind
                self._store.pop(key, None)
                logger.info(
                    "Content larger than cache bound, not cached",
                    key=key,
                    size=entry.size,
                    max_bytes=self._max_bytes,
                )
                return
            self._store[key] = entry

    def clear(self) -> None:
        """Remove every entry and reset counters."""
        with self._lock:
            self._store.clear()
            self._hits = 0
            self._misses = 0

    @property
    def size_bytes(self) -> int:
        """Total size of stored content in bytes."""
        with self._lock:
            return int(self._store.currsize)

    @property
    def max_bytes(self) -> int:
        """Configured size bound in bytes."""
        return self._max_bytes

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with entry count, sizes and hit/miss counters
        """
        with self._lock:
            return {
                "entries": len(self._store),
                "size_bytes": int(self._store.currsize),
                "max_bytes": self._max_bytes,
                "hits": self._hits,
                "misses": self._misses,
            }

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._store

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
