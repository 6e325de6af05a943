"""Content storage protocol.

Defines the interface for the bounded key to blob store that sits in
front of the network. Implementations decide the eviction policy.
"""

from collections.abc import Hashable
from typing import Protocol, runtime_checkable

from poster_cache.entities import CacheEntry


@runtime_checkable
class ContentStore(Protocol):
    """Protocol for content cache backends.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed.

    Both operations are non-blocking and safe to call concurrently.
    Absence is the only negative outcome; neither operation raises.
    """

    def get(self, key: Hashable) -> CacheEntry | None:
        """Look up an entry.

        Args:
            key: The cache key

        Returns:
            The stored entry, or None if absent
        """
        ...

    def put(self, key: Hashable, content: bytes) -> None:
        """Insert or overwrite an entry.

        May evict other entries to respect the store's bound.

        Args:
            key: The cache key
            content: Raw bytes to store
        """
        ...
