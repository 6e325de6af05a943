"""Cache entry domain entity."""

from collections.abc import Hashable
from dataclasses import dataclass


@dataclass(frozen=True)
class CacheEntry:
    """Raw content stored in the content cache.

    Once inserted the entry is owned by the cache. Callers receive the same
    immutable object, so an eviction racing with a read never invalidates
    the bytes the reader already holds.

    Attributes:
        key: The cache key (usually the poster URL)
        content: The raw fetched bytes
    """

    key: Hashable
    content: bytes

    @property
    def size(self) -> int:
        """Size of the stored content in bytes."""
        return len(self.content)
