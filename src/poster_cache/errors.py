"""Error taxonomy for the poster cache.

None of these are fatal to the process. The loader turns fetch and decode
failures into "no value", the prefetcher swallows them, and the watched
set treats storage failures as an empty read or a dropped write.
"""

from collections.abc import Hashable


class PosterCacheError(Exception):
    """Base class for poster cache errors."""


class FetchError(PosterCacheError):
    """Retrieving bytes for a key failed (transport, timeout, bad status)."""

    def __init__(self, key: Hashable, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Failed to fetch {key}: {reason}")


class DecodeError(PosterCacheError):
    """Bytes for a key are not a valid content payload."""

    def __init__(self, key: Hashable, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Failed to decode {key}: {reason}")


class StorageError(PosterCacheError):
    """Persisted storage read or write failed."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Storage failure for '{name}': {reason}")
