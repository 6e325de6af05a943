"""Fetcher protocol.

A fetcher retrieves raw bytes for a key from a remote source. It has no
caching logic and performs no retries: one failed fetch is one reported
failure.
"""

from collections.abc import Hashable
from typing import Protocol, runtime_checkable


@runtime_checkable
class Fetcher(Protocol):
    """Protocol for remote content sources."""

    async def fetch(self, key: Hashable) -> bytes:
        """Retrieve the bytes for a key.

        Args:
            key: The resource locator

        Returns:
            The raw content

        Raises:
            FetchError: On any transport, timeout or status failure
        """
        ...
