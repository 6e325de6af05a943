"""Persisted id storage protocol.

A key-value store keyed by a fixed string name whose value is an ordered
sequence of integers. Used to persist the watched list.
"""

from collections.abc import Iterable
from typing import Protocol, runtime_checkable


@runtime_checkable
class IdStore(Protocol):
    """Protocol for persisted integer-sequence storage."""

    async def read(self, name: str) -> list[int] | None:
        """Read the stored sequence.

        Args:
            name: The fixed storage name

        Returns:
            The stored ids, or None if nothing is stored under the name

        Raises:
            StorageError: If the backend cannot be reached
            ValueError: If the stored value is malformed
        """
        ...

    async def write(self, name: str, ids: Iterable[int]) -> None:
        """Replace the stored sequence in full.

        Args:
            name: The fixed storage name
            ids: The complete sequence to persist

        Raises:
            StorageError: If the backend cannot be reached
        """
        ...

    async def health_check(self) -> bool:
        """Check if the backend is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
