"""Decoder protocol: raw bytes to a displayable value."""

from collections.abc import Hashable
from typing import Protocol, runtime_checkable

from poster_cache.entities import Poster


@runtime_checkable
class Decoder(Protocol):
    """Protocol for payload decoders."""

    def decode(self, key: Hashable, data: bytes) -> Poster:
        """Decode fetched or cached bytes.

        Args:
            key: The key the bytes belong to
            data: Raw content

        Returns:
            The displayable poster

        Raises:
            DecodeError: If the bytes are not a valid payload
        """
        ...
