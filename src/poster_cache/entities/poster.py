"""Decoded poster domain entity."""

from collections.abc import Hashable
from dataclasses import dataclass


@dataclass(frozen=True)
class Poster:
    """A displayable poster produced by a decoder.

    Attributes:
        key: The cache key the poster was loaded for
        media_type: MIME type sniffed from the payload (e.g. "image/jpeg")
        data: The image bytes
    """

    key: Hashable
    media_type: str
    data: bytes
