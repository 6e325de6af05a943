"""Signature-sniffing implementation of Decoder.

Pixels are never decoded or transformed. The decoder only checks that the
payload starts with a known image signature and tags its media type, which
is all a consumer needs to display or serve it.
"""

from collections.abc import Hashable

from poster_cache.entities import Poster
from poster_cache.errors import DecodeError

# (prefix, media type); WebP is matched separately (RIFF....WEBP)
_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
)


def sniff_media_type(data: bytes) -> str | None:
    """Return the image media type for a payload, or None if unrecognised."""
    for prefix, media_type in _SIGNATURES:
        if data.startswith(prefix):
            return media_type
    if len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return None


class PosterDecoder:
    """Decoder that accepts JPEG, PNG, GIF and WebP payloads."""

    def decode(self, key: Hashable, data: bytes) -> Poster:
        """Validate bytes and wrap them as a Poster.

        Args:
            key: The key the bytes belong to
            data: Raw content

        Returns:
            The tagged poster

        Raises:
            DecodeError: If the payload is empty or not a known image format
        """
        if not data:
            raise DecodeError(key, "empty payload")

        media_type = sniff_media_type(data)
        if media_type is None:
            raise DecodeError(key, f"unrecognised image signature {data[:8]!r}")

        return Poster(key=key, media_type=media_type, data=data)
