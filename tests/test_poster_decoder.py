"""
Tests for signature-based poster decoding.
"""

import pytest

from poster_cache.errors import DecodeError
from poster_cache.repositories import PosterDecoder
from poster_cache.repositories.poster_decoder import sniff_media_type


@pytest.mark.parametrize(
    "data, media_type",
    [
        (b"\xff\xd8\xff\xe0rest", "image/jpeg"),
        (b"\x89PNG\r\n\x1a\nrest", "image/png"),
        (b"GIF89arest", "image/gif"),
        (b"RIFF\x00\x00\x00\x00WEBPVP8 ", "image/webp"),
    ],
)
def test_known_formats_are_tagged(data, media_type):
    """Supported image signatures decode to a tagged poster."""
    poster = PosterDecoder().decode("k", data)

    assert poster.media_type == media_type
    assert poster.data == data
    assert poster.key == "k"


def test_empty_payload_is_rejected():
    """An empty body is not a poster."""
    with pytest.raises(DecodeError):
        PosterDecoder().decode("k", b"")


def test_unknown_payload_is_rejected():
    """HTML error pages and other junk are not posters."""
    with pytest.raises(DecodeError) as exc_info:
        PosterDecoder().decode("k", b"<html>404</html>")

    assert exc_info.value.key == "k"


def test_truncated_riff_is_not_webp():
    """A RIFF header without the WEBP tag is unrecognised."""
    assert sniff_media_type(b"RIFF\x00\x00") is None
