"""
Shared fixtures and fakes for the poster cache tests.
"""

import asyncio
from collections.abc import Hashable

import pytest

from poster_cache.errors import FetchError
from poster_cache.repositories import ContentCache, MemoryIdStore, PosterDecoder
from poster_cache.services import PosterService, Prefetcher, SingleFlight

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24
JPEG = b"\xff\xd8\xff\xe0" + b"\x00" * 24

IMAGE_BASE = "https://img.test/w500"
URL = f"{IMAGE_BASE}/poster.png"
OTHER_URL = f"{IMAGE_BASE}/other.jpg"


class FakeFetcher:
    """Fetcher returning canned bytes or raising canned errors.

    When ``gate`` is set, every fetch waits on it before answering, which
    lets tests hold a fetch in flight.
    """

    def __init__(self, responses: dict | None = None, gate: asyncio.Event | None = None) -> None:
        self.responses = dict(responses or {})
        self.gate = gate
        self.calls: list[Hashable] = []

    async def fetch(self, key: Hashable) -> bytes:
        self.calls.append(key)
        if self.gate is not None:
            await self.gate.wait()
        response = self.responses.get(key)
        if response is None:
            raise FetchError(key, "not found")
        if isinstance(response, BaseException):
            raise response
        return response


class CountingStore(ContentCache):
    """ContentCache that records every put."""

    def __init__(self, max_bytes: int = 1024 * 1024) -> None:
        super().__init__(max_bytes=max_bytes)
        self.puts: list[Hashable] = []

    def put(self, key: Hashable, content: bytes) -> None:
        self.puts.append(key)
        super().put(key, content)


class RecordingPrefetcher:
    """Prefetcher stand-in that only records scheduled keys."""

    def __init__(self) -> None:
        self.scheduled: list[Hashable | None] = []

    def schedule(self, key: Hashable | None) -> None:
        self.scheduled.append(key)


@pytest.fixture
def store() -> CountingStore:
    """Create an empty counting content cache."""
    return CountingStore()


@pytest.fixture
def decoder() -> PosterDecoder:
    """Create the poster decoder."""
    return PosterDecoder()


@pytest.fixture
def fetcher() -> FakeFetcher:
    """Create a fetcher that knows URL and OTHER_URL."""
    return FakeFetcher({URL: PNG, OTHER_URL: JPEG})


@pytest.fixture
def flights() -> SingleFlight:
    """Create a fresh single-flight group."""
    return SingleFlight()


@pytest.fixture
def prefetcher(store, fetcher, decoder, flights) -> Prefetcher:
    """Create a prefetcher sharing the test collaborators."""
    return Prefetcher(store=store, fetcher=fetcher, decoder=decoder, flights=flights)


@pytest.fixture
def poster_service(store, fetcher, decoder, flights, prefetcher) -> PosterService:
    """Create a poster service sharing the test collaborators."""
    return PosterService(
        store=store,
        fetcher=fetcher,
        decoder=decoder,
        flights=flights,
        prefetcher=prefetcher,
    )


@pytest.fixture
def id_store() -> MemoryIdStore:
    """Create an empty in-memory id store."""
    return MemoryIdStore()


async def wait_until(predicate, attempts: int = 100) -> None:
    """Yield to the event loop until ``predicate()`` holds."""
    for _ in range(attempts):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition not reached")
