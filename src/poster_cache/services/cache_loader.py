"""Fetch-or-cache loading of a single poster.

A ``CacheLoader`` is bound to one key for its whole life and moves through
``IDLE -> LOADING -> DELIVERED | FAILED``. Both end states are terminal:
calling ``load()`` again returns the existing outcome without new work.
A consumer that wants another attempt creates a new loader.
"""

import asyncio
from collections.abc import Callable, Hashable
from enum import Enum
from functools import partial

import structlog

from poster_cache.entities import Poster
from poster_cache.errors import PosterCacheError
from poster_cache.protocols import ContentStore, Decoder, Fetcher
from poster_cache.services.single_flight import SingleFlight

logger = structlog.get_logger(__name__)


async def fetch_into_cache(
    key: Hashable,
    store: ContentStore,
    fetcher: Fetcher,
    decoder: Decoder,
) -> Poster:
    """Miss path shared by loaders and the prefetcher.

    Fetches, decodes, then stores the raw bytes. Nothing is stored unless
    the bytes decode. The cache is re-checked first so a caller that lost a
    race with a just-finished flight reuses its result instead of refetching.

    Raises:
        FetchError: If the fetch fails
        DecodeError: If the bytes are not a valid poster
    """
    entry = store.get(key)
    if entry is not None:
        return decoder.decode(key, entry.content)

    data = await fetcher.fetch(key)
    poster = decoder.decode(key, data)
    store.put(key, data)
    logger.debug("Poster fetched and cached", key=key, size=len(data))
    return poster


class LoaderState(str, Enum):
    """Lifecycle of a CacheLoader."""

    IDLE = "idle"
    LOADING = "loading"
    DELIVERED = "delivered"
    FAILED = "failed"


class CacheLoader:
    """Loads one poster through the content cache.

    Business logic:
    1. Cache hit: decode the stored bytes and deliver, no network activity
    2. Cache miss: fetch, decode, store the raw bytes once, deliver
    3. Fetch or decode failure: log and deliver nothing, no retry

    Concurrent misses for the same key are coalesced through the shared
    ``SingleFlight`` group, so N simultaneous loaders (or prefetches) of one
    uncached key cause one fetch and one cache put.

    Example:
        ```python
        loader = CacheLoader(url, store=cache, fetcher=fetcher, decoder=decoder,
                             flights=flights, on_result=view.show)
        poster = await loader.load()  # None on failure
        ```
    """

    def __init__(
        self,
        key: Hashable,
        store: ContentStore,
        fetcher: Fetcher,
        decoder: Decoder,
        flights: SingleFlight | None = None,
        on_result: Callable[[Poster], None] | None = None,
    ) -> None:
        """Initialize the loader.

        Args:
            key: The content key this loader is bound to
            store: The shared content cache
            fetcher: Remote source for misses
            decoder: Converts raw bytes to a Poster
            flights: Shared coalescing group. A private one is created if None.
            on_result: Observer called once with the poster on success
        """
        if key is None:
            raise ValueError("CacheLoader requires a key")

        self._key = key
        self._store = store
        self._fetcher = fetcher
        self._decoder = decoder
        self._flights = flights if flights is not None else SingleFlight()
        self._on_result = on_result
        self._state = LoaderState.IDLE
        self._result: Poster | None = None
        self._error: Exception | None = None
        self._detached = False
        self._pending: asyncio.Future | None = None

    async def load(self) -> Poster | None:
        """Load the poster, starting the work on the first call.

        Returns:
            The decoded poster, or None if loading failed
        """
        if self._pending is None:
            self._pending = asyncio.ensure_future(self._run())
        return await asyncio.shield(self._pending)

    async def _run(self) -> Poster | None:
        self._state = LoaderState.LOADING
        try:
            entry = self._store.get(self._key)
            if entry is not None:
                logger.debug("Cache hit", key=self._key)
                poster = self._decoder.decode(self._key, entry.content)
            else:
                logger.debug("Cache miss", key=self._key)
                poster = await self._flights.do(
                    self._key,
                    partial(fetch_into_cache, self._key, self._store, self._fetcher, self._decoder),
                )
        except PosterCacheError as e:
            self._state = LoaderState.FAILED
            self._error = e
            logger.warning("Poster load failed", key=self._key, error=str(e))
            return None
        except Exception as e:
            self._state = LoaderState.FAILED
            self._error = e
            logger.exception("Unexpected error loading poster", key=self._key)
            return None
        except BaseException:
            self._state = LoaderState.FAILED
            raise

        self._result = poster
        self._state = LoaderState.DELIVERED
        if self._on_result is not None and not self._detached:
            self._on_result(poster)
        return poster

    def detach(self) -> None:
        """Stop delivering to the observer; the consumer is gone.

        An in-flight fetch still completes and still populates the cache.
        """
        self._detached = True

    @property
    def key(self) -> Hashable:
        """The key this loader is bound to."""
        return self._key

    @property
    def state(self) -> LoaderState:
        """Current lifecycle state."""
        return self._state

    @property
    def result(self) -> Poster | None:
        """The delivered poster, if any."""
        return self._result

    @property
    def error(self) -> Exception | None:
        """The failure that ended loading, if any."""
        return self._error

    @property
    def detached(self) -> bool:
        """Whether the observer has been detached."""
        return self._detached
