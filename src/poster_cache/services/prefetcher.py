"""Best-effort speculative cache population."""

import asyncio
from collections.abc import Hashable
from functools import partial

import structlog

from poster_cache.protocols import ContentStore, Decoder, Fetcher
from poster_cache.services.cache_loader import fetch_into_cache
from poster_cache.services.single_flight import SingleFlight

logger = structlog.get_logger(__name__)


class Prefetcher:
    """Warms the content cache for a predicted next key.

    Runs the same miss path as ``CacheLoader`` but returns nothing and
    never raises: every failure is logged at debug level and dropped, since
    the consumer will simply load the key itself later. Sharing the
    ``SingleFlight`` group with the loaders means a prefetch and a load
    racing on one key produce a single fetch.
    """

    def __init__(
        self,
        store: ContentStore,
        fetcher: Fetcher,
        decoder: Decoder,
        flights: SingleFlight | None = None,
    ) -> None:
        """Initialize the prefetcher.

        Args:
            store: The shared content cache
            fetcher: Remote source for misses
            decoder: Validates bytes before they are cached
            flights: Coalescing group shared with loaders. A private one is created if None.
        """
        self._store = store
        self._fetcher = fetcher
        self._decoder = decoder
        self._flights = flights if flights is not None else SingleFlight()
        self._tasks: set[asyncio.Task] = set()

    async def prefetch(self, key: Hashable | None) -> None:
        """Populate the cache for a key if it is not already there.

        Args:
            key: The content key. None (nothing to prefetch) is a no-op.
        """
        if key is None:
            return

        if self._store.get(key) is not None:
            return

        try:
            await self._flights.do(
                key,
                partial(fetch_into_cache, key, self._store, self._fetcher, self._decoder),
            )
        except Exception as e:
            logger.debug("Prefetch failed", key=key, error=str(e))

    def schedule(self, key: Hashable | None) -> asyncio.Task | None:
        """Fire-and-forget a prefetch on the running event loop.

        Args:
            key: The content key. None schedules nothing.

        Returns:
            The background task, or None if nothing was scheduled
        """
        if key is None:
            return None

        task = asyncio.get_running_loop().create_task(self.prefetch(key))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def wait_idle(self) -> None:
        """Wait until every scheduled prefetch has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def cancel_all(self) -> None:
        """Cancel every scheduled prefetch (shutdown)."""
        for task in list(self._tasks):
            task.cancel()

    @property
    def pending(self) -> int:
        """Number of scheduled prefetches still running."""
        return len(self._tasks)
