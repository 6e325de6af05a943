"""Poster service for core business logic.

This service wires the content cache, fetcher and decoder together and
hands out per-key loaders that share one single-flight group with the
prefetcher.
"""

from collections.abc import Callable, Hashable

from poster_cache.entities import Poster
from poster_cache.protocols import ContentStore, Decoder, Fetcher
from poster_cache.services.cache_loader import CacheLoader
from poster_cache.services.prefetcher import Prefetcher
from poster_cache.services.single_flight import SingleFlight


class PosterService:
    """Core poster orchestration service.

    This service depends on PROTOCOLS, not concrete implementations:
    - ContentStore: the process-wide content cache
    - Fetcher: HTTP or any other remote source
    - Decoder: validates and tags payloads

    The cache instance is passed in by the composition root and lives for
    the whole process; the service never creates a hidden global.

    Example:
        ```python
        from poster_cache.repositories import ContentCache, HttpFetcher, PosterDecoder
        from poster_cache.services import PosterService

        posters = PosterService.create(
            store=ContentCache.create(),
            fetcher=HttpFetcher.create(),
            decoder=PosterDecoder(),
        )
        poster = await posters.load(url)
        posters.prefetch(next_url)
        ```
    """

    def __init__(
        self,
        store: ContentStore,
        fetcher: Fetcher,
        decoder: Decoder,
        flights: SingleFlight | None = None,
        prefetcher: Prefetcher | None = None,
    ) -> None:
        """Initialize the poster service.

        Args:
            store: Content cache (required).
            fetcher: Remote source (required).
            decoder: Payload decoder (required).
            flights: Single-flight group. Created if None.
            prefetcher: Prefetcher sharing the same collaborators. Created if None.
        """
        self._store = store
        self._fetcher = fetcher
        self._decoder = decoder
        self._flights = flights if flights is not None else SingleFlight()
        self._prefetcher = prefetcher or Prefetcher(
            store=store,
            fetcher=fetcher,
            decoder=decoder,
            flights=self._flights,
        )

    @classmethod
    def create(
        cls,
        store: ContentStore,
        fetcher: Fetcher,
        decoder: Decoder,
    ) -> "PosterService":
        """Factory method to create PosterService with a fresh single-flight group.

        Args:
            store: Content cache (required).
            fetcher: Remote source (required).
            decoder: Payload decoder (required).

        Returns:
            Configured PosterService instance
        """
        return cls(store=store, fetcher=fetcher, decoder=decoder)

    def loader(
        self,
        key: Hashable,
        on_result: Callable[[Poster], None] | None = None,
    ) -> CacheLoader:
        """Create a loader bound to one key.

        Args:
            key: The poster key
            on_result: Observer called once with the poster on success

        Returns:
            A new idle CacheLoader
        """
        return CacheLoader(
            key,
            store=self._store,
            fetcher=self._fetcher,
            decoder=self._decoder,
            flights=self._flights,
            on_result=on_result,
        )

    async def load(self, key: Hashable) -> Poster | None:
        """Load a poster with a fresh loader.

        Args:
            key: The poster key

        Returns:
            The poster, or None if it could not be loaded
        """
        return await self.loader(key).load()

    def prefetch(self, key: Hashable | None) -> None:
        """Schedule a best-effort prefetch for a key.

        Args:
            key: The poster key. None is ignored.
        """
        self._prefetcher.schedule(key)

    def get_stats(self) -> dict:
        """Get poster cache statistics.

        Returns:
            Dictionary with cache stats plus in-flight and pending prefetch counts
        """
        stats = self._store.get_stats() if hasattr(self._store, "get_stats") else {}
        stats["in_flight"] = len(self._flights)
        stats["pending_prefetches"] = self._prefetcher.pending
        return stats

    @property
    def store(self) -> ContentStore:
        """Get the underlying content cache (for testing)."""
        return self._store

    @property
    def prefetcher(self) -> Prefetcher:
        """Get the prefetcher."""
        return self._prefetcher
