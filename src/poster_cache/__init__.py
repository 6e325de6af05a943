"""Poster Cache - fetch-or-cache movie posters with speculative prefetch.

This package provides a layered architecture for poster caching:

Layers:
    - protocols: Interface contracts (ContentStore, Fetcher, Decoder, IdStore)
    - repositories: Data access implementations
    - services: Business logic (loader, prefetcher, watched set, recommendations)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from poster_cache.repositories import ContentCache, HttpFetcher, PosterDecoder
    from poster_cache.services import PosterService

    # One cache per process, passed in explicitly
    posters = PosterService.create(
        store=ContentCache.create(),
        fetcher=HttpFetcher.create(),
        decoder=PosterDecoder(),
    )
    poster = await posters.load(url)
    ```

For HTTP API:
    ```python
    from poster_cache.api.app import app
    ```
"""

from poster_cache.config import get_settings, settings
from poster_cache.entities import CacheEntry, Movie, Poster
from poster_cache.errors import DecodeError, FetchError, PosterCacheError, StorageError
from poster_cache.protocols import ContentStore, Decoder, Fetcher, IdStore
from poster_cache.repositories import (
    ContentCache,
    HttpFetcher,
    MemoryIdStore,
    PosterDecoder,
    RedisIdStore,
    TmdbClient,
)
from poster_cache.services import (
    CacheLoader,
    LoaderState,
    PosterService,
    Prefetcher,
    RecommendationSession,
    SingleFlight,
    WatchedSet,
)

__all__ = [
    # Configuration
    "settings",
    "get_settings",
    # Errors
    "PosterCacheError",
    "FetchError",
    "DecodeError",
    "StorageError",
    # Protocols (interfaces)
    "ContentStore",
    "Decoder",
    "Fetcher",
    "IdStore",
    # Services (business logic)
    "CacheLoader",
    "LoaderState",
    "PosterService",
    "Prefetcher",
    "RecommendationSession",
    "SingleFlight",
    "WatchedSet",
    # Repositories (data access)
    "ContentCache",
    "HttpFetcher",
    "MemoryIdStore",
    "PosterDecoder",
    "RedisIdStore",
    "TmdbClient",
    # Entities (domain models)
    "CacheEntry",
    "Movie",
    "Poster",
]
