"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from poster_cache.services import PosterService, WatchedSet

    posters = PosterService.create(store=cache, fetcher=fetcher, decoder=decoder)
    watched = WatchedSet(store=id_store)
    ```
"""

from .cache_loader import CacheLoader, LoaderState, fetch_into_cache
from .poster_service import PosterService
from .prefetcher import Prefetcher
from .recommender import RecommendationSession
from .single_flight import SingleFlight
from .watched_set import WatchedSet

__all__ = [
    "CacheLoader",
    "LoaderState",
    "fetch_into_cache",
    "PosterService",
    "Prefetcher",
    "RecommendationSession",
    "SingleFlight",
    "WatchedSet",
]
