"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import CandidateItem, FilterCandidatesRequest, MarkWatchedRequest, PrefetchRequest
from .responses import (
    CacheStatsResponse,
    CastItem,
    FilterCandidatesResponse,
    GenreItem,
    HealthCheckResponse,
    MovieDetailResponse,
    MovieItem,
    PrefetchResponse,
    RecommendationResponse,
    WatchedResponse,
)

__all__ = [
    "CandidateItem",
    "FilterCandidatesRequest",
    "MarkWatchedRequest",
    "PrefetchRequest",
    "CacheStatsResponse",
    "CastItem",
    "FilterCandidatesResponse",
    "GenreItem",
    "HealthCheckResponse",
    "MovieDetailResponse",
    "MovieItem",
    "PrefetchResponse",
    "RecommendationResponse",
    "WatchedResponse",
]
