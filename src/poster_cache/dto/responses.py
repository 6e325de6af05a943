"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field


class MovieItem(BaseModel):
    """A movie as returned to clients."""

    id: int = Field(..., description="Movie id")
    title: str = Field(..., description="Display title")
    poster_path: str | None = Field(None, description="Relative poster path")
    poster_url: str | None = Field(None, description="Absolute poster URL (the cache key)")


class FilterCandidatesResponse(BaseModel):
    """Response DTO for candidate filtering."""

    candidates: list[MovieItem] = Field(default_factory=list, description="Unwatched candidates, input order")
    removed: int = Field(..., description="Number of candidates dropped as watched", ge=0)


class RecommendationResponse(BaseModel):
    """Response DTO for a recommendation round."""

    current: MovieItem | None = Field(None, description="Movie to show now")
    preloaded: MovieItem | None = Field(None, description="Movie lined up next (poster being prefetched)")
    remaining: int = Field(..., description="Candidates left in the pool, excluding current", ge=0)


class WatchedResponse(BaseModel):
    """Response DTO for the watched list."""

    ids: list[int] = Field(default_factory=list, description="Watched movie ids, ascending")
    count: int = Field(..., description="Number of watched movies", ge=0)


class PrefetchResponse(BaseModel):
    """Response DTO for a prefetch request."""

    scheduled: bool = Field(..., description="Whether a background prefetch was started")
    url: str = Field(..., description="The requested poster URL")


class GenreItem(BaseModel):
    """A movie genre."""

    id: int
    name: str


class CastItem(BaseModel):
    """A credited cast member."""

    id: int
    name: str
    character: str | None = None


class MovieDetailResponse(BaseModel):
    """Response DTO for movie details."""

    id: int
    title: str
    overview: str | None = None
    release_date: str | None = None
    runtime: int | None = Field(None, description="Runtime in minutes")
    tagline: str | None = None
    production_countries: list[str] = Field(default_factory=list)
    cast: list[CastItem] = Field(default_factory=list, description="Top billed cast")


class CacheStatsResponse(BaseModel):
    """Response DTO for poster cache statistics."""

    entries: int = Field(..., description="Number of cached posters", ge=0)
    size_bytes: int = Field(..., description="Total cached bytes", ge=0)
    max_bytes: int = Field(..., description="Cache size bound in bytes", ge=0)
    hits: int = Field(..., ge=0)
    misses: int = Field(..., ge=0)
    in_flight: int = Field(..., description="Fetches currently in flight", ge=0)
    pending_prefetches: int = Field(..., description="Background prefetches still running", ge=0)


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'degraded'")
    storage_healthy: bool = Field(..., description="Whether watched-list storage is reachable")
