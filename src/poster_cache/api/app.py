from typing import Any

from fastapi import FastAPI, Query, Response, status
from fastapi.middleware.cors import CORSMiddleware

from poster_cache.api.dependencies import HandlerDep, lifespan
from poster_cache.config import settings
from poster_cache.dto import (
    CacheStatsResponse,
    FilterCandidatesRequest,
    FilterCandidatesResponse,
    GenreItem,
    HealthCheckResponse,
    MarkWatchedRequest,
    MovieDetailResponse,
    PrefetchRequest,
    PrefetchResponse,
    RecommendationResponse,
    WatchedResponse,
)

app = FastAPI(
    title="Poster Cache API",
    description="Fetch-or-cache movie posters with speculative prefetch and watched-list filtering",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Poster Cache API",
        "version": "0.1.0",
        "description": "Fetch-or-cache movie posters with speculative prefetch and watched-list filtering",
        "endpoints": {
            "posters": "/posters",
            "watched": "/watched",
            "recommendations": "/recommendations",
            "genres": "/genres",
            "stats": "/stats",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check()


@app.get("/posters", response_class=Response)
async def get_poster(handler: HandlerDep, url: str = Query(..., min_length=1)) -> Response:
    """
    Serve a poster through the content cache.

    Args:
        url: Poster URL; also the cache key.

    Returns:
        The image bytes, or 404 if the poster could not be loaded.
    """
    return await handler.get_poster(url)


@app.post("/posters/prefetch", response_model=PrefetchResponse, status_code=status.HTTP_202_ACCEPTED)
async def prefetch_poster(request: PrefetchRequest, handler: HandlerDep) -> PrefetchResponse:
    """Warm the cache for a poster in the background."""
    return await handler.prefetch(request)


@app.get("/watched", response_model=WatchedResponse)
async def get_watched(handler: HandlerDep) -> WatchedResponse:
    """List watched movie ids."""
    return await handler.get_watched()


@app.post("/watched", response_model=WatchedResponse)
async def mark_watched(request: MarkWatchedRequest, handler: HandlerDep) -> WatchedResponse:
    """Add a movie to the watched list."""
    return await handler.mark_watched(request)


@app.post("/recommendations/filter", response_model=FilterCandidatesResponse)
async def filter_candidates(request: FilterCandidatesRequest, handler: HandlerDep) -> FilterCandidatesResponse:
    """Drop already-watched movies from a candidate list."""
    return await handler.filter_candidates(request)


@app.get("/recommendations", response_model=RecommendationResponse)
async def recommendations(
    handler: HandlerDep,
    genres: list[int] = Query(default=[]),
) -> RecommendationResponse:
    """
    Recommend a movie and line up the next one.

    Args:
        genres: Genre ids to discover by; popular movies when empty.

    Returns:
        Current and preloaded movies; the preloaded poster is prefetched.
    """
    return await handler.recommendations(genres)


@app.get("/genres", response_model=list[GenreItem])
async def genres(handler: HandlerDep) -> list[GenreItem]:
    """List movie genres."""
    return await handler.genres()


@app.get("/movies/{movie_id}", response_model=MovieDetailResponse)
async def movie_details(movie_id: int, handler: HandlerDep) -> MovieDetailResponse:
    """Get details and top cast for a movie."""
    return await handler.movie_details(movie_id)


@app.get("/stats", response_model=CacheStatsResponse)
async def get_stats(handler: HandlerDep) -> CacheStatsResponse:
    """Get poster cache statistics."""
    return await handler.get_stats()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "poster_cache.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
