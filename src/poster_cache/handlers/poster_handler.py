"""HTTP handlers for poster, watched-list and recommendation operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

from collections.abc import Iterable

from fastapi import HTTPException, Response, status

from poster_cache.config import settings
from poster_cache.dto import (
    CacheStatsResponse,
    CastItem,
    FilterCandidatesRequest,
    FilterCandidatesResponse,
    GenreItem,
    HealthCheckResponse,
    MarkWatchedRequest,
    MovieDetailResponse,
    MovieItem,
    PrefetchRequest,
    PrefetchResponse,
    RecommendationResponse,
    WatchedResponse,
)
from poster_cache.entities import Movie
from poster_cache.errors import FetchError
from poster_cache.protocols import IdStore
from poster_cache.repositories import TmdbClient
from poster_cache.services import PosterService, RecommendationSession, WatchedSet


class PosterHandler:
    """HTTP handlers for the poster cache service.

    This handler delegates business logic to PosterService, WatchedSet
    and RecommendationSession, and handles HTTP-specific concerns like:
    - Converting entities to DTOs
    - Setting appropriate status codes
    - Error handling and responses
    """

    def __init__(
        self,
        poster_service: PosterService,
        watched: WatchedSet,
        tmdb: TmdbClient,
        id_store: IdStore,
        image_base_url: str | None = None,
    ) -> None:
        """Initialize the handler.

        Args:
            poster_service: Poster loading and prefetching (required).
            watched: Watched set (required).
            tmdb: Movie metadata client (required).
            id_store: Watched-list storage, used for health checks (required).
            image_base_url: Poster URL prefix. Defaults to settings.
        """
        self._posters = poster_service
        self._watched = watched
        self._tmdb = tmdb
        self._id_store = id_store
        self._image_base_url = image_base_url or settings.tmdb_image_base_url

    def _movie_item(self, movie: Movie | None) -> MovieItem | None:
        if movie is None:
            return None
        return MovieItem(
            id=movie.id,
            title=movie.title,
            poster_path=movie.poster_path,
            poster_url=movie.poster_url(self._image_base_url),
        )

    async def get_poster(self, url: str) -> Response:
        """Handle GET /posters requests.

        Args:
            url: Poster URL (the cache key)

        Returns:
            The image bytes with their media type

        Raises:
            HTTPException: 404 if the poster could not be fetched or decoded
        """
        poster = await self._posters.load(url)
        if poster is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Poster unavailable: {url}",
            )
        return Response(content=poster.data, media_type=poster.media_type)

    async def prefetch(self, request: PrefetchRequest) -> PrefetchResponse:
        """Handle POST /posters/prefetch requests."""
        self._posters.prefetch(request.url)
        return PrefetchResponse(scheduled=True, url=request.url)

    async def get_watched(self) -> WatchedResponse:
        """Handle GET /watched requests."""
        ids = sorted(await self._watched.ids())
        return WatchedResponse(ids=ids, count=len(ids))

    async def mark_watched(self, request: MarkWatchedRequest) -> WatchedResponse:
        """Handle POST /watched requests."""
        await self._watched.add(request.movie_id)
        return await self.get_watched()

    async def filter_candidates(self, request: FilterCandidatesRequest) -> FilterCandidatesResponse:
        """Handle POST /recommendations/filter requests."""
        movies = [Movie(id=c.id, title=c.title, poster_path=c.poster_path) for c in request.candidates]
        unwatched = await self._watched.filter(movies)
        return FilterCandidatesResponse(
            candidates=[self._movie_item(m) for m in unwatched],
            removed=len(movies) - len(unwatched),
        )

    async def recommendations(self, genre_ids: Iterable[int]) -> RecommendationResponse:
        """Handle GET /recommendations requests.

        Fetches candidates, drops watched ones, and lines up the current and
        preloaded movies. The preloaded poster is prefetched in the background.

        Raises:
            HTTPException: 502 if the metadata API fails
        """
        try:
            candidates = await self._tmdb.candidates(genre_ids)
        except FetchError as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"Failed to load candidates: {e}",
            ) from e

        session = RecommendationSession(
            watched=self._watched,
            prefetcher=self._posters.prefetcher,
            image_base_url=self._image_base_url,
        )
        await session.start(candidates)

        return RecommendationResponse(
            current=self._movie_item(session.current),
            preloaded=self._movie_item(session.preloaded),
            remaining=len(session.pool),
        )

    async def genres(self) -> list[GenreItem]:
        """Handle GET /genres requests.

        Raises:
            HTTPException: 502 if the metadata API fails
        """
        try:
            genres = await self._tmdb.genres()
        except FetchError as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"Failed to load genres: {e}",
            ) from e
        return [GenreItem(id=g.id, name=g.name) for g in genres]

    async def movie_details(self, movie_id: int) -> MovieDetailResponse:
        """Handle GET /movies/{movie_id} requests.

        Raises:
            HTTPException: 404 if the details could not be loaded
        """
        detail = await self._tmdb.movie_details(movie_id)
        if detail is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Movie details unavailable: {movie_id}",
            )

        return MovieDetailResponse(
            id=detail.id,
            title=detail.title,
            overview=detail.overview,
            release_date=detail.release_date,
            runtime=detail.runtime,
            tagline=detail.tagline,
            production_countries=list(detail.production_countries),
            cast=[CastItem(id=c.id, name=c.name, character=c.character) for c in detail.cast[:5]],
        )

    async def get_stats(self) -> CacheStatsResponse:
        """Handle GET /stats requests."""
        return CacheStatsResponse(**self._posters.get_stats())

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        storage_healthy = await self._id_store.health_check()
        return HealthCheckResponse(
            status="healthy" if storage_healthy else "degraded",
            storage_healthy=storage_healthy,
        )
