"""Movie metadata client for the TMDB v3 API.

Provides the genre list, recommendation candidates and per-movie details.
Results are not cached here; posters are cached by the loader layer.
"""

from collections.abc import Iterable
from typing import Any

import httpx
import structlog

from poster_cache.config import settings
from poster_cache.entities import CastMember, Genre, Movie, MovieDetail
from poster_cache.errors import FetchError

logger = structlog.get_logger(__name__)


class TmdbClient:
    """Async TMDB client.

    Every request carries ``api_key`` and ``language`` query parameters.
    List endpoints raise ``FetchError`` on failure; details return None.

    Example:
        ```python
        tmdb = TmdbClient.create()
        movies = await tmdb.candidates({28, 12})
        detail = await tmdb.movie_details(movies[0].id)
        ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        language: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the TMDB client.

        Args:
            api_key: TMDB API key. Defaults to settings.tmdb_api_key.
            base_url: API base URL. Defaults to settings.tmdb_base_url.
            language: Response language. Defaults to settings.tmdb_language.
            timeout: Request timeout in seconds. Defaults to settings.fetch_timeout.
            client: Preconfigured client. Created lazily if None.
        """
        self._api_key = api_key or settings.tmdb_api_key
        self._base_url = (base_url or settings.tmdb_base_url).rstrip("/")
        self._language = language or settings.tmdb_language
        if timeout is None:
            timeout = settings.fetch_timeout
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")

        self._timeout = timeout
        self._client = client

    @classmethod
    def create(cls) -> "TmdbClient":
        """Factory method to create TmdbClient from settings."""
        return cls()

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def _get(self, path: str, **params: Any) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        query = {"api_key": self._api_key, "language": self._language, **params}
        try:
            response = await self.client.get(url, params=query)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise FetchError(path, f"HTTP {e.response.status_code}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(path, f"{type(e).__name__}: {e}") from e
        except ValueError as e:
            raise FetchError(path, f"invalid JSON: {e}") from e

    async def genres(self) -> list[Genre]:
        """Fetch the movie genre list.

        Raises:
            FetchError: If the request fails
        """
        data = await self._get("/genre/movie/list")
        return [Genre(id=g["id"], name=g["name"]) for g in data.get("genres", [])]

    async def candidates(self, genre_ids: Iterable[int] = ()) -> list[Movie]:
        """Fetch recommendation candidates.

        Uses the popular list when no genres are selected, otherwise
        discovers movies matching all the given genres.

        Args:
            genre_ids: Selected genre ids

        Returns:
            Movies in API order

        Raises:
            FetchError: If the request fails
        """
        selected = sorted(set(genre_ids))
        if selected:
            data = await self._get("/discover/movie", with_genres=",".join(str(g) for g in selected))
        else:
            data = await self._get("/movie/popular")

        return [
            Movie(id=m["id"], title=m.get("title", ""), poster_path=m.get("poster_path"))
            for m in data.get("results", [])
        ]

    async def movie_details(self, movie_id: int) -> MovieDetail | None:
        """Fetch full details with credits for one movie.

        Args:
            movie_id: The movie id

        Returns:
            The details, or None if the request or parsing fails
        """
        try:
            data = await self._get(f"/movie/{movie_id}", append_to_response="credits")
            return MovieDetail(
                id=data["id"],
                title=data.get("title", ""),
                overview=data.get("overview"),
                release_date=data.get("release_date"),
                runtime=data.get("runtime"),
                tagline=data.get("tagline"),
                production_countries=tuple(c["name"] for c in data.get("production_countries") or []),
                cast=tuple(
                    CastMember(id=c["id"], name=c["name"], character=c.get("character"))
                    for c in (data.get("credits") or {}).get("cast", [])
                ),
            )
        except (FetchError, KeyError, TypeError) as e:
            logger.warning("Failed to fetch movie details", movie_id=movie_id, error=str(e))
            return None

    async def close(self) -> None:
        """Close the async HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
