"""
Tests for the TMDB metadata client using an in-process mock transport.
"""

import httpx
import pytest

from poster_cache.errors import FetchError
from poster_cache.repositories import TmdbClient

BASE = "https://tmdb.test/3"


def make_client(handler, seen: list | None = None) -> TmdbClient:
    def record(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return handler(request)

    http = httpx.AsyncClient(transport=httpx.MockTransport(record))
    return TmdbClient(api_key="k3y", base_url=BASE, language="zh-CN", timeout=1.0, client=http)


@pytest.mark.asyncio
async def test_requests_carry_key_and_language():
    """Every request sends api_key and language."""
    seen = []
    tmdb = make_client(lambda r: httpx.Response(200, json={"genres": []}), seen)

    await tmdb.genres()

    params = seen[0].url.params
    assert seen[0].url.path == "/3/genre/movie/list"
    assert params["api_key"] == "k3y"
    assert params["language"] == "zh-CN"


@pytest.mark.asyncio
async def test_genres_parsed():
    """Genre list is mapped to entities."""
    tmdb = make_client(
        lambda r: httpx.Response(200, json={"genres": [{"id": 28, "name": "Action"}, {"id": 35, "name": "Comedy"}]})
    )

    genres = await tmdb.genres()

    assert [(g.id, g.name) for g in genres] == [(28, "Action"), (35, "Comedy")]


@pytest.mark.asyncio
async def test_candidates_without_genres_use_popular():
    """No selected genres means the popular list."""
    seen = []
    body = {"results": [{"id": 1, "title": "A", "poster_path": "/a.jpg"}, {"id": 2, "title": "B", "poster_path": None}]}
    tmdb = make_client(lambda r: httpx.Response(200, json=body), seen)

    movies = await tmdb.candidates()

    assert seen[0].url.path == "/3/movie/popular"
    assert [m.id for m in movies] == [1, 2]
    assert movies[1].poster_path is None


@pytest.mark.asyncio
async def test_candidates_with_genres_use_discover():
    """Selected genres are joined with commas, deduplicated and sorted."""
    seen = []
    tmdb = make_client(lambda r: httpx.Response(200, json={"results": []}), seen)

    await tmdb.candidates([35, 28, 35])

    assert seen[0].url.path == "/3/discover/movie"
    assert seen[0].url.params["with_genres"] == "28,35"


@pytest.mark.asyncio
async def test_list_failure_raises_fetch_error():
    """List endpoints propagate failures as FetchError."""
    tmdb = make_client(lambda r: httpx.Response(401, json={"status_message": "Invalid API key"}))

    with pytest.raises(FetchError) as exc_info:
        await tmdb.candidates()

    assert "401" in exc_info.value.reason


@pytest.mark.asyncio
async def test_movie_details_with_credits():
    """Details include production countries and cast from credits."""
    seen = []
    body = {
        "id": 7,
        "title": "Seven",
        "overview": "...",
        "release_date": "1995-09-22",
        "runtime": 127,
        "tagline": "Seven deadly sins.",
        "production_countries": [{"iso_3166_1": "US", "name": "United States of America"}],
        "credits": {"cast": [{"id": 1, "name": "Brad Pitt", "character": "Mills"}]},
    }
    tmdb = make_client(lambda r: httpx.Response(200, json=body), seen)

    detail = await tmdb.movie_details(7)

    assert seen[0].url.path == "/3/movie/7"
    assert seen[0].url.params["append_to_response"] == "credits"
    assert detail.runtime == 127
    assert detail.production_countries == ("United States of America",)
    assert detail.cast[0].name == "Brad Pitt"
    assert detail.cast[0].character == "Mills"


@pytest.mark.asyncio
async def test_movie_details_failure_returns_none():
    """Details swallow failures and return None."""
    tmdb = make_client(lambda r: httpx.Response(404))

    assert await tmdb.movie_details(7) is None


@pytest.mark.asyncio
async def test_movie_details_malformed_returns_none():
    """A body missing the id is treated as a failure."""
    tmdb = make_client(lambda r: httpx.Response(200, json={"title": "no id"}))

    assert await tmdb.movie_details(7) is None
