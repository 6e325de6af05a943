"""
Tests for the recommendation rotation.
"""

import random

import pytest
from conftest import IMAGE_BASE, PNG, FakeFetcher, RecordingPrefetcher

from poster_cache.entities import Movie
from poster_cache.repositories import MemoryIdStore
from poster_cache.services import Prefetcher, RecommendationSession, WatchedSet

KEY = "watchedMovieIDs"


def movie(movie_id: int, poster: bool = True) -> Movie:
    return Movie(id=movie_id, title=f"Movie {movie_id}", poster_path=f"/{movie_id}.jpg" if poster else None)


def poster_url(movie_id: int) -> str:
    return f"{IMAGE_BASE}/{movie_id}.jpg"


def make_session(watched_ids=(), prefetcher=None) -> tuple[RecommendationSession, WatchedSet, RecordingPrefetcher]:
    watched = WatchedSet(store=MemoryIdStore({KEY: list(watched_ids)}), name=KEY)
    prefetcher = prefetcher or RecordingPrefetcher()
    session = RecommendationSession(
        watched=watched,
        prefetcher=prefetcher,
        image_base_url=IMAGE_BASE,
        rng=random.Random(7),
    )
    return session, watched, prefetcher


@pytest.mark.asyncio
async def test_start_filters_watched_and_prefetches_preloaded_once():
    """Watched ids are dropped; current comes first and preloaded is warmed once."""
    session, _, prefetcher = make_session(watched_ids=[2])

    current = await session.start([movie(1), movie(2), movie(3)])

    assert current == movie(1)
    assert session.preloaded == movie(3)
    assert session.pool == (movie(3),)
    assert prefetcher.scheduled == [poster_url(3)]


@pytest.mark.asyncio
async def test_mark_watched_promotes_preloaded_without_extra_prefetch():
    """Picking current removes it for good and the preloaded movie takes its place."""
    session, watched, prefetcher = make_session(watched_ids=[2])
    await session.start([movie(1), movie(2), movie(3)])

    current = await session.mark_watched()

    assert current == movie(3)
    assert session.preloaded is None
    assert 1 in await watched.ids()
    assert prefetcher.scheduled == [poster_url(3)]

    assert await session.mark_watched() is None
    assert session.exhausted
    assert await watched.ids() == frozenset({1, 2, 3})


@pytest.mark.asyncio
async def test_skip_keeps_skipped_movie_eligible():
    """Skipping shows the preloaded movie and returns the skipped one to the pool."""
    session, watched, prefetcher = make_session()
    await session.start([movie(1), movie(2), movie(3)])
    assert session.preloaded == movie(2)

    current = await session.skip()

    assert current == movie(2)
    assert current not in session.pool
    assert set(session.pool) == {movie(1), movie(3)}
    assert session.preloaded in {movie(1), movie(3)}
    assert prefetcher.scheduled == [poster_url(2), poster_url(session.preloaded.id)]
    assert await watched.ids() == frozenset()


@pytest.mark.asyncio
async def test_movies_without_posters_are_dropped():
    """Candidates without a poster are never recommended."""
    session, _, prefetcher = make_session()

    current = await session.start([movie(1, poster=False), movie(2)])

    assert current == movie(2)
    assert session.preloaded is None
    assert prefetcher.scheduled == []


@pytest.mark.asyncio
async def test_empty_pool_is_exhausted():
    """Everything watched leaves nothing to recommend."""
    session, _, _ = make_session(watched_ids=[1])

    assert await session.start([movie(1)]) is None
    assert session.exhausted
    assert await session.skip() is None
    assert await session.mark_watched() is None


@pytest.mark.asyncio
async def test_skip_with_single_movie_keeps_current():
    """With nothing lined up, skipping keeps showing the current movie."""
    session, _, _ = make_session()
    await session.start([movie(1)])

    assert await session.skip() == movie(1)
    assert not session.exhausted


@pytest.mark.asyncio
async def test_start_warms_preloaded_poster_in_cache(store, decoder, flights):
    """With a real prefetcher the preloaded poster lands in the cache."""
    fetcher = FakeFetcher({poster_url(3): PNG})
    prefetcher = Prefetcher(store=store, fetcher=fetcher, decoder=decoder, flights=flights)
    session, _, _ = make_session(watched_ids=[2], prefetcher=prefetcher)

    await session.start([movie(1), movie(2), movie(3)])
    await prefetcher.wait_idle()

    assert fetcher.calls == [poster_url(3)]
    assert store.get(poster_url(3)).content == PNG
