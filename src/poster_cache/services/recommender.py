"""Recommendation rotation with poster prefetching.

A session shows one ``current`` movie and keeps one ``preloaded`` movie
lined up behind it, warming the preloaded poster so the next card appears
without a network wait.
"""

import random
from collections.abc import Iterable

import structlog

from poster_cache.config import settings
from poster_cache.entities import Movie
from poster_cache.services.prefetcher import Prefetcher
from poster_cache.services.watched_set import WatchedSet

logger = structlog.get_logger(__name__)


class RecommendationSession:
    """Rotates through unwatched candidates one at a time.

    The pool never contains ``current``. ``preloaded`` is always a member of
    the pool, and its poster is prefetched exactly once each time it is chosen.

    Example:
        ```python
        session = RecommendationSession(watched, prefetcher)
        await session.start(await tmdb.candidates({28}))
        await session.skip()           # show the preloaded movie next
        await session.mark_watched()   # remember current, never show it again
        ```
    """

    def __init__(
        self,
        watched: WatchedSet,
        prefetcher: Prefetcher,
        image_base_url: str | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            watched: Watched set used to filter candidates and record watches
            prefetcher: Warms the preloaded movie's poster
            image_base_url: Poster URL prefix. Defaults to settings.tmdb_image_base_url.
            rng: Random source for picking the next preloaded movie
        """
        self._watched = watched
        self._prefetcher = prefetcher
        self._image_base_url = image_base_url or settings.tmdb_image_base_url
        self._rng = rng or random.Random()
        self._pool: list[Movie] = []
        self._current: Movie | None = None
        self._preloaded: Movie | None = None

    async def start(self, candidates: Iterable[Movie]) -> Movie | None:
        """Filter candidates and line up the first two movies.

        Watched movies and movies without a poster are dropped. The first
        remaining movie becomes ``current``, the next one ``preloaded``.

        Args:
            candidates: Candidate movies in display order

        Returns:
            The current movie, or None if nothing is left to recommend
        """
        unwatched = await self._watched.filter(candidates)
        self._pool = [m for m in unwatched if m.poster_path is not None]
        self._current = self._pool.pop(0) if self._pool else None
        self._preloaded = self._pool[0] if self._pool else None
        self._prefetch_preloaded()

        logger.debug(
            "Recommendation session started",
            candidates=len(unwatched),
            current=self._current.id if self._current else None,
            preloaded=self._preloaded.id if self._preloaded else None,
        )
        return self._current

    async def skip(self) -> Movie | None:
        """Show the preloaded movie; the skipped one stays eligible.

        Returns:
            The new current movie
        """
        return self._advance(drop_current=False)

    async def mark_watched(self) -> Movie | None:
        """Record the current movie as watched and move on.

        Returns:
            The new current movie, or None if the pool is exhausted
        """
        if self._current is None:
            return None

        await self._watched.add(self._current.id)
        return self._advance(drop_current=True)

    def _advance(self, drop_current: bool) -> Movie | None:
        previous = self._current
        upcoming = self._preloaded

        if upcoming is None:
            if drop_current:
                self._current = None
            return self._current

        self._pool.remove(upcoming)
        if previous is not None and not drop_current:
            self._pool.append(previous)

        self._current = upcoming
        self._preloaded = self._rng.choice(self._pool) if self._pool else None
        self._prefetch_preloaded()
        return self._current

    def _prefetch_preloaded(self) -> None:
        if self._preloaded is not None:
            self._prefetcher.schedule(self._preloaded.poster_url(self._image_base_url))

    @property
    def current(self) -> Movie | None:
        """The movie being shown."""
        return self._current

    @property
    def preloaded(self) -> Movie | None:
        """The movie lined up next."""
        return self._preloaded

    @property
    def pool(self) -> tuple[Movie, ...]:
        """Remaining candidates, excluding current."""
        return tuple(self._pool)

    @property
    def exhausted(self) -> bool:
        """Whether there is nothing left to recommend."""
        return self._current is None
