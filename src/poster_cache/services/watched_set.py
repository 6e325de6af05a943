"""Persisted set of already-watched movie ids."""

import asyncio
from collections.abc import Iterable
from typing import Protocol, TypeVar

import structlog

from poster_cache.config import settings
from poster_cache.errors import StorageError
from poster_cache.protocols import IdStore

logger = structlog.get_logger(__name__)


class HasId(Protocol):
    id: int


T = TypeVar("T", bound=HasId)


class WatchedSet:
    """Append-only set of watched ids backed by an IdStore.

    The set is loaded lazily on first access and the whole set is written
    back on every insertion. Storage is never fatal:

    - missing or corrupt stored value: empty set (remembered)
    - storage unreachable on read: empty for this call, retried next access
    - storage unreachable on write: logged, the in-memory set keeps the id

    Ids added while storage was unreachable for reading are kept aside and
    merged into the next full write, so a failed read never clobbers the
    persisted list.
    """

    def __init__(self, store: IdStore, name: str | None = None) -> None:
        """Initialize the watched set.

        Args:
            store: Persisted id storage
            name: Storage name. Defaults to settings.watched_key.
        """
        self._store = store
        self._name = name or settings.watched_key
        self._ids: set[int] | None = None
        self._pending: set[int] = set()
        self._lock = asyncio.Lock()

    async def _load(self) -> set[int] | None:
        if self._ids is not None:
            return self._ids

        try:
            stored = await self._store.read(self._name)
        except StorageError as e:
            logger.warning("Watched list unavailable, treating as empty", name=self._name, error=str(e))
            return None
        except ValueError as e:
            logger.warning("Watched list corrupt, treating as empty", name=self._name, error=str(e))
            stored = None

        self._ids = set(stored or ())
        return self._ids

    async def ids(self) -> frozenset[int]:
        """Return every watched id.

        Returns:
            The watched ids, empty if storage is absent, corrupt or unreachable
        """
        loaded = await self._load()
        return frozenset((loaded or set()) | self._pending)

    async def add(self, movie_id: int) -> None:
        """Mark an id as watched and persist the whole set.

        Adding an id that is already present is a no-op.

        Args:
            movie_id: The id to add
        """
        async with self._lock:
            loaded = await self._load()
            if loaded is None:
                self._pending.add(movie_id)
                return

            changed = bool(self._pending - loaded)
            loaded |= self._pending
            self._pending.clear()

            if movie_id not in loaded:
                loaded.add(movie_id)
                changed = True

            if not changed:
                return

            try:
                await self._store.write(self._name, sorted(loaded))
            except StorageError as e:
                logger.warning("Failed to persist watched list", name=self._name, movie_id=movie_id, error=str(e))

    async def filter(self, candidates: Iterable[T]) -> list[T]:
        """Drop candidates that were already watched, preserving order.

        Args:
            candidates: Items with an ``id`` attribute

        Returns:
            The candidates whose id is not in the set
        """
        watched = await self.ids()
        return [c for c in candidates if c.id not in watched]

    async def contains(self, movie_id: int) -> bool:
        """Whether the id has been watched."""
        return movie_id in await self.ids()

    @property
    def name(self) -> str:
        """The storage name the set is persisted under."""
        return self._name
