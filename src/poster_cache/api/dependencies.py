"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - The content cache is created once here and lives for the process
"""

from contextlib import asynccontextmanager
from typing import Annotated

import structlog
from fastapi import Depends, FastAPI, Request

from poster_cache.config import settings
from poster_cache.handlers import PosterHandler
from poster_cache.log_config import configure_logging
from poster_cache.repositories import (
    ContentCache,
    HttpFetcher,
    PosterDecoder,
    RedisIdStore,
    TmdbClient,
)
from poster_cache.services import PosterService, WatchedSet

logger = structlog.get_logger(__name__)


def get_handler(request: Request) -> PosterHandler:
    """Dependency injection for PosterHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The PosterHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "poster_handler", None)
    if handler is None:
        raise RuntimeError("PosterHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Repositories (content cache, fetcher, decoder, id store, metadata client)
    2. Services (poster loading/prefetching, watched set)
    3. Handler (HTTP endpoints) - stored in app.state.poster_handler

    Args:
        app: The FastAPI application instance

    Yields:
        None

    Cleanup:
        Cancels background prefetches, closes clients, removes state
    """
    configure_logging()

    content_cache = ContentCache.create()
    fetcher = HttpFetcher.create()
    id_store = RedisIdStore.create()
    tmdb = TmdbClient.create()

    poster_service = PosterService.create(
        store=content_cache,
        fetcher=fetcher,
        decoder=PosterDecoder(),
    )
    watched = WatchedSet(store=id_store)
    poster_handler = PosterHandler(
        poster_service=poster_service,
        watched=watched,
        tmdb=tmdb,
        id_store=id_store,
    )

    app.state.poster_service = poster_service
    app.state.poster_handler = poster_handler
    app.state.watched = watched

    logger.info(
        "Poster cache service initialized",
        max_bytes=content_cache.max_bytes,
        redis_url=settings.redis_url,
        watched_key=watched.name,
    )

    yield

    poster_service.prefetcher.cancel_all()
    await fetcher.close()
    await tmdb.close()
    await id_store.close()

    del app.state.poster_handler
    del app.state.poster_service
    del app.state.watched
    logger.info("Poster cache service shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[PosterHandler, Depends(get_handler)]
