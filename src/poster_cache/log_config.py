"""Structured logging setup.

Modules log through ``structlog.get_logger(__name__)`` with key/value
context. ``configure_logging`` is called once by the composition root
(the FastAPI lifespan or a script entry point).
"""

import logging

import structlog

from poster_cache.config import settings


def configure_logging(level: str | None = None, json: bool | None = None) -> None:
    """Configure structlog processors and the level filter.

    Args:
        level: Minimum level name. Defaults to settings.log_level.
        json: Render JSON lines instead of console output. Defaults to settings.log_json.
    """
    level_name = (level or settings.log_level).upper()
    use_json = settings.log_json if json is None else json

    renderer = structlog.processors.JSONRenderer() if use_json else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level_name)),
        cache_logger_on_first_use=True,
    )
