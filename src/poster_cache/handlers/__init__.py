"""HTTP handlers layer.

Handlers convert between DTOs and service calls, handling HTTP concerns
like status codes and error responses.
"""

from .poster_handler import PosterHandler

__all__ = [
    "PosterHandler",
]
