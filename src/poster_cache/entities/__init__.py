"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .cache_entry import CacheEntry
from .movie import CastMember, Genre, Movie, MovieDetail
from .poster import Poster

__all__ = [
    "CacheEntry",
    "CastMember",
    "Genre",
    "Movie",
    "MovieDetail",
    "Poster",
]
