"""Repository layer for data access.

This layer abstracts external dependencies (in-process memory, HTTP, Redis,
the movie metadata API) behind protocol-based interfaces. This enables:
- Easy swapping of implementations (Redis → in-memory id store, etc.)
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from poster_cache.protocols import ContentStore, Decoder, Fetcher, IdStore

from .http_fetcher import HttpFetcher
from .memory_content_store import ContentCache
from .memory_id_store import MemoryIdStore
from .poster_decoder import PosterDecoder
from .redis_id_store import RedisIdStore
from .tmdb_client import TmdbClient

__all__ = [
    "ContentStore",
    "Decoder",
    "Fetcher",
    "IdStore",
    "ContentCache",
    "HttpFetcher",
    "MemoryIdStore",
    "PosterDecoder",
    "RedisIdStore",
    "TmdbClient",
]
