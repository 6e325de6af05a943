"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (in-memory cache, HTTP fetcher, Redis id store)
- Unit testing with fake implementations
- Clear separation of concerns

Usage:
    ```python
    from poster_cache.protocols import ContentStore, Fetcher

    store: ContentStore = ContentCache(max_bytes=1024)  # works
    fetcher: Fetcher = HttpFetcher()                      # works
    ```
"""

from .content_store import ContentStore
from .decoder import Decoder
from .fetcher import Fetcher
from .id_store import IdStore

__all__ = [
    "ContentStore",
    "Decoder",
    "Fetcher",
    "IdStore",
]
