"""HTTP implementation of Fetcher.

Downloads poster bytes with a shared ``httpx.AsyncClient``. Every transport
failure, timeout or non-2xx status collapses into ``FetchError``; no
retries are attempted here.
"""

from collections.abc import Hashable

import httpx

from poster_cache.config import settings
from poster_cache.errors import FetchError


class HttpFetcher:
    """httpx-based implementation of the Fetcher protocol.

    This class satisfies the Fetcher protocol through structural
    typing - no explicit inheritance needed.

    Cancelling the awaiting task cancels the in-flight request.

    Example:
        ```python
        fetcher = HttpFetcher.create()
        data = await fetcher.fetch("https://image.tmdb.org/t/p/w500/abc.jpg")
        await fetcher.close()
        ```
    """

    def __init__(
        self,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the HTTP fetcher.

        Args:
            timeout: Request timeout in seconds. Defaults to settings.fetch_timeout.
            client: Preconfigured client (e.g. with a mock transport). Created lazily if None.

        Raises:
            ValueError: If timeout is not positive
        """
        if timeout is None:
            timeout = settings.fetch_timeout
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")

        self._timeout = timeout
        self._client = client

    @classmethod
    def create(cls, timeout: float | None = None) -> "HttpFetcher":
        """Factory method to create HttpFetcher with defaults.

        Args:
            timeout: Request timeout. If None, uses settings.

        Returns:
            Configured HttpFetcher
        """
        return cls(timeout=timeout)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    async def fetch(self, key: Hashable) -> bytes:
        """Retrieve the bytes behind a URL key.

        Args:
            key: The resource URL

        Returns:
            The response body

        Raises:
            FetchError: On transport failure, timeout or non-2xx status
        """
        try:
            response = await self.client.get(str(key))
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(key, f"HTTP {e.response.status_code}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(key, f"{type(e).__name__}: {e}") from e

        return response.content

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
