"""Redis implementation of IdStore.

The watched list is stored as a JSON array of integers under a single
string key, and rewritten in full on every write.
"""

import json
from collections.abc import Iterable

import redis.asyncio as redis
from redis.exceptions import RedisError

from poster_cache.config import get_redis_client
from poster_cache.errors import StorageError


def parse_ids(raw: bytes | str) -> list[int]:
    """Parse a stored JSON array of integers.

    Raises:
        ValueError: If the value is not a JSON array of integers
    """
    try:
        value = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValueError(f"stored value is not JSON: {e}") from e

    if not isinstance(value, list):
        raise ValueError(f"expected a JSON array, got {type(value).__name__}")

    # bool is an int subclass but never a valid id
    if not all(isinstance(item, int) and not isinstance(item, bool) for item in value):
        raise ValueError("array contains non-integer items")

    return value


class RedisIdStore:
    """Redis implementation of the IdStore protocol.

    This class satisfies the IdStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize the Redis id store.

        Args:
            redis_client: asyncio Redis client. If None, creates default.
        """
        self._client = redis_client or get_redis_client()

    @classmethod
    def create(cls) -> "RedisIdStore":
        """Factory method to create RedisIdStore from settings."""
        return cls()

    async def read(self, name: str) -> list[int] | None:
        """Read the stored id sequence.

        Args:
            name: The Redis key

        Returns:
            The stored ids, or None if the key does not exist

        Raises:
            StorageError: If Redis cannot be reached
            ValueError: If the stored value is malformed
        """
        try:
            raw = await self._client.get(name)
        except RedisError as e:
            raise StorageError(name, str(e)) from e

        if raw is None:
            return None
        return parse_ids(raw)

    async def write(self, name: str, ids: Iterable[int]) -> None:
        """Replace the stored id sequence.

        Args:
            name: The Redis key
            ids: The complete sequence to persist

        Raises:
            StorageError: If Redis cannot be reached
        """
        payload = json.dumps(list(ids))
        try:
            await self._client.set(name, payload)
        except RedisError as e:
            raise StorageError(name, str(e)) from e

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except RedisError:
            return False

    async def close(self) -> None:
        """Close the Redis connection pool."""
        await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
