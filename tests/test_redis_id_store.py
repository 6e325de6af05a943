"""
Tests for the Redis-backed id store, using an in-memory stand-in client.
"""

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from poster_cache.errors import StorageError
from poster_cache.protocols import IdStore
from poster_cache.repositories import RedisIdStore
from poster_cache.repositories.redis_id_store import parse_ids


class FakeAsyncRedis:
    """Minimal async Redis client storing bytes values."""

    def __init__(self, data: dict | None = None, down: bool = False) -> None:
        self.data = dict(data or {})
        self.down = down
        self.closed = False

    async def get(self, name):
        if self.down:
            raise RedisConnectionError("connection refused")
        return self.data.get(name)

    async def set(self, name, value):
        if self.down:
            raise RedisConnectionError("connection refused")
        self.data[name] = value.encode() if isinstance(value, str) else value
        return True

    async def ping(self):
        if self.down:
            raise RedisConnectionError("connection refused")
        return True

    async def aclose(self):
        self.closed = True


def test_satisfies_protocol():
    """RedisIdStore is a structural IdStore."""
    assert isinstance(RedisIdStore(redis_client=FakeAsyncRedis()), IdStore)


@pytest.mark.asyncio
async def test_write_then_read_roundtrip():
    """Ids are stored as a JSON array under the fixed key."""
    client = FakeAsyncRedis()
    store = RedisIdStore(redis_client=client)

    await store.write("watched", [3, 1, 2])

    assert client.data["watched"] == b"[3, 1, 2]"
    assert await store.read("watched") == [3, 1, 2]


@pytest.mark.asyncio
async def test_missing_key_reads_none():
    """A key that was never written reads as None."""
    assert await RedisIdStore(redis_client=FakeAsyncRedis()).read("watched") is None


@pytest.mark.asyncio
async def test_malformed_value_raises_value_error():
    """Malformed stored values are reported as ValueError."""
    store = RedisIdStore(redis_client=FakeAsyncRedis({"watched": b"{oops"}))

    with pytest.raises(ValueError):
        await store.read("watched")


@pytest.mark.asyncio
async def test_redis_errors_become_storage_errors():
    """Connection failures surface as StorageError."""
    store = RedisIdStore(redis_client=FakeAsyncRedis(down=True))

    with pytest.raises(StorageError):
        await store.read("watched")
    with pytest.raises(StorageError):
        await store.write("watched", [1])
    assert await store.health_check() is False


@pytest.mark.asyncio
async def test_close_closes_client():
    """Closing the store closes the client."""
    client = FakeAsyncRedis()
    store = RedisIdStore(redis_client=client)

    assert await store.health_check() is True
    await store.close()

    assert client.closed


@pytest.mark.parametrize(
    "raw",
    [b'{"ids": [1]}', b'[1, "2"]', b"[true]", b"[1.5]", b"\xff\xfe"],
)
def test_parse_ids_rejects_non_integer_arrays(raw):
    """Only JSON arrays of integers are valid."""
    with pytest.raises(ValueError):
        parse_ids(raw)


def test_parse_ids_accepts_empty_array():
    """An empty array is a valid, empty watched list."""
    assert parse_ids(b"[]") == []
