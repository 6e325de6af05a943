"""In-memory implementation of IdStore.

Lives only as long as the process. Useful for local runs without Redis
and as a stand-in in tests.
"""

from collections.abc import Iterable


class MemoryIdStore:
    """Dict-backed IdStore; values are copied on the way in and out."""

    def __init__(self, initial: dict[str, list[int]] | None = None) -> None:
        self._data: dict[str, list[int]] = {name: list(ids) for name, ids in (initial or {}).items()}
        self.writes = 0

    async def read(self, name: str) -> list[int] | None:
        ids = self._data.get(name)
        return None if ids is None else list(ids)

    async def write(self, name: str, ids: Iterable[int]) -> None:
        self._data[name] = list(ids)
        self.writes += 1

    async def health_check(self) -> bool:
        return True
