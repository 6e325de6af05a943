"""Per-key coalescing of concurrent async work."""

import asyncio
from collections.abc import Awaitable, Callable, Hashable
from functools import partial
from typing import Any


class SingleFlight:
    """Runs at most one call per key at a time.

    The first caller for a key starts the work as a task; callers arriving
    while it runs await the same task and receive the same result or
    exception. Waiters are shielded from each other: cancelling one waiter
    does not cancel the shared work.

    Keys are independent: work for key A never waits on work for key B.
    """

    def __init__(self) -> None:
        self._calls: dict[Hashable, asyncio.Task] = {}

    async def do(self, key: Hashable, fn: Callable[[], Awaitable[Any]]) -> Any:
        """Run ``fn`` for ``key`` unless a call for that key is already in flight.

        Args:
            key: Coalescing key
            fn: Zero-argument coroutine function producing the result

        Returns:
            The result of the (possibly shared) call
        """
        task = self._calls.get(key)
        if task is None:
            task = asyncio.ensure_future(fn())
            self._calls[key] = task
            task.add_done_callback(partial(self._forget, key))
        return await asyncio.shield(task)

    def _forget(self, key: Hashable, task: asyncio.Task) -> None:
        if self._calls.get(key) is task:
            del self._calls[key]
        # Mark the exception retrieved in case every waiter was cancelled
        if not task.cancelled():
            task.exception()

    def in_flight(self, key: Hashable) -> bool:
        """Whether a call for the key is currently running."""
        return key in self._calls

    def __len__(self) -> int:
        return len(self._calls)
