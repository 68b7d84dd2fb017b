"""Pipeline – detached background tasks for fire-and-forget side effects."""
from __future__ import annotations

import asyncio
from typing import Any, Coroutine

from mizzle_pipeline.observability.logging import get_logger

logger = get_logger(__name__)


class DetachedTasks:
    """Owns side-effect tasks the caller never awaits.

    Each spawned coroutine runs inside its own error boundary: a failure is
    logged and never reaches the call that scheduled it.  A strong reference
    is held until the task finishes so the event loop cannot drop it.

    Usage::

        tasks = DetachedTasks("cache")
        tasks.spawn(store.set(key, value, ttl), description="cache.set")
        ...
        await tasks.flush()   # e.g. on shutdown or in tests
    """

    def __init__(self, name: str = "detached") -> None:
        self._name = name
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def spawn(self, coro: Coroutine[Any, Any, Any], *, description: str) -> asyncio.Task[None]:
        """Schedule *coro* on the running loop without awaiting it."""
        task = asyncio.get_running_loop().create_task(self._guard(coro, description))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _guard(self, coro: Coroutine[Any, Any, Any], description: str) -> None:
        try:
            await coro
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "detached_task.failed",
                owner=self._name,
                task=description,
                error=repr(exc),
            )

    async def flush(self) -> None:
        """Wait until every task spawned so far (and any they spawn) has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


__all__ = ["DetachedTasks"]
