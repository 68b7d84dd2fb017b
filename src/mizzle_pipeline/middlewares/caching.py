"""Middlewares – CachingMiddleware."""
from __future__ import annotations

import dataclasses
import json
from typing import Any, Callable, Iterable

from mizzle_pipeline.pipeline.context import MiddlewareContext, Operation, operation_set
from mizzle_pipeline.pipeline.middleware import Next
from mizzle_pipeline.pipeline.tasks import DetachedTasks
from mizzle_pipeline.stores.cache import CacheStore

KeyGenerator = Callable[[MiddlewareContext], str]

DEFAULT_CACHED_OPERATIONS: frozenset[Operation] = frozenset(
    op for op in Operation if op.value.startswith("find") or op is Operation.COUNT
)


def _to_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), default=str)


def default_cache_key(ctx: MiddlewareContext) -> str:
    """``mizzle:<collection>:<operation>:<filter JSON>:<options JSON>``."""
    parts = [
        ctx.collection,
        str(ctx.operation),
        _to_json(ctx.filter or {}),
        _to_json(ctx.options or {}),
    ]
    return "mizzle:" + ":".join(parts)


@dataclasses.dataclass
class CachingConfig:
    """Options for :class:`CachingMiddleware`.

    ``ttl`` is in seconds.  ``operations`` defaults to every ``find*``
    operation plus ``count``.
    """

    store: CacheStore
    ttl: float = 60
    key_generator: KeyGenerator | None = None
    operations: Iterable[Operation | str] | None = None


class CachingMiddleware:
    """Serve cacheable reads from a :class:`CacheStore`.

    A hit returns without calling ``next_``.  On a miss the result is
    written back in a detached task; a failed write is logged and never
    reaches the caller.  There is no invalidation on writes: entries live
    until their TTL runs out.
    """

    def __init__(self, config: CachingConfig) -> None:
        self._config = config
        self._store = config.store
        self._key = config.key_generator or default_cache_key
        self._operations = (
            operation_set(config.operations) if config.operations is not None else DEFAULT_CACHED_OPERATIONS
        )
        self._writes = DetachedTasks("cache")

    async def __call__(self, ctx: MiddlewareContext, next_: Next) -> Any:
        if ctx.operation not in self._operations:
            return await next_()

        key = self._key(ctx)
        cached = await self._store.get(key)
        if cached is not None:
            ctx.metadata["cache"] = "hit"
            return cached

        ctx.metadata["cache"] = "miss"
        result = await next_()
        if result is not None:
            self._writes.spawn(self._store.set(key, result, self._config.ttl), description=f"cache.set {key}")
        return result

    async def flush(self) -> None:
        """Wait for pending cache writes."""
        await self._writes.flush()


def caching_middleware(config: CachingConfig | None = None, **options: Any) -> CachingMiddleware:
    return CachingMiddleware(config or CachingConfig(**options))


__all__ = [
    "CachingConfig",
    "CachingMiddleware",
    "DEFAULT_CACHED_OPERATIONS",
    "KeyGenerator",
    "caching_middleware",
    "default_cache_key",
]
