"""Pipeline – Middleware contract."""
from __future__ import annotations

from typing import Any, Awaitable, Callable, Protocol, runtime_checkable

from mizzle_pipeline.pipeline.context import MiddlewareContext

Next = Callable[[], Awaitable[Any]]
Executor = Callable[[], Awaitable[Any]]


@runtime_checkable
class Middleware(Protocol):
    """Single link in the chain: ``(ctx, next_) -> result``.

    Plain ``async def`` functions satisfy the protocol as well as classes
    with an ``async __call__``.  Call ``next_`` at most once to proceed;
    returning without calling it short-circuits the chain.
    """

    def __call__(self, ctx: MiddlewareContext, next_: Next) -> Awaitable[Any]: ...


__all__ = ["Executor", "Middleware", "Next"]
