"""Pipeline – predicate-gated middleware wrappers."""
from __future__ import annotations

from typing import Any, Callable, Iterable

from mizzle_pipeline.pipeline.context import (
    READ_OPERATIONS,
    MiddlewareContext,
    Operation,
    operation_set,
)
from mizzle_pipeline.pipeline.middleware import Middleware, Next

Predicate = Callable[[MiddlewareContext], bool]


def when(predicate: Predicate, middleware: Middleware) -> Middleware:
    """Run *middleware* only when ``predicate(ctx)`` holds; otherwise pass through."""

    async def _conditional(ctx: MiddlewareContext, next_: Next) -> Any:
        if predicate(ctx):
            return await middleware(ctx, next_)
        return await next_()

    return _conditional


def on_operations(operations: Iterable[Operation | str], middleware: Middleware) -> Middleware:
    ops = operation_set(operations)
    return when(lambda ctx: ctx.operation in ops, middleware)


def on_reads(middleware: Middleware) -> Middleware:
    """Apply to ``findOne``, ``findById``, ``findMany``, ``aggregate`` and ``count``."""
    return when(lambda ctx: ctx.operation in READ_OPERATIONS, middleware)


def on_writes(middleware: Middleware) -> Middleware:
    """Apply to every operation that is not a read."""
    return when(lambda ctx: ctx.operation not in READ_OPERATIONS, middleware)


def on_collections(collections: Iterable[str], middleware: Middleware) -> Middleware:
    names = frozenset(collections)
    return when(lambda ctx: ctx.collection in names, middleware)


__all__ = ["Predicate", "on_collections", "on_operations", "on_reads", "on_writes", "when"]
