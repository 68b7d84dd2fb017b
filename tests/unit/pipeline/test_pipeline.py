"""Unit tests for scope assembly: global → collection → call."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest
import structlog

from mizzle_pipeline.pipeline import (
    MiddlewareContext,
    Middleware,
    Next,
    Operation,
    OrmContext,
    Pipeline,
)


def tracing(name: str, trace: list[str]) -> Middleware:
    async def _mw(ctx: MiddlewareContext, next_: Next) -> Any:
        trace.append(f"{name}-before")
        result = await next_()
        trace.append(f"{name}-after")
        return result

    return _mw


class TestScopeOrdering:
    def test_global_then_collection_then_operation(self) -> None:
        trace: list[str] = []
        pipeline = Pipeline([tracing("A", trace), tracing("B", trace)]).use_for("users", tracing("C", trace))

        async def create() -> dict[str, str]:
            trace.append("create")
            return {"_id": "1"}

        result = asyncio.run(pipeline.execute("users", Operation.CREATE, create))
        assert result == {"_id": "1"}
        assert trace == ["A-before", "B-before", "C-before", "create", "C-after", "B-after", "A-after"]

    def test_call_scoped_middlewares_are_innermost(self) -> None:
        trace: list[str] = []
        pipeline = Pipeline().use(tracing("G", trace)).use_for("users", tracing("C", trace))

        async def op() -> None:
            trace.append("op")

        asyncio.run(pipeline.execute("users", "findOne", op, middlewares=[tracing("X", trace)]))
        assert trace == ["G-before", "C-before", "X-before", "op", "X-after", "C-after", "G-after"]

    def test_collection_middlewares_only_apply_to_their_collection(self) -> None:
        trace: list[str] = []
        pipeline = Pipeline().use_for("orders", tracing("O", trace))

        async def op() -> None:
            trace.append("op")

        asyncio.run(pipeline.execute("users", "findOne", op))
        assert trace == ["op"]

    def test_registration_order_within_scope(self) -> None:
        a, b = tracing("a", []), tracing("b", [])
        pipeline = Pipeline().use(a).use(b)
        assert pipeline.middlewares_for("users") == [a, b]

    def test_fluent_api_returns_pipeline(self) -> None:
        pipeline = Pipeline()
        assert pipeline.use() is pipeline
        assert pipeline.use_for("users") is pipeline


class TestExecute:
    def test_context_is_populated(self) -> None:
        captured: list[MiddlewareContext] = []

        async def capture(ctx: MiddlewareContext, next_: Next) -> Any:
            captured.append(ctx)
            return await next_()

        orm = OrmContext(request_id="req-9")
        schema = object()

        async def op() -> int:
            return 3

        result = asyncio.run(
            Pipeline([capture]).execute(
                "users",
                "count",
                op,
                orm=orm,
                collection_def=schema,
                filter={"active": True},
                options={"limit": 5},
            )
        )
        assert result == 3
        ctx = captured[0]
        assert ctx.collection == "users"
        assert ctx.operation is Operation.COUNT
        assert ctx.filter == {"active": True}
        assert ctx.options == {"limit": 5}
        assert ctx.orm is orm
        assert ctx.collection_def is schema

    def test_each_call_gets_a_fresh_context(self) -> None:
        captured: list[MiddlewareContext] = []

        async def capture(ctx: MiddlewareContext, next_: Next) -> Any:
            captured.append(ctx)
            ctx.metadata["seen"] = True
            return await next_()

        async def op() -> None:
            return None

        async def _run() -> None:
            pipeline = Pipeline([capture])
            await pipeline.execute("users", "findOne", op)
            await pipeline.execute("users", "findOne", op)

        asyncio.run(_run())
        assert captured[0] is not captured[1]

    def test_errors_reach_the_caller_unchanged(self) -> None:
        error = RuntimeError("duplicate key")

        async def op() -> None:
            raise error

        with pytest.raises(RuntimeError) as info:
            asyncio.run(Pipeline([tracing("A", [])]).execute("users", "create", op))
        assert info.value is error

    def test_call_fields_bound_into_structlog_context(self) -> None:
        seen: dict[str, Any] = {}

        async def op() -> None:
            seen.update(structlog.contextvars.get_contextvars())

        asyncio.run(Pipeline().execute("users", "deleteMany", op, orm=OrmContext(request_id="r-1")))
        assert seen["collection"] == "users"
        assert seen["operation"] == "deleteMany"
        assert seen["request_id"] == "r-1"
        assert "collection" not in structlog.contextvars.get_contextvars()
