"""Pipeline – scope assembly (global → collection → call) around the real operation."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Sequence

import structlog

from mizzle_pipeline.pipeline.compose import compose
from mizzle_pipeline.pipeline.context import MiddlewareContext, Operation, OrmContext
from mizzle_pipeline.pipeline.middleware import Executor, Middleware

if TYPE_CHECKING:
    from mizzle_pipeline.pipeline.facade import CollectionDriver, CollectionFacade


class Pipeline:
    """Registers middlewares at three scopes and runs calls through them.

    For every call the chain is ``global ++ collection ++ call`` in
    registration order, so process-wide policies wrap collection policies,
    which wrap per-call policies, which wrap the real operation.

    Usage::

        pipeline = (
            Pipeline()
            .use(logging_middleware(), retry_middleware())
            .use_for("users", audit_middleware(store=audit_store))
        )
        users = pipeline.collection("users", driver)
        await users.create({"name": "Ada"})
    """

    def __init__(self, middlewares: Iterable[Middleware] = ()) -> None:
        self._global: list[Middleware] = list(middlewares)
        self._collections: dict[str, list[Middleware]] = {}

    def use(self, *middlewares: Middleware) -> "Pipeline":
        """Append process-wide middlewares (fluent API)."""
        self._global.extend(middlewares)
        return self

    def use_for(self, collection: str, *middlewares: Middleware) -> "Pipeline":
        """Append middlewares that only wrap calls on *collection* (fluent API)."""
        self._collections.setdefault(collection, []).extend(middlewares)
        return self

    def middlewares_for(
        self,
        collection: str,
        call_middlewares: Sequence[Middleware] | None = None,
    ) -> list[Middleware]:
        return [*self._global, *self._collections.get(collection, ()), *(call_middlewares or ())]

    async def run(
        self,
        ctx: MiddlewareContext,
        executor: Executor,
        middlewares: Sequence[Middleware] | None = None,
    ) -> Any:
        """Run *executor* for *ctx* inside the assembled chain."""
        chain = compose(*self.middlewares_for(ctx.collection, middlewares))
        with structlog.contextvars.bound_contextvars(
            collection=ctx.collection,
            operation=str(ctx.operation),
            request_id=ctx.request_id,
        ):
            return await chain(ctx, executor)

    async def execute(
        self,
        collection: str,
        operation: Operation | str,
        executor: Executor,
        *,
        orm: OrmContext | None = None,
        collection_def: Any = None,
        filter: Any = None,  # noqa: A002
        data: Any = None,
        old_doc: Any = None,
        options: Any = None,
        pipeline: Any = None,
        middlewares: Sequence[Middleware] | None = None,
    ) -> Any:
        """Build a fresh context for one call and :meth:`run` it."""
        ctx = MiddlewareContext(
            collection=collection,
            operation=Operation(operation),
            filter=filter,
            data=data,
            old_doc=old_doc,
            options=options,
            pipeline=pipeline,
            orm=orm or OrmContext(),
            collection_def=collection_def,
        )
        return await self.run(ctx, executor, middlewares)

    def collection(
        self,
        name: str,
        driver: "CollectionDriver",
        *,
        collection_def: Any = None,
        orm: OrmContext | None = None,
    ) -> "CollectionFacade":
        """Return a facade whose operations all go through this pipeline."""
        from mizzle_pipeline.pipeline.facade import CollectionFacade

        return CollectionFacade(name, driver, self, collection_def=collection_def, orm=orm)


__all__ = ["Pipeline"]
