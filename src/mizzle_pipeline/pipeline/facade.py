"""Pipeline – collection facade at the ORM boundary.

Each facade method is one :class:`~mizzle_pipeline.pipeline.context.Operation`:
it packs its arguments into the context and hands the matching driver call to
the pipeline as the terminal operation.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, Sequence

from mizzle_pipeline.pipeline.context import MiddlewareContext, Operation, OrmContext
from mizzle_pipeline.pipeline.middleware import Executor, Middleware

if TYPE_CHECKING:
    from mizzle_pipeline.pipeline.pipeline import Pipeline


class CollectionDriver(Protocol):
    """Storage collaborator for one collection."""

    async def find_one(self, filter: Any, options: Any = None) -> Any: ...  # noqa: A002
    async def find_many(self, filter: Any, options: Any = None) -> list[Any]: ...  # noqa: A002
    async def count(self, filter: Any) -> int: ...  # noqa: A002
    async def aggregate(self, pipeline: list[Any]) -> list[Any]: ...
    async def create(self, data: Any) -> Any: ...
    async def update(self, filter: Any, data: Any) -> Any: ...  # noqa: A002
    async def update_many(self, filter: Any, data: Any) -> int: ...  # noqa: A002
    async def delete(self, filter: Any) -> bool: ...  # noqa: A002
    async def delete_many(self, filter: Any) -> int: ...  # noqa: A002
    async def soft_delete(self, filter: Any) -> Any: ...  # noqa: A002


class CollectionFacade:
    """Operations on one named collection, routed through a pipeline."""

    def __init__(
        self,
        name: str,
        driver: CollectionDriver,
        pipeline: "Pipeline",
        *,
        collection_def: Any = None,
        orm: OrmContext | None = None,
    ) -> None:
        self.name = name
        self._driver = driver
        self._pipeline = pipeline
        self._collection_def = collection_def
        self._orm = orm or OrmContext()

    def with_orm(self, orm: OrmContext) -> "CollectionFacade":
        """Same collection and pipeline, another request context."""
        return CollectionFacade(
            self.name,
            self._driver,
            self._pipeline,
            collection_def=self._collection_def,
            orm=orm,
        )

    def _context(self, operation: Operation, **fields: Any) -> MiddlewareContext:
        return MiddlewareContext(
            collection=self.name,
            operation=operation,
            orm=self._orm,
            collection_def=self._collection_def,
            **fields,
        )

    async def _run(
        self,
        operation: Operation,
        executor: Executor,
        middlewares: Sequence[Middleware] | None,
        **fields: Any,
    ) -> Any:
        return await self._pipeline.run(self._context(operation, **fields), executor, middlewares)

    async def _run_with_old_doc(
        self,
        operation: Operation,
        write: Executor,
        middlewares: Sequence[Middleware] | None,
        **fields: Any,
    ) -> Any:
        """Run a single-document write whose terminal first loads ``ctx.old_doc``.

        The lookup is part of the terminal, so it is retried, logged and
        skipped together with the write itself.
        """
        ctx = self._context(operation, **fields)

        async def load_then_write() -> Any:
            ctx.old_doc = await self._driver.find_one(ctx.filter)
            return await write()

        return await self._pipeline.run(ctx, load_then_write, middlewares)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def find_one(self, filter: Any, options: Any = None, *, middlewares: Sequence[Middleware] | None = None) -> Any:  # noqa: A002
        return await self._run(
            Operation.FIND_ONE,
            lambda: self._driver.find_one(filter, options),
            middlewares,
            filter=filter,
            options=options,
        )

    async def find_by_id(self, id: Any, options: Any = None, *, middlewares: Sequence[Middleware] | None = None) -> Any:  # noqa: A002
        filter = {"_id": id}  # noqa: A001
        return await self._run(
            Operation.FIND_BY_ID,
            lambda: self._driver.find_one(filter, options),
            middlewares,
            filter=filter,
            options=options,
        )

    async def find_many(self, filter: Any = None, options: Any = None, *, middlewares: Sequence[Middleware] | None = None) -> list[Any]:  # noqa: A002
        filter = filter or {}  # noqa: A001
        return await self._run(
            Operation.FIND_MANY,
            lambda: self._driver.find_many(filter, options),
            middlewares,
            filter=filter,
            options=options,
        )

    async def count(self, filter: Any = None, *, middlewares: Sequence[Middleware] | None = None) -> int:  # noqa: A002
        filter = filter or {}  # noqa: A001
        return await self._run(
            Operation.COUNT,
            lambda: self._driver.count(filter),
            middlewares,
            filter=filter,
        )

    async def aggregate(self, pipeline: list[Any], *, middlewares: Sequence[Middleware] | None = None) -> list[Any]:
        return await self._run(
            Operation.AGGREGATE,
            lambda: self._driver.aggregate(pipeline),
            middlewares,
            pipeline=pipeline,
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(self, data: Any, *, middlewares: Sequence[Middleware] | None = None) -> Any:
        return await self._run(
            Operation.CREATE,
            lambda: self._driver.create(data),
            middlewares,
            data=data,
        )

    async def update(self, filter: Any, data: Any, *, middlewares: Sequence[Middleware] | None = None) -> Any:  # noqa: A002
        return await self._run_with_old_doc(
            Operation.UPDATE,
            lambda: self._driver.update(filter, data),
            middlewares,
            filter=filter,
            data=data,
        )

    async def update_by_id(self, id: Any, data: Any, *, middlewares: Sequence[Middleware] | None = None) -> Any:  # noqa: A002
        filter = {"_id": id}  # noqa: A001
        return await self._run_with_old_doc(
            Operation.UPDATE_BY_ID,
            lambda: self._driver.update(filter, data),
            middlewares,
            filter=filter,
            data=data,
        )

    async def update_many(self, filter: Any, data: Any, *, middlewares: Sequence[Middleware] | None = None) -> int:  # noqa: A002
        return await self._run(
            Operation.UPDATE_MANY,
            lambda: self._driver.update_many(filter, data),
            middlewares,
            filter=filter,
            data=data,
        )

    async def delete(self, filter: Any, *, middlewares: Sequence[Middleware] | None = None) -> bool:  # noqa: A002
        return await self._run_with_old_doc(
            Operation.DELETE,
            lambda: self._driver.delete(filter),
            middlewares,
            filter=filter,
        )

    async def delete_by_id(self, id: Any, *, middlewares: Sequence[Middleware] | None = None) -> bool:  # noqa: A002
        filter = {"_id": id}  # noqa: A001
        return await self._run_with_old_doc(
            Operation.DELETE_BY_ID,
            lambda: self._driver.delete(filter),
            middlewares,
            filter=filter,
        )

    async def delete_many(self, filter: Any, *, middlewares: Sequence[Middleware] | None = None) -> int:  # noqa: A002
        return await self._run(
            Operation.DELETE_MANY,
            lambda: self._driver.delete_many(filter),
            middlewares,
            filter=filter,
        )

    async def soft_delete(self, filter: Any, *, middlewares: Sequence[Middleware] | None = None) -> Any:  # noqa: A002
        return await self._run_with_old_doc(
            Operation.SOFT_DELETE,
            lambda: self._driver.soft_delete(filter),
            middlewares,
            filter=filter,
        )


__all__ = ["CollectionDriver", "CollectionFacade"]
