"""Middlewares – AuditMiddleware."""
from __future__ import annotations

import dataclasses
from typing import Any, Callable, Iterable

from mizzle_pipeline.pipeline.context import (
    WRITE_OPERATIONS,
    MiddlewareContext,
    Operation,
    operation_set,
)
from mizzle_pipeline.pipeline.middleware import Next
from mizzle_pipeline.pipeline.tasks import DetachedTasks
from mizzle_pipeline.stores.audit import AuditLogEntry, AuditStore, LoggingAuditStore

EntryTransformer = Callable[[AuditLogEntry], AuditLogEntry]


@dataclasses.dataclass
class AuditConfig:
    """Options for :class:`AuditMiddleware`.

    ``operations``, when given, is the exact set audited and overrides
    ``include_reads``.
    """

    store: AuditStore | None = None
    include_reads: bool = False
    operations: Iterable[Operation | str] | None = None
    transform_entry: EntryTransformer | None = None


class AuditMiddleware:
    """Record an :class:`AuditLogEntry` after each audited operation succeeds.

    The entry carries the operation's result, so it is built once ``next_``
    has returned.  Transforming and storing the entry happen in a detached
    task: neither can delay nor fail the call.  A call that raises is not
    audited and its error propagates untouched.

    Usage::

        store = InMemoryAuditStore()
        pipeline.use(AuditMiddleware(AuditConfig(store=store)))
    """

    def __init__(self, config: AuditConfig | None = None) -> None:
        self._config = config or AuditConfig()
        self._store: AuditStore = self._config.store or LoggingAuditStore()
        self._operations = (
            operation_set(self._config.operations) if self._config.operations is not None else None
        )
        self._pending = DetachedTasks("audit")

    def should_audit(self, operation: Operation) -> bool:
        if self._operations is not None:
            return operation in self._operations
        return self._config.include_reads or operation in WRITE_OPERATIONS

    async def __call__(self, ctx: MiddlewareContext, next_: Next) -> Any:
        if not self.should_audit(ctx.operation):
            return await next_()

        result = await next_()

        entry = AuditLogEntry(
            collection=ctx.collection,
            operation=ctx.operation,
            user=ctx.orm.user,
            filter=ctx.filter,
            data=ctx.data,
            old_doc=ctx.old_doc,
            result=result,
            metadata=dict(ctx.metadata),
        )
        self._pending.spawn(self._record(entry), description=f"audit.log {ctx.collection}.{ctx.operation}")
        return result

    async def _record(self, entry: AuditLogEntry) -> None:
        if self._config.transform_entry is not None:
            entry = self._config.transform_entry(entry)
        await self._store.log(entry)

    async def flush(self) -> None:
        """Wait for pending audit writes."""
        await self._pending.flush()


def audit_middleware(config: AuditConfig | None = None, **options: Any) -> AuditMiddleware:
    return AuditMiddleware(config or AuditConfig(**options))


__all__ = ["AuditConfig", "AuditMiddleware", "EntryTransformer", "audit_middleware"]
