"""Stores – AuditLogEntry, AuditStore protocol and implementations."""
from __future__ import annotations

import dataclasses
from datetime import UTC, datetime
from typing import Any, Protocol, runtime_checkable

from mizzle_pipeline.observability.logging import get_logger
from mizzle_pipeline.pipeline.context import Operation


@dataclasses.dataclass(frozen=True)
class AuditLogEntry:
    """An immutable record of one audited operation.

    Parameters
    ----------
    collection:
        Collection the operation targeted.
    operation:
        The :class:`~mizzle_pipeline.pipeline.context.Operation` performed.
    user:
        ``orm.user`` of the calling request, if any.
    filter, data, old_doc:
        Payloads copied from the middleware context.
    result:
        What the operation returned.
    metadata:
        Snapshot of ``ctx.metadata`` when the entry was built.
    timestamp:
        UTC time the entry was built.  Defaults to *now*.
    """

    collection: str
    operation: Operation
    user: Any = None
    filter: Any = None
    data: Any = None
    old_doc: Any = None
    result: Any = None
    metadata: dict[str, Any] = dataclasses.field(default_factory=dict)
    timestamp: datetime = dataclasses.field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        """Plain dict with JSON-friendly timestamp and operation."""
        payload = {f.name: getattr(self, f.name) for f in dataclasses.fields(self)}
        payload["timestamp"] = self.timestamp.isoformat()
        payload["operation"] = str(self.operation)
        if dataclasses.is_dataclass(self.user) and not isinstance(self.user, type):
            payload["user"] = dataclasses.asdict(self.user)
        return payload


@runtime_checkable
class AuditStore(Protocol):
    async def log(self, entry: AuditLogEntry) -> None: ...


class LoggingAuditStore:
    """Default :class:`AuditStore`: one structlog event per entry."""

    def __init__(self, logger: Any = None) -> None:
        self._log = logger if logger is not None else get_logger("mizzle.audit")

    async def log(self, entry: AuditLogEntry) -> None:
        self._log.info("audit.entry", entry=entry.to_dict())


class InMemoryAuditStore:
    """Keeps entries in a list, in the order they were logged."""

    def __init__(self) -> None:
        self.entries: list[AuditLogEntry] = []

    async def log(self, entry: AuditLogEntry) -> None:
        self.entries.append(entry)

    def for_collection(self, collection: str) -> list[AuditLogEntry]:
        return [e for e in self.entries if e.collection == collection]

    def clear(self) -> None:
        self.entries.clear()


__all__ = ["AuditLogEntry", "AuditStore", "InMemoryAuditStore", "LoggingAuditStore"]
