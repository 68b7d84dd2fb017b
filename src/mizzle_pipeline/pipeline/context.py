"""Pipeline – operations, request context and the per-call MiddlewareContext."""
from __future__ import annotations

import dataclasses
import time
from enum import Enum
from typing import Any, Iterable


class Operation(str, Enum):
    """Every data-access operation a collection exposes."""

    CREATE = "create"
    FIND_ONE = "findOne"
    FIND_BY_ID = "findById"
    FIND_MANY = "findMany"
    COUNT = "count"
    AGGREGATE = "aggregate"
    UPDATE = "update"
    UPDATE_BY_ID = "updateById"
    UPDATE_MANY = "updateMany"
    DELETE = "delete"
    DELETE_BY_ID = "deleteById"
    DELETE_MANY = "deleteMany"
    SOFT_DELETE = "softDelete"

    def __str__(self) -> str:
        return self.value


READ_OPERATIONS: frozenset[Operation] = frozenset({
    Operation.FIND_ONE,
    Operation.FIND_BY_ID,
    Operation.FIND_MANY,
    Operation.AGGREGATE,
    Operation.COUNT,
})

WRITE_OPERATIONS: frozenset[Operation] = frozenset(Operation) - READ_OPERATIONS


def operation_set(operations: Iterable[Operation | str]) -> frozenset[Operation]:
    """Normalise names or members into a set of :class:`Operation`.

    Raises ``ValueError`` for an unknown operation name.
    """
    return frozenset(Operation(op) for op in operations)


def is_read_operation(operation: Operation | str) -> bool:
    return Operation(operation) in READ_OPERATIONS


def is_write_operation(operation: Operation | str) -> bool:
    return not is_read_operation(operation)


@dataclasses.dataclass
class UserContext:
    """Authenticated user attached to a request."""

    id: str
    email: str | None = None
    roles: list[str] = dataclasses.field(default_factory=list)
    extra: dict[str, Any] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass
class OrmContext:
    """Caller-supplied request context (who is asking, and for which request).

    The pipeline only reads it; middlewares must not mutate it.
    """

    request_id: str | None = None
    correlation_id: str | None = None
    user: UserContext | None = None
    tenant_id: str | None = None
    ip: str | None = None
    user_agent: str | None = None
    session: Any = None
    extra: dict[str, Any] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass(eq=False)
class MiddlewareContext:
    """Per-call record threaded through the middleware chain.

    Attributes:
        collection: Name of the target collection.
        operation: The :class:`Operation` being performed.
        filter: Filter for find/update/delete operations.
        data: Payload for create/update operations.
        old_doc: Document before update/delete, when the caller loaded it.
        options: Query options (sort, limit, skip, ...).
        pipeline: Aggregation stages for ``aggregate``.
        orm: Request context; shared, read-only.
        collection_def: Schema/relations descriptor; opaque to the pipeline.
        metadata: Scratch space any middleware may read and write.
        started_at: Epoch seconds, set once when the context is built.
    """

    collection: str
    operation: Operation
    filter: Any = None
    data: Any = None
    old_doc: Any = None
    options: Any = None
    pipeline: Any = None
    orm: OrmContext = dataclasses.field(default_factory=OrmContext)
    collection_def: Any = None
    metadata: dict[str, Any] = dataclasses.field(default_factory=dict)
    started_at: float = dataclasses.field(default_factory=time.time)

    def __post_init__(self) -> None:
        self.operation = Operation(self.operation)
        if self.orm is None:
            self.orm = OrmContext()
        if self.metadata is None:
            self.metadata = {}

    @property
    def request_id(self) -> str | None:
        return self.orm.request_id

    @property
    def elapsed_ms(self) -> float:
        """Milliseconds since the context was built."""
        return (time.time() - self.started_at) * 1000.0


__all__ = [
    "MiddlewareContext",
    "Operation",
    "OrmContext",
    "READ_OPERATIONS",
    "UserContext",
    "WRITE_OPERATIONS",
    "is_read_operation",
    "is_write_operation",
    "operation_set",
]
