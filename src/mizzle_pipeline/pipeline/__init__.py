"""Pipeline – composable interceptor chain around collection operations."""
from mizzle_pipeline.pipeline.context import (
    READ_OPERATIONS,
    WRITE_OPERATIONS,
    MiddlewareContext,
    Operation,
    OrmContext,
    UserContext,
    is_read_operation,
    is_write_operation,
    operation_set,
)
from mizzle_pipeline.pipeline.middleware import Executor, Middleware, Next
from mizzle_pipeline.pipeline.compose import Chain, compose
from mizzle_pipeline.pipeline.combinators import (
    on_collections,
    on_operations,
    on_reads,
    on_writes,
    when,
)
from mizzle_pipeline.pipeline.tasks import DetachedTasks
from mizzle_pipeline.pipeline.pipeline import Pipeline
from mizzle_pipeline.pipeline.facade import CollectionDriver, CollectionFacade

__all__ = [
    "Chain",
    "CollectionDriver",
    "CollectionFacade",
    "DetachedTasks",
    "Executor",
    "Middleware",
    "MiddlewareContext",
    "Next",
    "Operation",
    "OrmContext",
    "Pipeline",
    "READ_OPERATIONS",
    "UserContext",
    "WRITE_OPERATIONS",
    "compose",
    "is_read_operation",
    "is_write_operation",
    "on_collections",
    "on_operations",
    "on_reads",
    "on_writes",
    "operation_set",
    "when",
]
