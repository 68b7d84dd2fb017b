"""Stores – pluggable state behind the caching and audit policies."""
from mizzle_pipeline.stores.cache import CacheStore, MemoryCacheStore
from mizzle_pipeline.stores.audit import (
    AuditLogEntry,
    AuditStore,
    InMemoryAuditStore,
    LoggingAuditStore,
)

__all__ = [
    "AuditLogEntry",
    "AuditStore",
    "CacheStore",
    "InMemoryAuditStore",
    "LoggingAuditStore",
    "MemoryCacheStore",
]
