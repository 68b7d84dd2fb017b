"""Middlewares – built-in policies: logging, performance, caching, audit, retry, validation."""
from mizzle_pipeline.middlewares.logging import LoggingConfig, LoggingMiddleware, logging_middleware
from mizzle_pipeline.middlewares.performance import (
    PerformanceConfig,
    PerformanceMiddleware,
    performance_middleware,
)
from mizzle_pipeline.middlewares.caching import (
    DEFAULT_CACHED_OPERATIONS,
    CachingConfig,
    CachingMiddleware,
    caching_middleware,
    default_cache_key,
)
from mizzle_pipeline.middlewares.audit import AuditConfig, AuditMiddleware, audit_middleware
from mizzle_pipeline.middlewares.retry import (
    RetryConfig,
    RetryMiddleware,
    is_transient_error,
    retry_middleware,
)
from mizzle_pipeline.middlewares.validation import (
    DEFAULT_VALIDATED_OPERATIONS,
    ValidationConfig,
    ValidationMiddleware,
    ValidationResult,
    validation_middleware,
)

__all__ = [
    "AuditConfig",
    "AuditMiddleware",
    "CachingConfig",
    "CachingMiddleware",
    "DEFAULT_CACHED_OPERATIONS",
    "DEFAULT_VALIDATED_OPERATIONS",
    "LoggingConfig",
    "LoggingMiddleware",
    "PerformanceConfig",
    "PerformanceMiddleware",
    "RetryConfig",
    "RetryMiddleware",
    "ValidationConfig",
    "ValidationMiddleware",
    "ValidationResult",
    "audit_middleware",
    "caching_middleware",
    "default_cache_key",
    "is_transient_error",
    "logging_middleware",
    "performance_middleware",
    "retry_middleware",
    "validation_middleware",
]
