"""Config settings – PipelineSettings for the built-in policies."""
from __future__ import annotations

import dataclasses
from typing import Any

from mizzle_pipeline.config.settings.base import Settings
from mizzle_pipeline.config.validation import InvalidSettingValueError
from mizzle_pipeline.middlewares import (
    AuditConfig,
    CachingConfig,
    LoggingConfig,
    PerformanceConfig,
    RetryConfig,
)
from mizzle_pipeline.stores import AuditStore, CacheStore

LOG_LEVELS = ("debug", "info", "warn", "warning", "error")


@dataclasses.dataclass
class PipelineSettings(Settings):
    """Defaults for the built-in policies, loadable from ``MIZZLE_*`` variables.

    Example: ``MIZZLE_LOG_LEVEL=debug MIZZLE_CACHE_TTL_SECONDS=300``.
    """

    _prefix: dataclasses.ClassVar[str] = "MIZZLE"

    log_level: str = "info"
    log_include_timings: bool = True
    log_include_details: bool = False
    slow_query_threshold_ms: float = 1000.0
    cache_ttl_seconds: int = 60
    retry_max_retries: int = 3
    audit_include_reads: bool = False

    def _validate(self) -> None:
        self.log_level = self.log_level.lower()
        if self.log_level not in LOG_LEVELS:
            raise InvalidSettingValueError("log_level", self.log_level, f"expected one of {LOG_LEVELS}")
        if self.slow_query_threshold_ms < 0:
            raise InvalidSettingValueError("slow_query_threshold_ms", self.slow_query_threshold_ms, "must be >= 0")
        if self.cache_ttl_seconds <= 0:
            raise InvalidSettingValueError("cache_ttl_seconds", self.cache_ttl_seconds, "must be > 0")
        if self.retry_max_retries < 0:
            raise InvalidSettingValueError("retry_max_retries", self.retry_max_retries, "must be >= 0")

    def logging_config(self, **overrides: Any) -> LoggingConfig:
        return LoggingConfig(
            level=self.log_level,
            include_timings=self.log_include_timings,
            include_details=self.log_include_details,
            **overrides,
        )

    def performance_config(self, **overrides: Any) -> PerformanceConfig:
        return PerformanceConfig(slow_query_threshold=self.slow_query_threshold_ms, **overrides)

    def caching_config(self, store: CacheStore, **overrides: Any) -> CachingConfig:
        return CachingConfig(store=store, ttl=self.cache_ttl_seconds, **overrides)

    def retry_config(self, **overrides: Any) -> RetryConfig:
        return RetryConfig(max_retries=self.retry_max_retries, **overrides)

    def audit_config(self, store: AuditStore | None = None, **overrides: Any) -> AuditConfig:
        return AuditConfig(store=store, include_reads=self.audit_include_reads, **overrides)


__all__ = ["LOG_LEVELS", "PipelineSettings"]
