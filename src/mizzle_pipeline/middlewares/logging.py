"""Middlewares – LoggingMiddleware."""
from __future__ import annotations

import dataclasses
import time
from typing import Any

from mizzle_pipeline.observability.logging import Logger, SensitiveFieldsFilter, get_logger
from mizzle_pipeline.pipeline.context import MiddlewareContext
from mizzle_pipeline.pipeline.middleware import Next

_LEVEL_METHODS = {
    "debug": "debug",
    "info": "info",
    "warn": "warning",
    "warning": "warning",
    "error": "error",
}


@dataclasses.dataclass
class LoggingConfig:
    """Options for :class:`LoggingMiddleware`.

    ``include_details`` only takes effect at ``debug`` level; filter, data and
    options are redacted with :class:`SensitiveFieldsFilter` before logging.
    """

    level: str = "info"
    logger: Logger | None = None
    include_timings: bool = True
    include_details: bool = False
    redactor: SensitiveFieldsFilter = dataclasses.field(default_factory=SensitiveFieldsFilter)

    def __post_init__(self) -> None:
        if self.level not in _LEVEL_METHODS:
            raise ValueError(f"Unknown log level {self.level!r}; expected one of {sorted(_LEVEL_METHODS)}")


class LoggingMiddleware:
    """Log each operation's start, completion time and failures."""

    def __init__(self, config: LoggingConfig | None = None) -> None:
        self._config = config or LoggingConfig()
        self._logger: Any = self._config.logger or get_logger("mizzle.operations")
        self._method = _LEVEL_METHODS[self._config.level]

    async def __call__(self, ctx: MiddlewareContext, next_: Next) -> Any:
        log_at = getattr(self._logger, self._method)
        request_id = ctx.request_id or "unknown"
        operation = f"{ctx.collection}.{ctx.operation}"
        start = time.perf_counter()

        if self._method == "debug" and self._config.include_details:
            self._logger.debug(
                "operation.started",
                request_id=request_id,
                operation=operation,
                filter=self._config.redactor.redact_value(ctx.filter),
                data=self._config.redactor.redact_value(ctx.data),
                options=self._config.redactor.redact_value(ctx.options),
            )
        else:
            log_at("operation.started", request_id=request_id, operation=operation)

        try:
            result = await next_()
        except Exception as exc:
            duration = (time.perf_counter() - start) * 1000
            self._logger.error(
                "operation.failed",
                request_id=request_id,
                operation=operation,
                duration_ms=round(duration, 2),
                error=repr(exc),
            )
            raise

        if self._config.include_timings:
            duration = (time.perf_counter() - start) * 1000
            log_at(
                "operation.completed",
                request_id=request_id,
                operation=operation,
                duration_ms=round(duration, 2),
            )
        return result


def logging_middleware(config: LoggingConfig | None = None, **options: Any) -> LoggingMiddleware:
    """Build a :class:`LoggingMiddleware` from *config* or keyword options."""
    return LoggingMiddleware(config or LoggingConfig(**options))


__all__ = ["LoggingConfig", "LoggingMiddleware", "logging_middleware"]
