"""Middlewares – PerformanceMiddleware."""
from __future__ import annotations

import dataclasses
import time
from typing import Any, Callable

from mizzle_pipeline.observability.logging import Logger, get_logger
from mizzle_pipeline.pipeline.context import MiddlewareContext
from mizzle_pipeline.pipeline.middleware import Next

DurationCallback = Callable[[float, MiddlewareContext], None]


@dataclasses.dataclass
class PerformanceConfig:
    """Options for :class:`PerformanceMiddleware`; durations are in milliseconds."""

    slow_query_threshold: float = 1000.0
    on_slow_query: DurationCallback | None = None
    on_query_complete: DurationCallback | None = None
    logger: Logger | None = None


class PerformanceMiddleware:
    """Time every operation and report the slow ones.

    Reporting happens whether the operation succeeded or raised.  A failing
    callback is logged; it never replaces the operation's result or error.
    """

    def __init__(self, config: PerformanceConfig | None = None) -> None:
        self._config = config or PerformanceConfig()
        self._logger: Any = self._config.logger or get_logger("mizzle.performance")

    async def __call__(self, ctx: MiddlewareContext, next_: Next) -> Any:
        start = time.perf_counter()
        try:
            return await next_()
        finally:
            duration = (time.perf_counter() - start) * 1000
            self._report(duration, ctx)

    def _report(self, duration: float, ctx: MiddlewareContext) -> None:
        cfg = self._config
        if cfg.on_query_complete is not None:
            self._invoke(cfg.on_query_complete, duration, ctx)

        if duration <= cfg.slow_query_threshold:
            return
        if cfg.on_slow_query is not None:
            self._invoke(cfg.on_slow_query, duration, ctx)
        else:
            self._logger.warning(
                "query.slow",
                operation=f"{ctx.collection}.{ctx.operation}",
                duration_ms=round(duration),
                threshold_ms=cfg.slow_query_threshold,
            )

    def _invoke(self, callback: DurationCallback, duration: float, ctx: MiddlewareContext) -> None:
        try:
            callback(duration, ctx)
        except Exception as exc:  # noqa: BLE001
            self._logger.error(
                "performance.callback_failed",
                callback=getattr(callback, "__name__", repr(callback)),
                operation=f"{ctx.collection}.{ctx.operation}",
                error=repr(exc),
            )


def performance_middleware(config: PerformanceConfig | None = None, **options: Any) -> PerformanceMiddleware:
    return PerformanceMiddleware(config or PerformanceConfig(**options))


__all__ = ["PerformanceConfig", "PerformanceMiddleware", "performance_middleware"]
