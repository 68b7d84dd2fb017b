"""Middlewares – RetryMiddleware on top of ``tenacity``."""
from __future__ import annotations

import asyncio
import dataclasses
from typing import Any, Awaitable, Callable, Iterable

import tenacity

from mizzle_pipeline.observability.logging import Logger, get_logger
from mizzle_pipeline.pipeline.context import MiddlewareContext, Operation, operation_set
from mizzle_pipeline.pipeline.middleware import Next
from mizzle_pipeline.resilience.backoff import ExponentialBackoff

TRANSIENT_MARKERS: tuple[str, ...] = ("network", "timeout", "econnreset", "enotfound")


def is_transient_error(exc: BaseException) -> bool:
    """True when the error message mentions a network-level failure."""
    message = str(exc).lower()
    return any(marker in message for marker in TRANSIENT_MARKERS)


@dataclasses.dataclass
class RetryConfig:
    """Options for :class:`RetryMiddleware`.

    ``backoff(attempt)`` returns milliseconds to wait after the zero-based
    *attempt* failed.  ``operations=None`` retries every operation.
    """

    max_retries: int = 3
    backoff: Callable[[int], float] = dataclasses.field(default_factory=ExponentialBackoff)
    retry_if: Callable[[BaseException], bool] = is_transient_error
    operations: Iterable[Operation | str] | None = None
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    logger: Logger | None = None

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")


class RetryMiddleware:
    """Re-run the inner chain after transient failures.

    Makes at most ``max_retries + 1`` attempts.  A failure is retried only if
    attempts remain and ``retry_if`` accepts it; otherwise that same error is
    raised.  When attempts run out the last error is raised unchanged.
    """

    def __init__(self, config: RetryConfig | None = None) -> None:
        self._config = config or RetryConfig()
        self._logger: Any = self._config.logger or get_logger("mizzle.retry")
        self._operations = (
            operation_set(self._config.operations) if self._config.operations is not None else None
        )

    def _should_retry(self, exc: BaseException) -> bool:
        return isinstance(exc, Exception) and self._config.retry_if(exc)

    def _wait(self, retry_state: tenacity.RetryCallState) -> float:
        return self._config.backoff(retry_state.attempt_number - 1) / 1000.0

    def _build_retrying(self, ctx: MiddlewareContext) -> tenacity.AsyncRetrying:
        max_attempts = self._config.max_retries + 1

        def _before_sleep(retry_state: tenacity.RetryCallState) -> None:
            delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
            self._logger.warning(
                "operation.retrying",
                operation=f"{ctx.collection}.{ctx.operation}",
                attempt=retry_state.attempt_number,
                max_attempts=max_attempts,
                delay_ms=round(delay * 1000, 2),
                error=repr(retry_state.outcome.exception()) if retry_state.outcome else None,
            )

        return tenacity.AsyncRetrying(
            stop=tenacity.stop_after_attempt(max_attempts),
            wait=self._wait,
            retry=tenacity.retry_if_exception(self._should_retry),
            before_sleep=_before_sleep,
            sleep=self._config.sleep,
            reraise=True,
        )

    async def __call__(self, ctx: MiddlewareContext, next_: Next) -> Any:
        if self._operations is not None and ctx.operation not in self._operations:
            return await next_()

        async for attempt in self._build_retrying(ctx):
            with attempt:
                result = await next_()
            ctx.metadata["attempts"] = attempt.retry_state.attempt_number
        return result  # type: ignore[possibly-undefined]


def retry_middleware(config: RetryConfig | None = None, **options: Any) -> RetryMiddleware:
    return RetryMiddleware(config or RetryConfig(**options))


__all__ = [
    "RetryConfig",
    "RetryMiddleware",
    "TRANSIENT_MARKERS",
    "is_transient_error",
    "retry_middleware",
]
