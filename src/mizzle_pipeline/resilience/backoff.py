"""Resilience – backoff strategies for the retry policy.

Strategies are callables ``(attempt) -> milliseconds`` where *attempt* is the
zero-based index of the attempt that just failed, so any of them can be
passed as ``backoff=`` to the retry middleware.
"""
from __future__ import annotations

import abc


class BackoffStrategy(abc.ABC):
    """Compute the wait (ms) after the *attempt*-th failure."""

    @abc.abstractmethod
    def compute(self, attempt: int) -> float: ...

    def __call__(self, attempt: int) -> float:
        return self.compute(attempt)


class ConstantBackoff(BackoffStrategy):
    """Fixed delay between attempts."""

    def __init__(self, delay_ms: float = 1000.0) -> None:
        self._delay = delay_ms

    def compute(self, attempt: int) -> float:  # noqa: ARG002
        return self._delay


class LinearBackoff(BackoffStrategy):
    """Delay grows linearly: ``base_ms * (attempt + 1)``."""

    def __init__(self, base_ms: float = 500.0, max_ms: float = 30_000.0) -> None:
        self._base = base_ms
        self._max = max_ms

    def compute(self, attempt: int) -> float:
        return min(self._base * (attempt + 1), self._max)


class ExponentialBackoff(BackoffStrategy):
    """Delay grows exponentially: ``base_ms * 2^attempt``, optionally capped."""

    def __init__(self, base_ms: float = 100.0, max_ms: float | None = None) -> None:
        self._base = base_ms
        self._max = max_ms

    def compute(self, attempt: int) -> float:
        delay = self._base * (2 ** attempt)
        if self._max is not None:
            return min(delay, self._max)
        return delay


__all__ = ["BackoffStrategy", "ConstantBackoff", "ExponentialBackoff", "LinearBackoff"]
