"""Resilience – backoff strategies."""
from mizzle_pipeline.resilience.backoff import (
    BackoffStrategy,
    ConstantBackoff,
    ExponentialBackoff,
    LinearBackoff,
)

__all__ = ["BackoffStrategy", "ConstantBackoff", "ExponentialBackoff", "LinearBackoff"]
