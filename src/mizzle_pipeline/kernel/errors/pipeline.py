"""Pipeline errors: chain misuse and rejected payloads."""

from __future__ import annotations

from typing import Any

from mizzle_pipeline.kernel.errors.base import MizzleError


class PipelineError(MizzleError):
    """Raised by the middleware machinery itself."""

    default_code = "pipeline_error"


class InvalidChainUse(PipelineError):  # noqa: N818
    """A middleware invoked its ``next_`` continuation more than once."""

    default_code = "invalid_chain_use"

    def __init__(self, message: str = "next() called multiple times", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class ValidationError(MizzleError):
    """Payload rejected by the validation policy.

    ``errors`` is the list of human-readable messages returned by the
    validator.
    """

    default_code = "validation_error"

    def __init__(
        self,
        errors: list[str] | None = None,
        message: str = "Validation failed",
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[str] = list(errors) if errors else ["Validation failed"]

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


__all__ = ["InvalidChainUse", "PipelineError", "ValidationError"]
