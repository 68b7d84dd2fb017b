"""Root error class for the mizzle-pipeline error hierarchy."""

from __future__ import annotations

from typing import Any


class MizzleError(Exception):
    """Base for every error this package raises itself.

    Errors coming from drivers or user callbacks are never wrapped in a
    :class:`MizzleError`; they reach the caller unchanged.

    Args:
        message: Human-readable description.
        code: Stable slug callers and log queries can match on.  Defaults to
            the class's ``default_code``.
        detail: Structured context, safe to log.
        cause: Exception that led to this one; also set as ``__cause__``.
    """

    default_code: str = "mizzle_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code!r})"

    def to_dict(self) -> dict[str, Any]:
        """Plain dict for structured log events."""
        payload: dict[str, Any] = {
            "error": type(self).__name__,
            "code": self.code,
            "message": self.message,
        }
        if self.detail:
            payload["detail"] = dict(self.detail)
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


__all__ = ["MizzleError"]
