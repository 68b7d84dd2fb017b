"""Middlewares – ValidationMiddleware."""
from __future__ import annotations

import dataclasses
import inspect
from typing import Any, Awaitable, Callable, Iterable, Union

from mizzle_pipeline.kernel.errors import ValidationError
from mizzle_pipeline.pipeline.context import MiddlewareContext, Operation, operation_set
from mizzle_pipeline.pipeline.middleware import Next


@dataclasses.dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: list[str] | None = None


Validator = Callable[[Any, Operation], Union[ValidationResult, Awaitable[ValidationResult]]]

DEFAULT_VALIDATED_OPERATIONS: tuple[Operation, ...] = (
    Operation.CREATE,
    Operation.UPDATE,
    Operation.UPDATE_BY_ID,
    Operation.UPDATE_MANY,
)


@dataclasses.dataclass
class ValidationConfig:
    validator: Validator
    operations: Iterable[Operation | str] = DEFAULT_VALIDATED_OPERATIONS


class ValidationMiddleware:
    """Reject invalid write payloads before they reach storage.

    Calls with no ``data`` or for operations outside ``operations`` pass
    straight through.  The validator may be sync or async.
    """

    def __init__(self, config: ValidationConfig) -> None:
        self._validator = config.validator
        self._operations = operation_set(config.operations)

    async def __call__(self, ctx: MiddlewareContext, next_: Next) -> Any:
        if ctx.operation not in self._operations or ctx.data is None:
            return await next_()

        outcome = self._validator(ctx.data, ctx.operation)
        if inspect.isawaitable(outcome):
            outcome = await outcome

        if not outcome.valid:
            raise ValidationError(outcome.errors or ["Validation failed"])
        return await next_()


def validation_middleware(config: ValidationConfig | None = None, **options: Any) -> ValidationMiddleware:
    return ValidationMiddleware(config or ValidationConfig(**options))


__all__ = [
    "DEFAULT_VALIDATED_OPERATIONS",
    "ValidationConfig",
    "ValidationMiddleware",
    "ValidationResult",
    "Validator",
    "validation_middleware",
]
