"""Pipeline – chain composition."""
from __future__ import annotations

from typing import Any, Awaitable, Sequence

from mizzle_pipeline.kernel.errors import InvalidChainUse
from mizzle_pipeline.pipeline.context import MiddlewareContext
from mizzle_pipeline.pipeline.middleware import Middleware, Next

_IDLE = 0
_RUNNING = 1
_FAILED = 2
_DONE = 3


class _Dispatch:
    """Dispatch state for one invocation of a :class:`Chain`."""

    __slots__ = ("_ctx", "_middlewares", "_terminal")

    def __init__(self, middlewares: Sequence[Middleware], ctx: MiddlewareContext, terminal: Next) -> None:
        self._middlewares = middlewares
        self._ctx = ctx
        self._terminal = terminal

    def dispatch(self, index: int) -> Awaitable[Any]:
        if index >= len(self._middlewares):
            return self._terminal()
        return self._middlewares[index](self._ctx, self._continuation(index + 1))

    def _continuation(self, index: int) -> Next:
        # A continuation may be re-entered only after its previous call raised.
        state = _IDLE

        async def _run() -> Any:
            nonlocal state
            try:
                result = await self.dispatch(index)
            except BaseException:
                state = _FAILED
                raise
            state = _DONE
            return result

        def next_() -> Awaitable[Any]:
            nonlocal state
            if state in (_RUNNING, _DONE):
                raise InvalidChainUse()
            state = _RUNNING
            return _run()

        return next_


class Chain:
    """Ordered middlewares composed into a single middleware.

    ``chain(ctx, terminal)`` runs the first middleware; each ``next_`` runs
    the following one and the last ``next_`` awaits *terminal*.  The chain
    holds no per-call state, so one instance serves any number of calls.
    """

    def __init__(self, middlewares: Sequence[Middleware]) -> None:
        self._middlewares: tuple[Middleware, ...] = tuple(middlewares)

    @property
    def middlewares(self) -> tuple[Middleware, ...]:
        return self._middlewares

    def __len__(self) -> int:
        return len(self._middlewares)

    async def __call__(self, ctx: MiddlewareContext, next_: Next) -> Any:
        return await _Dispatch(self._middlewares, ctx, next_).dispatch(0)


def compose(*middlewares: Middleware) -> Chain:
    """Compose *middlewares* into one; the first listed is the outermost."""
    return Chain(middlewares)


__all__ = ["Chain", "compose"]
