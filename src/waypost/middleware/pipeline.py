"""Sequential, short-circuiting execution of a route's middleware chain.

Each middleware is awaited before the next one starts, so a chain of
async middleware still runs strictly in attachment order. The first
middleware to raise ends the chain; later ones never run. Payloads of a
fully successful chain are merged last-write-wins.

There is no timeout: a middleware that never returns holds its request
open. Wrap slow I/O in its own timeout inside the middleware.
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from waypost._internal.invoke import invoke
from waypost.middleware.protocol import MiddlewareContext

DEFAULT_ERROR_STATUS = 500


@dataclass(frozen=True, slots=True)
class MiddlewareOutcome:
    """Either the error that stopped the chain, or the merged payload."""

    data: dict[str, Any] = field(default_factory=dict)
    error: BaseException | None = None
    failed_index: int | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def status(self) -> int:
        """Status for the error page: the error's ``status`` or 500."""
        status = getattr(self.error, "status", None)
        if isinstance(status, int) and not isinstance(status, bool):
            return status
        return DEFAULT_ERROR_STATUS


async def run_middleware(
    middlewares: Sequence[Callable[..., Any]],
    context: MiddlewareContext,
) -> MiddlewareOutcome:
    """Run *middlewares* in order against *context*.

    Exceptions raised by a middleware are captured in the outcome rather
    than propagated; the dispatcher decides how to render them.
    """
    data: dict[str, Any] = {}
    for index, middleware in enumerate(middlewares):
        try:
            result = await invoke(middleware, context)
        except Exception as exc:
            return MiddlewareOutcome(error=exc, failed_index=index)
        if result is None:
            continue
        if not isinstance(result, Mapping):
            exc = TypeError(
                f"Middleware at position {index} returned {type(result).__name__}, "
                "expected a mapping or None"
            )
            return MiddlewareOutcome(error=exc, failed_index=index)
        data.update(result)
    return MiddlewareOutcome(data=data)
