"""Route middleware protocol.

A route middleware is any callable matching::

    def mw(ctx: MiddlewareContext) -> Mapping[str, Any] | None: ...
    async def mw(ctx: MiddlewareContext) -> Mapping[str, Any] | None: ...

Returning a mapping contributes data to the page; returning ``None``
contributes nothing. Raising stops the chain — raise
``MiddlewareFailure(status=...)`` to pick the status the error page gets.

No base class required. The registry checks the shape (callable), not
the lineage.
"""

from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from waypost.http.request import Request

if TYPE_CHECKING:
    from waypost.routing.route import Route


@dataclass(frozen=True, slots=True)
class MiddlewareContext:
    """What every middleware in a route's chain receives."""

    request: Request
    route: "Route"
    query: Mapping[str, str]


type MiddlewareResult = Mapping[str, Any] | None


class Middleware(Protocol):
    """Protocol for route middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def load_post(ctx: MiddlewareContext) -> dict[str, Any]:
            return {"post": await posts.get(ctx.query["id"])}

        # Class middleware
        class RequireLocale:
            def __call__(self, ctx: MiddlewareContext) -> None:
                if ctx.route.locale is None:
                    raise MiddlewareFailure(status=404)
    """

    def __call__(
        self, ctx: MiddlewareContext
    ) -> MiddlewareResult | Awaitable[MiddlewareResult]: ...
