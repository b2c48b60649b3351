"""Route middleware — plain callables run before a matched page renders.

A middleware is any callable matching:
    def mw(ctx: MiddlewareContext) -> Mapping | None

Attach with ``routes.add(...).with_middleware([...])``.
"""

from waypost.middleware.pipeline import MiddlewareOutcome, run_middleware
from waypost.middleware.protocol import Middleware, MiddlewareContext

__all__ = [
    "Middleware",
    "MiddlewareContext",
    "MiddlewareOutcome",
    "run_middleware",
]
