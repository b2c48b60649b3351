"""Request-scoped routing context via ContextVar.

Provides:
- ``RouteContext``: what the dispatcher resolved for the current request.
- ``route_context``: the ContextVar holding it during dispatch.
- ``current_locale()``: the locale of the matched route.

The dispatcher sets ``route_context`` before running middleware and
resets it after rendering. Outside a matched request, accessing it
raises ``LookupError``.

Thread safety:
    ``ContextVar`` is task-local under asyncio. No locks needed.
"""

from collections.abc import Callable
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

from waypost.http.request import Request
from waypost.routing.route import LocaleUrl, Route


@dataclass(slots=True)
class RouteContext:
    """Per-request routing state handed to middleware, renderers and templates.

    ``data`` starts as the route's static data and receives the merged
    middleware payload before rendering.
    """

    request: Request
    route: Route
    query: dict[str, str]
    params: dict[str, str]
    locale: str | None
    site_url: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    _multilanguage: Callable[[], list[LocaleUrl]] | None = field(default=None, repr=False)
    _multilanguage_cache: list[LocaleUrl] | None = field(default=None, repr=False)

    @property
    def page(self) -> str:
        return self.route.page

    @property
    def multilanguage_urls(self) -> list[LocaleUrl]:
        """Every locale variant of the matched route, computed on first access."""
        if self._multilanguage_cache is None:
            loader = self._multilanguage
            self._multilanguage_cache = loader() if loader is not None else []
        return self._multilanguage_cache


route_context: ContextVar[RouteContext] = ContextVar("waypost_route_context")
"""The current route context. Set by the dispatcher for matched requests."""


def get_route_context() -> RouteContext:
    """Return the current route context.

    Raises ``LookupError`` if called outside a matched request.
    """
    return route_context.get()


def current_locale(default: str | None = None) -> str | None:
    """Locale of the route matched for the current request, or *default*."""
    ctx = route_context.get(None)
    if ctx is None:
        return default
    return ctx.locale
