"""Router facade — imperative navigation by route name.

Any object with ``push`` / ``replace`` (and optionally ``prefetch``)
primitives taking ``(href, as_path, options)`` can be wrapped::

    nav = wrap_navigator(HtmxNavigator(), routes)
    response = nav.push_route("post", {"id": 42}, locale="fr")

``HtmxNavigator`` is the built-in primitive: it drives the browser via
htmx response headers.
"""

from collections.abc import Callable, Mapping
from typing import Any, Protocol

from waypost.http.response import Response
from waypost.routing.registry import Routes


class Navigator(Protocol):
    """Navigation primitives a router facade delegates to."""

    def push(self, href: str, as_path: str, options: Mapping[str, Any] | None = None) -> Any: ...

    def replace(self, href: str, as_path: str, options: Mapping[str, Any] | None = None) -> Any: ...


type RouteNavigation = Callable[..., Any]


def _navigation(routes: Routes, primitive: Callable[..., Any]) -> RouteNavigation:
    def navigate(
        name: str,
        params: Mapping[str, Any] | None = None,
        locale: str | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Any:
        urls = routes.find_and_get_urls(name, locale, params).urls
        return primitive(urls.href, urls.as_path, options)

    navigate.__name__ = f"{getattr(primitive, '__name__', 'navigate')}_route"
    return navigate


def wrap_navigator[N](navigator: N, routes: Routes) -> N:
    """Add ``push_route``/``replace_route``/``prefetch_route`` to *navigator* in place.

    ``prefetch_route`` is only added when the navigator has ``prefetch``.
    """
    navigator.push_route = _navigation(routes, navigator.push)  # type: ignore[attr-defined]
    navigator.replace_route = _navigation(routes, navigator.replace)  # type: ignore[attr-defined]
    prefetch = getattr(navigator, "prefetch", None)
    if callable(prefetch):
        navigator.prefetch_route = _navigation(routes, prefetch)  # type: ignore[attr-defined]
    return navigator


class HtmxNavigator:
    """Navigation through htmx response headers.

    Each call returns the updated response and keeps it on
    ``self.response``, so several calls accumulate headers.
    ``options`` may carry ``target``/``swap``/``source`` for ``HX-Location``.
    """

    def __init__(self, response: Response | None = None) -> None:
        self.response = response or Response()

    def _location(self, url: str, options: Mapping[str, Any] | None) -> Response:
        extra = {k: str(v) for k, v in (options or {}).items() if k in ("target", "swap", "source")}
        return self.response.with_hx_location(url, **extra)

    def push(self, href: str, as_path: str, options: Mapping[str, Any] | None = None) -> Response:
        url = as_path or href
        self.response = self._location(url, options).with_hx_push_url(url)
        return self.response

    def replace(
        self, href: str, as_path: str, options: Mapping[str, Any] | None = None
    ) -> Response:
        url = as_path or href
        self.response = self._location(url, options).with_hx_replace_url(url)
        return self.response

    def prefetch(
        self, href: str, as_path: str, options: Mapping[str, Any] | None = None  # noqa: ARG002
    ) -> Response:
        self.response = self.response.with_header("Link", f"<{as_path or href}>; rel=prefetch")
        return self.response


class Router:
    """Route-name navigation without touching the navigator object.

    ``Router(routes, navigator).push_route(...)`` behaves like the
    methods ``wrap_navigator`` installs.
    """

    __slots__ = ("navigator", "prefetch_route", "push_route", "replace_route")

    def __init__(self, routes: Routes, navigator: Navigator) -> None:
        self.navigator = navigator
        self.push_route = _navigation(routes, navigator.push)
        self.replace_route = _navigation(routes, navigator.replace)
        prefetch = getattr(navigator, "prefetch", None)
        self.prefetch_route = _navigation(routes, prefetch) if callable(prefetch) else None
