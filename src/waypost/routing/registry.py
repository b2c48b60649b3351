"""Route registry — ordered, named, locale-aware route storage.

Routes are declared during setup and read for the lifetime of the
process. Order is significant: ``match`` returns the first route whose
pattern fits, so register specific patterns before general ones.

Usage::

    routes = Routes(locale="en", force_locale=True)
    routes.add("home", "en", "/en", "index")
    routes.add("home", "fr", "/fr", "index")
    routes.add("post", "en", "/posts/:id", "post").with_middleware([load_post])

    match = routes.match("/posts/42?ref=feed")
    urls = routes.find_and_get_urls("post", "en", {"id": "42"}).urls
"""

import logging
from collections.abc import Callable, Iterator, Mapping
from typing import Any
from urllib.parse import urlsplit

from waypost.config import RoutesConfig
from waypost.errors import (
    ConfigurationError,
    InvalidMiddlewareFunction,
    InvalidMiddlewareList,
    NoRouteToAttachMiddleware,
    RouteAlreadyExists,
    RouteNotFound,
)
from waypost.http.query import parse_query
from waypost.routing.route import (
    LocaleUrl,
    Route,
    RouteMatch,
    UrlLookup,
    resolve_route_config,
)

logger = logging.getLogger("waypost.routing")

_UNSET: Any = object()


def _validate_middleware(functions: Any) -> tuple[Callable[..., Any], ...]:
    if not isinstance(functions, (list, tuple)):
        raise InvalidMiddlewareList(functions)
    for index, function in enumerate(functions):
        if not callable(function):
            raise InvalidMiddlewareFunction(index, function)
    return tuple(functions)


class RouteHandle:
    """A handle on one registered route, returned by ``Routes.add``.

    Middleware attached through the handle always lands on the route it
    was created for, regardless of what was added afterwards::

        routes.add("admin", "en", "/admin").with_middleware([require_admin])
    """

    __slots__ = ("_key", "_routes")

    def __init__(self, routes: "Routes", key: tuple[str, str | None]) -> None:
        self._routes = routes
        self._key = key

    def __repr__(self) -> str:
        name, locale = self._key
        return f"RouteHandle(name={name!r}, locale={locale!r})"

    @property
    def route(self) -> Route:
        """The route currently registered under this handle's name and locale."""
        name, locale = self._key
        route = self._routes.find_by_name(name, locale)
        if route is None:
            raise RouteNotFound(name, locale)
        return route

    def with_middleware(self, functions: list[Callable[..., Any]]) -> "RouteHandle":
        """Attach *functions* to this route (exactly once)."""
        self._routes._attach(self._key, functions)
        return self

    middleware = with_middleware

    def add(self, *args: Any, **kwargs: Any) -> "RouteHandle":
        """Register another route on the same registry (for chaining)."""
        return self._routes.add(*args, **kwargs)


class Routes:
    """Ordered registry of named, localized routes.

    Identity of a route is its ``(name, locale)`` pair, unique within the
    registry. The registry is mutated only while routes are declared;
    ``freeze()`` (called when the request handler is created) turns any
    later mutation into a ``ConfigurationError``.
    """

    def __init__(
        self,
        config: RoutesConfig | None = None,
        *,
        locale: str | None = _UNSET,
        force_locale: bool = _UNSET,
        site_url: str | None = _UNSET,
    ) -> None:
        config = config or RoutesConfig()
        self.config = config
        self.locale: str | None = config.locale if locale is _UNSET else locale
        self.force_locale: bool = config.force_locale if force_locale is _UNSET else force_locale
        self.site_url: str | None = config.site_url if site_url is _UNSET else site_url
        self._routes: list[Route] = []
        self._last_key: tuple[str, str | None] | None = None
        self._frozen = False

    def __repr__(self) -> str:
        return f"Routes(locale={self.locale!r}, routes={len(self._routes)})"

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(tuple(self._routes))

    @property
    def routes(self) -> tuple[Route, ...]:
        """Snapshot of the registered routes, in registration order."""
        return tuple(self._routes)

    @property
    def locales(self) -> tuple[str, ...]:
        """Distinct locales that have at least one route, in registration order."""
        seen = dict.fromkeys(route.locale for route in self._routes if route.locale is not None)
        return tuple(seen)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Forbid further registration. Serving starts after this point."""
        self._frozen = True

    def _check_mutable(self, action: str) -> None:
        if self._frozen:
            msg = f"Cannot {action} after the request handler has been created."
            raise ConfigurationError(msg)

    # -- Registration --

    def add(
        self,
        name_or_descriptor: str | Mapping[str, Any],
        locale: str | None = None,
        pattern: str | None = None,
        page: str | Mapping[str, Any] | None = None,
        data: Mapping[str, Any] | None = None,
        *,
        update: bool = False,
    ) -> RouteHandle:
        """Register a route and return a handle on it.

        Raises ``RouteAlreadyExists`` when the name and locale are taken,
        unless *update* is set: the old route (and its middleware) is then
        dropped and the new one is appended at the end.
        """
        self._check_mutable("add routes")
        config = resolve_route_config(
            name_or_descriptor,
            locale,
            pattern,
            page,
            data,
            default_locale=self.locale,
        )

        if self.find_by_name(config.name, config.locale) is not None:
            if not update:
                raise RouteAlreadyExists(config.name, config.locale)
            self._routes = [
                route
                for route in self._routes
                if route.name != config.name or route.locale != config.locale
            ]
            logger.debug("Replacing route %r (%s)", config.name, config.locale)

        route = Route.from_config(
            config,
            is_default_locale=config.locale == self.locale,
            force_locale=self.force_locale,
        )
        self._routes.append(route)
        self._last_key = route.key
        logger.debug(
            "Added route %r (%s) %s -> %s", route.name, route.locale, route.pattern, route.page
        )
        return RouteHandle(self, route.key)

    def middleware(self, functions: list[Callable[..., Any]]) -> "Routes":
        """Attach *functions* to the most recently added route.

        Prefer ``add(...).with_middleware(...)``, which cannot attach to
        the wrong route.
        """
        validated = _validate_middleware(functions)
        if self._last_key is None or self.find_by_name(*self._last_key) is None:
            raise NoRouteToAttachMiddleware()
        self._attach(self._last_key, validated)
        return self

    def _attach(self, key: tuple[str, str | None], functions: Any) -> None:
        self._check_mutable("attach middleware")
        validated = _validate_middleware(functions)
        for index, route in enumerate(self._routes):
            if route.key == key:
                self._routes[index] = route.with_middlewares(validated)
                return
        raise RouteNotFound(*key)

    def set_locale(self, locale: str | None) -> None:
        """Change the default locale used by later ``add`` calls and lookups.

        Existing routes keep the ``is_default_locale`` computed when they
        were added. Request-time code should pass locales explicitly.
        """
        self._check_mutable("change the default locale")
        self.locale = locale

    # -- Lookup --

    def find_by_name(self, name: str, locale: str | None = _UNSET) -> Route | None:
        """Return the route registered as *name* + *locale*, or ``None``.

        *locale* defaults to the registry's default locale.
        """
        if locale is _UNSET:
            locale = self.locale
        for route in self._routes:
            if route.name == name and route.locale == locale:
                return route
        return None

    def match(self, url: str) -> RouteMatch:
        """Match a request URL (path + optional query) against the routes.

        First registered match wins. Path params override query-string
        params of the same name in the returned ``query``.
        """
        parsed = urlsplit(url)
        pathname = parsed.path or "/"
        query = parse_query(parsed.query)

        for route in self._routes:
            params = route.match(pathname)
            if params is not None:
                return RouteMatch(
                    route=route,
                    params=params,
                    query={**query, **params},
                    parsed_url=parsed,
                )
        return RouteMatch(route=None, params={}, query=query, parsed_url=parsed)

    def find_and_get_urls(
        self,
        name: str,
        locale: str | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> UrlLookup:
        """Resolve *name* + *locale* to its canonical and display URLs.

        A ``None`` locale means the registry default. Raises
        ``RouteNotFound`` for an unknown pair.
        """
        locale = locale or self.locale
        route = self.find_by_name(name, locale)
        if route is None:
            raise RouteNotFound(name, locale)
        return UrlLookup(route=route, urls=route.get_urls(params or {}), by_name=True)

    def get_multilanguage_urls(
        self,
        route: Route,
        query: Mapping[str, Any] | None = None,
    ) -> list[LocaleUrl]:
        """Render every locale variant of *route* (same name) for *query*."""
        return [
            LocaleUrl(
                url=sibling.get_as(query or {}),
                locale=sibling.locale,
                is_default_locale=sibling.is_default_locale,
            )
            for sibling in self._routes
            if sibling.name == route.name
        ]
