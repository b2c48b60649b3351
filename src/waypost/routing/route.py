"""Route definitions and the values produced by matching and lookup.

A ``Route`` is one named, localized route: a compiled pattern, the page it
renders, static data, and the middleware attached to it. Routes are frozen;
attaching middleware produces a new instance that replaces the old one in
the registry.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, TypedDict
from urllib.parse import SplitResult

from waypost.errors import ConfigurationError, MiddlewareAlreadyAttached
from waypost.http.query import build_query
from waypost.routing.pattern import CompiledPattern, compile_pattern

_EMPTY: Mapping[str, Any] = MappingProxyType({})


class RouteDescriptor(TypedDict, total=False):
    """Flat descriptor accepted by ``Routes.add`` in place of positional args."""

    name: str
    locale: str | None
    pattern: str
    page: str
    data: Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class RouteConfig:
    """Canonical form of one ``add()`` call, after overloads are resolved."""

    name: str
    locale: str | None
    pattern: str
    page: str
    data: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)


def resolve_route_config(
    name_or_descriptor: "str | Mapping[str, Any]",
    locale: str | None = None,
    pattern: str | None = None,
    page: "str | Mapping[str, Any] | None" = None,
    data: Mapping[str, Any] | None = None,
    *,
    default_locale: str | None = None,
) -> RouteConfig:
    """Turn the flexible ``add()`` arguments into a ``RouteConfig``.

    Accepted shapes::

        add("about", "en", "/about", "About")
        add("about", "en", "/about", {"title": "About"})   # page falls back to "about"
        add({"name": "about", "locale": "en", "pattern": "/about"})

    A missing pattern defaults to ``/<name>``; a missing page to the name.
    """
    if isinstance(name_or_descriptor, Mapping):
        descriptor = name_or_descriptor
        unknown = set(descriptor) - set(RouteDescriptor.__annotations__)
        if unknown:
            msg = f"Unknown route descriptor keys: {', '.join(sorted(unknown))}"
            raise ConfigurationError(msg)
        name = descriptor.get("name") or descriptor.get("page")
        locale = descriptor.get("locale", locale)
        pattern = descriptor.get("pattern")
        page = descriptor.get("page")
        data = descriptor.get("data", data)
    else:
        name = name_or_descriptor
        if isinstance(page, Mapping):
            data = page
            page = None

    if not name or not isinstance(name, str):
        msg = "A route needs a non-empty string name."
        raise ConfigurationError(msg)

    return RouteConfig(
        name=name,
        locale=default_locale if locale is None else locale,
        pattern=pattern or f"/{name}",
        page=page or name,
        data=MappingProxyType(dict(data)) if data else _EMPTY,
    )


@dataclass(frozen=True, slots=True)
class RouteUrls:
    """The two URLs a reverse lookup produces.

    ``href`` is the canonical internal path (``/<page>?<params>``),
    ``as_path`` the pretty path users see (``/posts/42``).
    """

    href: str
    as_path: str


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen, localized route definition.

    Identity is ``(name, locale)``. ``is_default_locale`` and
    ``force_locale`` are snapshots of registry state at creation time.
    ``middlewares`` stays ``None`` until a chain is attached; an attached
    empty chain is ``()``.
    """

    name: str
    locale: str | None
    pattern: str
    page: str
    data: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)
    is_default_locale: bool = False
    force_locale: bool = False
    middlewares: tuple[Callable[..., Any], ...] | None = None
    compiled: CompiledPattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "compiled", compile_pattern(self.pattern))

    @classmethod
    def from_config(
        cls,
        config: RouteConfig,
        *,
        is_default_locale: bool,
        force_locale: bool,
    ) -> "Route":
        return cls(
            name=config.name,
            locale=config.locale,
            pattern=config.pattern,
            page=config.page,
            data=config.data,
            is_default_locale=is_default_locale,
            force_locale=force_locale,
        )

    @property
    def key(self) -> tuple[str, str | None]:
        """The ``(name, locale)`` identity pair."""
        return (self.name, self.locale)

    def match(self, pathname: str) -> dict[str, str] | None:
        """Return path params when *pathname* fits this route, else ``None``."""
        return self.compiled.match(pathname)

    def get_as(self, params: Mapping[str, Any] | None = None) -> str:
        """Display path; params the pattern does not use become the query string."""
        params = dict(params or {})
        path = self.compiled.to_path(params)
        rest = {k: v for k, v in params.items() if k not in self.compiled.key_names}
        query = build_query(rest)
        return f"{path}?{query}" if query else path

    def get_href(self, params: Mapping[str, Any] | None = None) -> str:
        """Canonical internal path: ``/<page>`` plus every param as query string."""
        query = build_query(dict(params or {}))
        page = self.page.lstrip("/")
        return f"/{page}?{query}" if query else f"/{page}"

    def get_urls(self, params: Mapping[str, Any] | None = None) -> RouteUrls:
        return RouteUrls(href=self.get_href(params), as_path=self.get_as(params))

    def with_middlewares(self, functions: tuple[Callable[..., Any], ...]) -> "Route":
        """Return a copy carrying *functions*. Middleware is attached once."""
        if self.middlewares is not None:
            raise MiddlewareAlreadyAttached(self.name, self.locale)
        return replace(self, middlewares=tuple(functions))


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of ``Routes.match``; ``route`` is ``None`` when nothing matched.

    ``query`` is the query string overlaid with the path params.
    """

    route: Route | None
    params: dict[str, str]
    query: dict[str, str]
    parsed_url: SplitResult

    @property
    def found(self) -> bool:
        return self.route is not None

    @property
    def pathname(self) -> str:
        return self.parsed_url.path or "/"


@dataclass(frozen=True, slots=True)
class UrlLookup:
    """Result of a reverse lookup by name."""

    route: Route
    urls: RouteUrls
    by_name: bool = True


@dataclass(frozen=True, slots=True)
class LocaleUrl:
    """One locale variant of a route, rendered for the current params."""

    url: str
    locale: str | None
    is_default_locale: bool
