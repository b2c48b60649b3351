"""Waypost exception hierarchy.

Shared across the registry, dispatcher, middleware pipeline and the
navigation facades so every module raises and catches the same types.

Setup-time errors (``ConfigurationError`` and subclasses) are meant to be
fatal to application startup. ``HTTPError`` subclasses map to a status
code and are rendered by the dispatcher.
"""

from dataclasses import dataclass


class WaypostError(Exception):
    """Base for all waypost-specific errors."""


class ConfigurationError(WaypostError):
    """Raised when routes or app configuration are invalid.

    Typically raised while routes are being declared, before the request
    handler is created.
    """


class RouteAlreadyExists(ConfigurationError):  # noqa: N818
    """A route with the same name and locale is already registered."""

    def __init__(self, name: str, locale: str | None) -> None:
        self.name = name
        self.locale = locale
        suffix = f" for locale {locale!r}" if locale is not None else ""
        super().__init__(f"Route {name!r} already exists{suffix}")


class InvalidMiddlewareList(ConfigurationError):  # noqa: N818
    """``middleware()`` was given something other than a list or tuple."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(
            f"Middleware must be a list or tuple of callables, got {type(value).__name__}"
        )


class InvalidMiddlewareFunction(ConfigurationError):  # noqa: N818
    """An element of a middleware list is not callable."""

    def __init__(self, index: int, value: object) -> None:
        self.index = index
        self.value = value
        super().__init__(
            f"Middleware at position {index} is not callable ({type(value).__name__})"
        )


class NoRouteToAttachMiddleware(ConfigurationError):  # noqa: N818
    """``middleware()`` was called before any route was added."""

    def __init__(self) -> None:
        super().__init__("Cannot attach middleware: no route has been added yet.")


class MiddlewareAlreadyAttached(ConfigurationError):  # noqa: N818
    """Middleware may be attached to a route exactly once."""

    def __init__(self, name: str, locale: str | None) -> None:
        self.name = name
        self.locale = locale
        super().__init__(f"Route {name!r} ({locale}) already has middleware attached.")


class RouteNotFound(WaypostError, LookupError):  # noqa: N818
    """Reverse lookup on an unknown name + locale pair."""

    def __init__(self, name: str, locale: str | None) -> None:
        self.name = name
        self.locale = locale
        suffix = f" for locale {locale!r}" if locale is not None else ""
        super().__init__(f"Route {name!r} not found{suffix}")


class PatternError(WaypostError, ValueError):
    """A path pattern is malformed, or parameters do not fit it."""

    def __init__(self, pattern: str, detail: str) -> None:
        self.pattern = pattern
        self.detail = detail
        super().__init__(f"{detail} (pattern {pattern!r})")


@dataclass(frozen=True, slots=True)
class HTTPError(WaypostError):
    """An error that maps directly to an HTTP status code.

    Raised by middleware or renderers. The dispatcher uses ``status``
    when handing the error to the application's error renderer.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class MiddlewareFailure(HTTPError):  # noqa: N818
    """Raised by a route middleware to stop the chain with a status code.

    Usage::

        def require_user(ctx):
            if "user" not in ctx.request.cookies:
                raise MiddlewareFailure(status=401, detail="Login required")
    """

    def __init__(
        self,
        status: int = 500,
        detail: str = "",
        headers: tuple[tuple[str, str], ...] = (),
    ) -> None:
        super().__init__(status=status, detail=detail, headers=headers)
