"""waypost — named, localized routes for server-rendered Python apps.

Declare routes by name, match incoming URLs in registration order, run
per-route middleware, and reverse names into URLs for every locale.

Basic usage::

    from waypost import Routes, TemplateApplication, get_request_handler

    routes = Routes(locale="en", force_locale=True)
    routes.add("home", "en", "/en", "index")
    routes.add("home", "fr", "/fr", "index")
    routes.add("post", "en", "/posts/:id", "post").with_middleware([load_post])

    handler = get_request_handler(routes, TemplateApplication(routes))
    # serve `handler` with any ASGI server

Reverse lookup::

    routes.find_and_get_urls("post", "en", {"id": 42}).urls.as_path  # "/posts/42"
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "HtmxNavigator",
    "HTTPError",
    "Link",
    "MiddlewareContext",
    "MiddlewareFailure",
    "Request",
    "Response",
    "Route",
    "RouteAlreadyExists",
    "RouteContext",
    "RouteNotFound",
    "Routes",
    "RoutesConfig",
    "TemplateApplication",
    "TemplateConfig",
    "WaypostError",
    "current_locale",
    "get_request_handler",
    "get_route_context",
    "wrap_navigator",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypost`` fast while providing a clean top-level API.
    """
    if name in ("Routes", "Route"):
        from waypost import routing as _routing

        return getattr(_routing, name)

    if name in ("RoutesConfig", "TemplateConfig"):
        from waypost import config as _config

        return getattr(_config, name)

    if name == "Request":
        from waypost.http.request import Request

        return Request

    if name == "Response":
        from waypost.http.response import Response

        return Response

    if name == "MiddlewareContext":
        from waypost.middleware.protocol import MiddlewareContext

        return MiddlewareContext

    if name == "get_request_handler":
        from waypost.server.dispatcher import get_request_handler

        return get_request_handler

    if name == "TemplateApplication":
        from waypost.templating.application import TemplateApplication

        return TemplateApplication

    if name in ("Link", "HtmxNavigator", "wrap_navigator"):
        from waypost import navigation as _nav

        return getattr(_nav, name)

    if name in ("RouteContext", "current_locale", "get_route_context"):
        from waypost import context as _ctx

        return getattr(_ctx, name)

    if name in (
        "ConfigurationError",
        "HTTPError",
        "MiddlewareFailure",
        "RouteAlreadyExists",
        "RouteNotFound",
        "WaypostError",
    ):
        from waypost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
