"""Request dispatcher — match, run middleware, render.

Per request:

1. Match the raw URL against the registry.
2. Matched: publish a ``RouteContext``, run the route's middleware, then
   render the page (or the error page when a middleware raised).
3. Not matched: redirect ``/`` to a locale home when ``force_locale`` is
   on, otherwise hand the request to the application's default handler.

``get_request_handler`` wraps a dispatcher as the ASGI callable a host
server installs. Creating it freezes the registry.
"""

import logging
from collections.abc import Awaitable, Callable
from functools import partial
from typing import Any

from waypost._internal.asgi import Receive, Scope, Send
from waypost._internal.invoke import invoke
from waypost.context import RouteContext, route_context
from waypost.http.request import Request
from waypost.http.response import Response, redirect
from waypost.middleware.pipeline import MiddlewareOutcome, run_middleware
from waypost.middleware.protocol import MiddlewareContext
from waypost.routing.registry import Routes
from waypost.routing.route import Route, RouteMatch
from waypost.server.application import Application, to_response
from waypost.server.locale import detect_locale
from waypost.server.sender import send_response

logger = logging.getLogger("waypost.server")

type CustomHandler = Callable[[RouteContext], Response | str | Awaitable[Response | str]]


class Dispatcher:
    """Resolves one request at a time against a read-only registry.

    Holds no per-request state; the registry must not change while
    requests are being dispatched.
    """

    __slots__ = ("_fallback", "app", "custom_handler", "routes")

    def __init__(
        self,
        routes: Routes,
        app: Application,
        custom_handler: CustomHandler | None = None,
    ) -> None:
        self.routes = routes
        self.app = app
        self.custom_handler = custom_handler
        self._fallback = app.get_request_handler()

    async def dispatch(self, request: Request) -> Response:
        """Produce the response for *request*.

        Middleware errors become error pages. Exceptions raised by the
        renderers themselves propagate to the caller.
        """
        match = self.routes.match(request.url)
        route = match.route
        if route is not None:
            return await self._dispatch_route(request, match, route)

        if match.pathname == "/" and self.routes.force_locale:
            locale = detect_locale(request, self.routes)
            if locale is not None:
                location = f"/{locale}"
                logger.debug("Redirecting / to %s", location)
                return redirect(location, self.routes.config.redirect_status)

        result = await invoke(self._fallback, request, match.parsed_url)
        return to_response(result, "default request handler")

    async def _dispatch_route(self, request: Request, match: RouteMatch, route: Route) -> Response:
        ctx = RouteContext(
            request=request,
            route=route,
            query=match.query,
            params=match.params,
            locale=route.locale,
            site_url=self.routes.site_url,
            data=dict(route.data),
            _multilanguage=partial(self.routes.get_multilanguage_urls, route, match.query),
        )
        token = route_context.set(ctx)
        try:
            outcome = await run_middleware(
                route.middlewares or (),
                MiddlewareContext(request=request, route=route, query=match.query),
            )
            if outcome.error is not None:
                return await self._render_error(outcome.error, outcome, request, match, route)

            ctx.data.update(outcome.data)
            if self.custom_handler is not None:
                result = await invoke(self.custom_handler, ctx)
                return to_response(result, "custom handler")
            result = await invoke(self.app.render, request, route.page, match.query)
            return to_response(result, "render")
        finally:
            route_context.reset(token)

    async def _render_error(
        self,
        error: BaseException,
        outcome: MiddlewareOutcome,
        request: Request,
        match: RouteMatch,
        route: Route,
    ) -> Response:
        status = outcome.status

        if status >= 500:
            logger.error(
                "%d %s %s: middleware %d of route %r failed",
                status,
                request.method,
                request.path,
                outcome.failed_index,
                route.name,
                exc_info=error,
            )
        else:
            logger.warning(
                "%d %s %s: middleware %d of route %r: %s",
                status,
                request.method,
                request.path,
                outcome.failed_index,
                route.name,
                error,
            )

        result = await invoke(self.app.render_error, error, request, match.pathname, match.query)
        response = to_response(result, "render_error").with_status(status)
        headers: Any = getattr(error, "headers", ())
        if isinstance(headers, tuple):
            for header_name, value in headers:
                response = response.with_header(header_name, value)
        return response


class RequestHandler:
    """ASGI entry point wrapping a ``Dispatcher``.

    Install it as the host server's application::

        handler = get_request_handler(routes, app)
        # uvicorn mymodule:handler / pounce mymodule:handler
    """

    __slots__ = ("dispatcher",)

    def __init__(self, dispatcher: Dispatcher) -> None:
        self.dispatcher = dispatcher

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return

        request = Request.from_asgi(scope)
        try:
            response = await self.dispatcher.dispatch(request)
        except Exception:
            logger.exception("500 %s %s", request.method, request.path)
            response = Response(
                body="Internal Server Error",
                status=500,
                content_type="text/plain; charset=utf-8",
            )
        await send_response(response, send)


def get_request_handler(
    routes: Routes,
    app: Application,
    custom_handler: CustomHandler | None = None,
) -> RequestHandler:
    """Freeze *routes* and return the ASGI request callback.

    *custom_handler*, when given, replaces ``app.render`` for matched
    routes and receives the ``RouteContext``.
    """
    routes.freeze()
    return RequestHandler(Dispatcher(routes, app, custom_handler))
