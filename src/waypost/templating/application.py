"""Kida-backed default ``Application``.

Maps a route's page to a template (``post`` → ``post.html``) and renders
it with the query, the route context and the middleware data::

    routes = Routes(locale="en")
    routes.add("post", "en", "/posts/:id", "post")
    app = TemplateApplication(routes, TemplateConfig(template_dir="templates"))
    handler = get_request_handler(routes, app)
"""

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import SplitResult

from kida import Environment
from kida.environment.exceptions import TemplateNotFoundError

from waypost.config import TemplateConfig
from waypost.context import route_context
from waypost.http.request import Request
from waypost.http.response import Response
from waypost.routing.registry import Routes
from waypost.templating.integration import create_environment, register_globals

logger = logging.getLogger("waypost.templating")

_PLAIN = "text/plain; charset=utf-8"


class TemplateApplication:
    """Render pages, error pages and the not-found page from kida templates.

    Missing error or not-found templates fall back to plain-text bodies;
    a missing page template is a real error and propagates.
    """

    def __init__(
        self,
        routes: Routes,
        config: TemplateConfig | None = None,
        env: Environment | None = None,
    ) -> None:
        self.routes = routes
        self.config = config or TemplateConfig()
        self.env = register_globals(env or create_environment(self.config), routes)

    def _render(self, name: str, context: dict[str, Any]) -> str:
        return self.env.get_template(name).render(context)

    def render(self, request: Request, page: str, query: Mapping[str, str]) -> Response:
        ctx = route_context.get(None)
        data = ctx.data if ctx is not None else {}
        context = {
            **data,
            "request": request,
            "query": dict(query),
            "page": page,
            "ctx": ctx,
            "data": data,
            "locale": ctx.locale if ctx is not None else self.routes.locale,
        }
        return Response(body=self._render(f"{page}{self.config.template_suffix}", context))

    def render_error(
        self,
        error: BaseException,
        request: Request,
        pathname: str,
        query: Mapping[str, str],
    ) -> Response:
        status = getattr(error, "status", 500)
        detail = getattr(error, "detail", "") or ("Internal Server Error" if status >= 500 else "")
        context = {
            "request": request,
            "error": error,
            "status": status,
            "detail": detail,
            "pathname": pathname,
            "query": dict(query),
        }
        try:
            body = self._render(self.config.error_template, context)
        except TemplateNotFoundError:
            text = f"{status}: {detail}" if detail else str(status)
            return Response(body=text, content_type=_PLAIN)
        return Response(body=body)

    def get_request_handler(self):
        return self.not_found

    def not_found(self, request: Request, parsed_url: SplitResult) -> Response:
        """Default handler for requests no route matched."""
        logger.debug("404 %s %s", request.method, parsed_url.path)
        context = {"request": request, "pathname": parsed_url.path}
        try:
            body = self._render(self.config.not_found_template, context)
        except TemplateNotFoundError:
            return Response(body="Not Found", status=404, content_type=_PLAIN)
        return Response(body=body, status=404)
