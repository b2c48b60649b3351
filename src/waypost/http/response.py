"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response. Renderers build one,
the dispatcher adjusts status or headers, the sender writes it out.
"""

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations."""

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    # -- Chainable transformations --

    def with_status(self, status: int) -> "Response":
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> "Response":
        """Return a new Response with additional headers."""
        return replace(self, headers=(*self.headers, *headers.items()))

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return the first value of header *name* (case-insensitive)."""
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return default

    # -- htmx response headers --

    def with_hx_location(self, url: str, **options: str) -> "Response":
        """Tell htmx to navigate via AJAX (like clicking a boosted link).

        With no *options* the header is the plain URL; otherwise it is a
        JSON object ``{"path": url, **options}`` (``target``, ``swap``...).
        """
        if not options:
            return self.with_header("HX-Location", url)
        return self.with_header("HX-Location", json_module.dumps({"path": url, **options}))

    def with_hx_push_url(self, url: str | bool) -> "Response":
        """Push a URL into the browser history stack."""
        value = url if isinstance(url, str) else ("true" if url else "false")
        return self.with_header("HX-Push-Url", value)

    def with_hx_replace_url(self, url: str | bool) -> "Response":
        """Replace the current URL in the browser location bar."""
        value = url if isinstance(url, str) else ("true" if url else "false")
        return self.with_header("HX-Replace-Url", value)

    # -- Body helpers --

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body


def redirect(url: str, status: int = 302, headers: Mapping[str, Any] | None = None) -> Response:
    """Build a redirect Response with a ``Location`` header."""
    response = Response(status=status).with_header("Location", url)
    if headers:
        response = response.with_headers({k: str(v) for k, v in headers.items()})
    return response
