"""Immutable HTTP request.

Frozen metadata built once from the ASGI scope. The dispatcher never
mutates it; per-request routing state lives on ``RouteContext`` instead.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from waypost._internal.asgi import Scope
from waypost.http.headers import Headers
from waypost.http.query import parse_query


def parse_cookies(header: str) -> dict[str, str]:
    """Parse a ``Cookie`` header value into a name-value dict."""
    cookies: dict[str, str] = {}
    for pair in header.split(";"):
        key, sep, value = pair.strip().partition("=")
        if sep:
            cookies[key.strip()] = value.strip()
    return cookies


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``path`` is percent-decoded, as ASGI servers deliver it. ``raw_path``
    keeps the bytes from the request line (latin-1 decoded) and is what
    ``url`` is built from, so the route registry decodes parameters
    exactly once.
    """

    method: str
    path: str
    query_string: str = ""
    headers: Headers = field(default_factory=Headers)
    cookies: Mapping[str, str] = field(default_factory=dict)
    http_version: str = "1.1"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None
    raw_path: str | None = None

    @property
    def url(self) -> str:
        """Undecoded path plus query string, e.g. ``/search/what%3F?page=2``."""
        path = self.raw_path if self.raw_path is not None else self.path
        if self.query_string:
            return f"{path}?{self.query_string}"
        return path

    @property
    def query(self) -> dict[str, str]:
        """Query string parameters (first value per key)."""
        return parse_query(self.query_string)

    @classmethod
    def from_asgi(cls, scope: Scope) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        headers = Headers(tuple(scope.get("headers", ())))
        server = scope.get("server")
        client = scope.get("client")
        raw_path = scope.get("raw_path")
        return cls(
            method=scope["method"],
            path=scope["path"],
            query_string=scope.get("query_string", b"").decode("latin-1"),
            headers=headers,
            cookies=parse_cookies(headers.get("cookie", "")),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            # some servers leave the query string on raw_path
            raw_path=raw_path.decode("latin-1").partition("?")[0] if raw_path else None,
        )
