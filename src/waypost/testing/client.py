"""Async test client for waypost request handlers.

Drives the ASGI callable in-process and returns the same ``Response``
type renderers produce, so assertions read like production code.
"""

from typing import Any
from urllib.parse import unquote

from waypost._internal.asgi import ASGIApp
from waypost.http.headers import Headers
from waypost.http.response import Response

_DEFAULT_CONTENT_TYPE = "text/html; charset=utf-8"


class TestClient:
    """Async test client for an ASGI request handler.

    Usage::

        handler = get_request_handler(routes, app)
        async with TestClient(handler) as client:
            response = await client.get("/", accept_language="fr")
            assert response.header("location") == "/fr"
    """

    __test__ = False
    __slots__ = ("app", "server")

    def __init__(self, app: ASGIApp, *, server: tuple[str, int] = ("testserver", 80)) -> None:
        self.app = app
        self.server = server

    async def __aenter__(self) -> "TestClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        return None

    async def get(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        cookies: dict[str, str] | None = None,
        accept_language: str | None = None,
    ) -> Response:
        """Send a GET request.

        *cookies* and *accept_language* are shorthands for the headers
        locale detection reads.
        """
        merged = dict(headers or {})
        if cookies:
            merged["cookie"] = "; ".join(f"{name}={value}" for name, value in cookies.items())
        if accept_language is not None:
            merged["accept-language"] = accept_language
        return await self.request("GET", path, headers=merged)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes = b"",
    ) -> Response:
        """Send an arbitrary request through the ASGI app."""
        path_part, _, query_string = path.partition("?")
        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "path": unquote(path_part),
            "raw_path": path_part.encode("latin-1"),
            "query_string": query_string.encode("latin-1"),
            "root_path": "",
            "headers": list(Headers.from_dict(headers or {}).raw),
            "server": self.server,
            "client": ("127.0.0.1", 0),
        }

        pending = [{"type": "http.request", "body": body, "more_body": False}]
        messages: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return pending.pop() if pending else {"type": "http.disconnect"}

        async def send(message: dict[str, Any]) -> None:
            messages.append(message)

        await self.app(scope, receive, send)
        return _collect(messages)


def _collect(messages: list[dict[str, Any]]) -> Response:
    start = next(m for m in messages if m["type"] == "http.response.start")
    received = Headers(tuple(start.get("headers", ())))
    body = b"".join(m.get("body", b"") for m in messages if m["type"] == "http.response.body")

    # content-length is recomputed by the sender
    extra = tuple(
        (name.decode("latin-1"), value.decode("latin-1"))
        for name, value in received.raw
        if name not in (b"content-type", b"content-length")
    )
    return Response(
        body=body,
        status=start["status"],
        content_type=received.get("content-type", _DEFAULT_CONTENT_TYPE),
        headers=extra,
    )
