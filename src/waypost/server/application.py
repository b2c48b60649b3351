"""The contract between the dispatcher and the host application.

The dispatcher never renders anything itself. It hands matched pages,
middleware errors and unmatched requests to an ``Application``::

    class MyApp:
        def render(self, request, page, query): ...
        def render_error(self, error, request, pathname, query): ...
        def get_request_handler(self): ...

Any of the three (and the handler returned by ``get_request_handler``)
may be ``def`` or ``async def``. Each returns a ``Response`` or a string,
which becomes an HTML ``Response``.
"""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Protocol, runtime_checkable
from urllib.parse import SplitResult

from waypost.http.request import Request
from waypost.http.response import Response

type RenderResult = Response | str
type MaybeAwaitable[T] = T | Awaitable[T]
type DefaultHandler = Callable[[Request, SplitResult], MaybeAwaitable[RenderResult]]


@runtime_checkable
class Application(Protocol):
    """Rendering collaborator used by the dispatcher."""

    def render(
        self, request: Request, page: str, query: Mapping[str, str]
    ) -> MaybeAwaitable[RenderResult]: ...

    def render_error(
        self,
        error: BaseException,
        request: Request,
        pathname: str,
        query: Mapping[str, str],
    ) -> MaybeAwaitable[RenderResult]: ...

    def get_request_handler(self) -> DefaultHandler: ...


def to_response(result: Any, source: str) -> Response:
    """Normalize a collaborator's return value into a ``Response``."""
    if isinstance(result, Response):
        return result
    if isinstance(result, str):
        return Response(body=result)
    msg = f"{source} returned {type(result).__name__}, expected Response or str"
    raise TypeError(msg)
