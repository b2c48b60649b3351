"""Raw ASGI type aliases used by the request handler and sender."""

from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any, TypeAlias

Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]

# The universal callback a host ASGI server installs
ASGIApp: TypeAlias = Callable[[Scope, Receive, Send], Awaitable[None]]
