"""Invoke helpers — call sync or async collaborators uniformly.

Middleware, renderers and custom handlers can be ``def`` or
``async def``. Anything that calls user-provided code goes through
``invoke`` so the sync/async check lives in exactly one place.
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it's awaitable.

    Works with both sync and async callables::

        def load_user(ctx):
            return {"user": "alice"}

        async def load_posts(ctx):
            return {"posts": await fetch_posts()}
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
