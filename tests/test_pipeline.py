"""Tests for waypost.middleware.pipeline — sequential middleware execution."""

import asyncio

from waypost.errors import MiddlewareFailure
from waypost.http.request import Request
from waypost.middleware.pipeline import MiddlewareOutcome, run_middleware
from waypost.middleware.protocol import MiddlewareContext
from waypost.routing.route import Route


def _context() -> MiddlewareContext:
    route = Route(name="post", locale="en", pattern="/posts/:id", page="post")
    return MiddlewareContext(request=Request("GET", "/posts/1"), route=route, query={"id": "1"})


class TestRunMiddleware:
    async def test_empty_list_completes_with_empty_payload(self) -> None:
        outcome = await run_middleware([], _context())
        assert outcome.ok
        assert outcome.data == {}

    async def test_payloads_merge_last_write_wins(self) -> None:
        def h1(ctx):
            return {"title": "first", "a": 1}

        def h2(ctx):
            return None

        def h3(ctx):
            return {"title": "third"}

        outcome = await run_middleware([h1, h2, h3], _context())
        assert outcome.data == {"title": "third", "a": 1}

    async def test_error_stops_chain(self) -> None:
        calls: list[str] = []
        boom = MiddlewareFailure(status=403, detail="nope")

        def h1(ctx):
            calls.append("h1")

        def h2(ctx):
            calls.append("h2")
            raise boom

        def h3(ctx):
            calls.append("h3")

        outcome = await run_middleware([h1, h2, h3], _context())
        assert calls == ["h1", "h2"]
        assert outcome.error is boom
        assert outcome.failed_index == 1
        assert outcome.status == 403
        assert outcome.data == {}

    async def test_plain_exception_defaults_to_500(self) -> None:
        def h1(ctx):
            raise RuntimeError("db down")

        outcome = await run_middleware([h1], _context())
        assert isinstance(outcome.error, RuntimeError)
        assert outcome.status == 500

    async def test_async_middleware_runs_sequentially(self) -> None:
        events: list[str] = []

        async def slow(ctx):
            events.append("slow:start")
            await asyncio.sleep(0.01)
            events.append("slow:end")
            return {"slow": True}

        async def fast(ctx):
            events.append("fast")
            return {"fast": True}

        outcome = await run_middleware([slow, fast], _context())
        assert events == ["slow:start", "slow:end", "fast"]
        assert outcome.data == {"slow": True, "fast": True}

    async def test_middleware_sees_context(self) -> None:
        seen: list[MiddlewareContext] = []

        def capture(ctx):
            seen.append(ctx)
            return {"id": ctx.query["id"], "route": ctx.route.name}

        ctx = _context()
        outcome = await run_middleware([capture], ctx)
        assert seen == [ctx]
        assert outcome.data == {"id": "1", "route": "post"}

    async def test_non_mapping_result_is_an_error(self) -> None:
        def bad(ctx):
            return ["not", "a", "mapping"]

        outcome = await run_middleware([bad], _context())
        assert isinstance(outcome.error, TypeError)
        assert outcome.failed_index == 0


class TestMiddlewareOutcome:
    def test_ok_status_default(self) -> None:
        assert MiddlewareOutcome().ok
        assert MiddlewareOutcome(error=ValueError()).status == 500

    def test_bool_status_ignored(self) -> None:
        class Weird(Exception):
            status = True

        assert MiddlewareOutcome(error=Weird()).status == 500
