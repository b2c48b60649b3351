"""Tests for waypost.context — request-scoped route context."""

import asyncio

import pytest

from waypost.context import RouteContext, current_locale, get_route_context, route_context
from waypost.http.request import Request
from waypost.routing.route import LocaleUrl, Route


def _context(locale: str = "fr", loader=None) -> RouteContext:
    route = Route(name="about", locale=locale, pattern="/a-propos", page="about")
    return RouteContext(
        request=Request("GET", "/a-propos"),
        route=route,
        query={},
        params={},
        locale=locale,
        _multilanguage=loader,
    )


class TestRouteContextVar:
    def test_raises_outside_request(self) -> None:
        with pytest.raises(LookupError):
            get_route_context()

    def test_set_and_get(self) -> None:
        ctx = _context()
        token = route_context.set(ctx)
        try:
            assert get_route_context() is ctx
            assert current_locale() == "fr"
        finally:
            route_context.reset(token)

    def test_current_locale_default(self) -> None:
        assert current_locale() is None
        assert current_locale("en") == "en"

    async def test_isolated_between_tasks(self) -> None:
        async def run(locale: str) -> str | None:
            token = route_context.set(_context(locale))
            try:
                await asyncio.sleep(0.01)
                return current_locale()
            finally:
                route_context.reset(token)

        assert await asyncio.gather(run("en"), run("fr")) == ["en", "fr"]


class TestRouteContext:
    def test_page(self) -> None:
        assert _context().page == "about"

    def test_multilanguage_urls_computed_once(self) -> None:
        calls: list[int] = []

        def loader() -> list[LocaleUrl]:
            calls.append(1)
            return [LocaleUrl(url="/about", locale="en", is_default_locale=True)]

        ctx = _context(loader=loader)
        assert ctx.multilanguage_urls == ctx.multilanguage_urls
        assert calls == [1]

    def test_multilanguage_urls_without_loader(self) -> None:
        assert _context().multilanguage_urls == []
