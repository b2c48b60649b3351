"""Kida environment setup and route helpers for templates.

``register_globals`` binds reverse lookup into templates::

    <a href="{{ route_url('post', id=post.id) }}">{{ post.title }}</a>
    {{ link(route='about', children='About us') }}
    {{ alternate_links() }}

Template helpers default to the locale of the route being rendered,
falling back to the registry default outside a request.
"""

import html
from collections.abc import Callable
from typing import Any

from kida import Environment, FileSystemLoader
from kida.template import Markup

from waypost.config import TemplateConfig
from waypost.context import RouteContext, current_locale, route_context
from waypost.navigation.link import Link
from waypost.routing.registry import Routes


def create_environment(config: TemplateConfig) -> Environment:
    """Create a kida Environment from template configuration."""
    return Environment(
        loader=FileSystemLoader(str(config.template_dir)),
        autoescape=config.autoescape,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
    )


def make_route_url(routes: Routes) -> Callable[..., str]:
    """Build the ``route_url(name, locale=None, /, **params)`` template global.

    *name* and *locale* are positional-only, so every keyword is a route
    param, including ones called ``name`` or ``locale``::

        {{ route_url('tag', 'fr', name=tag.slug) }}
    """

    def route_url(name: str, locale: str | None = None, /, **params: Any) -> str:
        locale = locale or current_locale(routes.locale)
        return routes.find_and_get_urls(name, locale, params).urls.as_path

    return route_url


def make_alternate_links(routes: Routes) -> Callable[..., Markup]:
    """Build the ``alternate_links(ctx=None)`` template global.

    Emits one ``<link rel="alternate" hreflang>`` per locale variant of the
    current route, plus ``x-default`` for the default-locale variant.
    URLs are absolute when the registry has a ``site_url``.
    """

    def alternate_links(ctx: RouteContext | None = None) -> Markup:
        ctx = ctx or route_context.get(None)
        if ctx is None:
            return Markup("")
        origin = (ctx.site_url or routes.site_url or "").rstrip("/")
        tags: list[str] = []
        for variant in ctx.multilanguage_urls:
            if variant.locale is None:
                continue
            href = html.escape(f"{origin}{variant.url}", quote=True)
            hreflang = html.escape(variant.locale, quote=True)
            tags.append(f'<link rel="alternate" hreflang="{hreflang}" href="{href}">')
            if variant.is_default_locale:
                tags.append(f'<link rel="alternate" hreflang="x-default" href="{href}">')
        return Markup("\n".join(tags))

    return alternate_links


def register_globals(env: Environment, routes: Routes) -> Environment:
    """Add ``route_url``, ``link`` and ``alternate_links`` to *env*."""
    link = Link(routes)

    def template_link(route: str | None = None, locale: str | None = None, **props: Any) -> Any:
        if route is not None:
            locale = locale or current_locale(routes.locale)
        return link(route=route, locale=locale, **props)

    env.add_global("route_url", make_route_url(routes))
    env.add_global("link", template_link)
    env.add_global("alternate_links", make_alternate_links(routes))
    return env
