"""Link facade — named routes to anchor elements.

``Link`` resolves ``route`` + ``params`` + ``locale`` through the
registry and hands the resulting URLs to an element constructor::

    link = Link(routes)
    link(route="post", params={"id": 42}, children="Read more", class_="more")
    # <a href="/posts/42" class="more">Read more</a>

An ``href`` that is already a URL (``https://…``, ``//host``, ``/path``,
``#anchor``, ``mailto:…``) is passed through without route resolution.
"""

import html
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import urlsplit

from kida.template import Markup

from waypost.routing.registry import Routes

type LinkElement = Callable[..., Any]


def _attr_name(name: str) -> str:
    # class_ -> class, hx_boost -> hx-boost, data_id -> data-id
    return name.rstrip("_").replace("_", "-")


def anchor(
    *, href: str = "", as_path: str | None = None, children: Any = "", **attrs: Any
) -> Markup:
    """Render an ``<a>`` element.

    The display path wins over the canonical ``href`` when both are given.
    ``True`` renders a bare attribute; ``False`` and ``None`` omit it.
    Children that are already markup are inserted unescaped.
    """
    parts = [f'<a href="{html.escape(as_path or href, quote=True)}"']
    for name, value in attrs.items():
        if value is None or value is False:
            continue
        if value is True:
            parts.append(f" {_attr_name(name)}")
        else:
            parts.append(f' {_attr_name(name)}="{html.escape(str(value), quote=True)}"')
    body = str(children) if hasattr(children, "__html__") else html.escape(str(children))
    return Markup("".join(parts) + f">{body}</a>")


def is_literal_href(href: str) -> bool:
    """True for hrefs that are URLs already rather than route names."""
    if href.startswith(("/", "#")):
        return True
    parsed = urlsplit(href)
    return bool(parsed.scheme or parsed.netloc)


class Link:
    """Callable link factory bound to a registry.

    *allowed_props* statically declares which props (besides ``href``)
    the element accepts when a literal ``href`` is passed through;
    ``None`` forwards them all.
    """

    __slots__ = ("allowed_props", "element", "routes")

    def __init__(
        self,
        routes: Routes,
        element: LinkElement = anchor,
        *,
        allowed_props: frozenset[str] | None = None,
    ) -> None:
        self.routes = routes
        self.element = element
        self.allowed_props = allowed_props

    def __call__(
        self,
        route: str | None = None,
        params: Mapping[str, Any] | None = None,
        locale: str | None = None,
        href: str | None = None,
        **props: Any,
    ) -> Any:
        if href and is_literal_href(href):
            if self.allowed_props is not None:
                props = {k: v for k, v in props.items() if k in self.allowed_props}
            return self.element(href=href, **props)

        if not route:
            msg = "Link needs a route name or a literal href ('/…', '#…', or an absolute URL)."
            raise ValueError(msg)

        urls = self.routes.find_and_get_urls(route, locale or self.routes.locale, params).urls
        # resolved urls win over a stray display-path prop
        props.pop("as_path", None)
        return self.element(**props, href=urls.href, as_path=urls.as_path)
