"""Locale detection for the root redirect.

Detection order:
1. The locale cookie (``RoutesConfig.locale_cookie``), when it names a
   registered locale.
2. ``Accept-Language``, quality-weighted, among registered locales.
3. The registry's default locale (or the first registered one).

Pure header parsing; nothing here touches the route list beyond
reading which locales exist.
"""

from collections.abc import Sequence

from waypost.http.request import Request
from waypost.routing.registry import Routes


def _quality(params: str) -> float | None:
    """The ``q`` weight among ``;``-separated *params*; ``None`` if malformed."""
    for param in params.split(";"):
        name, _, value = param.strip().partition("=")
        if name.strip().lower() != "q":
            continue
        try:
            return float(value.strip())
        except ValueError:
            return None
    return 1.0


def parse_accept_language(header: str, supported: Sequence[str]) -> str | None:
    """Return the best entry of *supported* for an ``Accept-Language`` value.

    Tags are compared case-insensitively; ``fr-CA`` falls back to ``fr``
    when only the primary subtag is supported. ``q=0`` excludes a tag.
    ``*`` matches the first supported locale.
    """
    if not header or not supported:
        return None

    by_lower = {locale.lower(): locale for locale in supported}
    weighted: list[tuple[float, int, str]] = []
    for position, item in enumerate(header.split(",")):
        tag, _, params = item.strip().partition(";")
        tag = tag.strip().lower()
        if not tag:
            continue
        quality = _quality(params)
        if quality is None or quality <= 0:
            continue
        weighted.append((quality, position, tag))

    # Highest quality first; header order breaks ties
    weighted.sort(key=lambda entry: (-entry[0], entry[1]))
    for _, _, tag in weighted:
        if tag == "*":
            return supported[0]
        if tag in by_lower:
            return by_lower[tag]
        primary = tag.split("-", 1)[0]
        if primary in by_lower:
            return by_lower[primary]
    return None


def detect_locale(request: Request, routes: Routes) -> str | None:
    """Pick the locale to send a visitor of ``/`` to."""
    supported = routes.locales

    cookie = request.cookies.get(routes.config.locale_cookie)
    if cookie and cookie in supported:
        return cookie

    preferred = parse_accept_language(request.headers.get("accept-language", ""), supported)
    if preferred is not None:
        return preferred

    if routes.locale is not None:
        return routes.locale
    return supported[0] if supported else None
