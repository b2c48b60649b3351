"""``waypost url`` — reverse a route name into its canonical and display URLs."""

import argparse
import sys

from waypost.cli._resolve import resolve_routes
from waypost.errors import RouteNotFound


def parse_params(pairs: list[str]) -> dict[str, str]:
    """Turn ``["id=42", "lang=en"]`` into ``{"id": "42", "lang": "en"}``."""
    params: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            msg = f"Invalid --param {pair!r}; expected KEY=VALUE"
            raise ValueError(msg)
        params[key] = value
    return params


def run_url(args: argparse.Namespace) -> None:
    """Print ``href`` and ``as`` for a route, exiting 1 on lookup errors."""
    try:
        routes = resolve_routes(args.routes)
        params = parse_params(args.param)
        lookup = routes.find_and_get_urls(args.name, args.locale, params)
    except (ModuleNotFoundError, AttributeError, TypeError, ValueError, RouteNotFound) as exc:
        # PatternError is a ValueError
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(f"href  {lookup.urls.href}")
    print(f"as    {lookup.urls.as_path}")
