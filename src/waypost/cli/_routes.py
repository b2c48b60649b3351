"""``waypost routes`` — list registered routes in match order."""

import argparse
import sys

from waypost.cli._resolve import resolve_routes


def run_routes(args: argparse.Namespace) -> None:
    """Print NAME, LOCALE, PATTERN, PAGE and middleware count per route.

    Default-locale variants are marked with ``*`` after the locale.
    """
    try:
        routes = resolve_routes(args.routes)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows = [
        (
            route.name,
            f"{route.locale or '-'}{'*' if route.is_default_locale else ''}",
            route.pattern,
            route.page,
            str(len(route.middlewares or ())),
        )
        for route in routes
        if args.locale is None or route.locale == args.locale
    ]
    if not rows:
        print("No routes registered.")
        return

    headers = ("NAME", "LOCALE", "PATTERN", "PAGE", "MW")
    widths = [max(len(header), *(len(row[i]) for row in rows)) for i, header in enumerate(headers)]
    fmt = "  ".join(f"{{:<{width}}}" for width in widths)
    print(fmt.format(*headers).rstrip())
    print("-" * min(sum(widths) + 2 * (len(widths) - 1), 80))
    for row in rows:
        print(fmt.format(*row).rstrip())
