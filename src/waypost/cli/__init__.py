"""Waypost CLI — inspect a route registry from the shell.

Entry point registered as ``waypost`` in ``pyproject.toml``::

    [project.scripts]
    waypost = "waypost.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``waypost`` command."""
    parser = argparse.ArgumentParser(
        prog="waypost",
        description="waypost — named, localized routes for server-rendered apps.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- waypost routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument("routes", help="Import string (e.g. myapp:routes)")
    routes_parser.add_argument("--locale", default=None, help="Only show this locale")

    # -- waypost url ------------------------------------------------------
    url_parser = subparsers.add_parser("url", help="Reverse a route name into URLs")
    url_parser.add_argument("routes", help="Import string (e.g. myapp:routes)")
    url_parser.add_argument("name", help="Route name")
    url_parser.add_argument(
        "--locale", default=None, help="Route locale (default: registry default)"
    )
    url_parser.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Route parameter; repeat for several",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from waypost.cli._routes import run_routes

        run_routes(args)
    elif args.command == "url":
        from waypost.cli._url import run_url

        run_url(args)
