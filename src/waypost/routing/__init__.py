"""Routing — named, localized routes with first-match-wins lookup.

Routes are declared during setup, matched in registration order at
request time, and reversed into URLs by name and locale.
"""

from waypost.routing.pattern import CompiledPattern, PatternKey, compile_pattern
from waypost.routing.registry import RouteHandle, Routes
from waypost.routing.route import (
    LocaleUrl,
    Route,
    RouteConfig,
    RouteDescriptor,
    RouteMatch,
    RouteUrls,
    UrlLookup,
    resolve_route_config,
)

__all__ = [
    "CompiledPattern",
    "LocaleUrl",
    "PatternKey",
    "Route",
    "RouteConfig",
    "RouteDescriptor",
    "RouteHandle",
    "RouteMatch",
    "RouteUrls",
    "Routes",
    "UrlLookup",
    "compile_pattern",
    "resolve_route_config",
]
