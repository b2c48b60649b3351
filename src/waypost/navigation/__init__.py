"""Reverse-lookup facades — links and navigation by route name."""

from waypost.navigation.link import Link, anchor, is_literal_href
from waypost.navigation.router import HtmxNavigator, Navigator, Router, wrap_navigator

__all__ = [
    "HtmxNavigator",
    "Link",
    "Navigator",
    "Router",
    "anchor",
    "is_literal_href",
    "wrap_navigator",
]
