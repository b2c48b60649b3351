"""Routing and template configuration.

Both configs are frozen dataclasses — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class RoutesConfig:
    """Registry configuration. Immutable after creation.

    Override what you need::

        config = RoutesConfig(locale="en", force_locale=True, site_url="https://example.com")
    """

    # Default locale for add() and reverse lookups when none is given
    locale: str | None = None

    # Redirect "/" to the visitor's locale home when nothing matches it
    force_locale: bool = False

    # Absolute origin used for alternate-language links
    site_url: str | None = None

    # Status used for the root-locale redirect
    redirect_status: int = 301

    # Cookie consulted before Accept-Language during locale detection
    locale_cookie: str = "locale"


@dataclass(frozen=True, slots=True)
class TemplateConfig:
    """Settings for the kida-backed default application."""

    template_dir: str | Path = "templates"
    autoescape: bool = True
    trim_blocks: bool = True
    lstrip_blocks: bool = True

    # Page names map to "<page><template_suffix>"
    template_suffix: str = ".html"
    error_template: str = "error.html"
    not_found_template: str = "404.html"
