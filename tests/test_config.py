"""Tests for waypost.config — RoutesConfig and TemplateConfig frozen dataclasses."""

import pytest

from waypost.config import RoutesConfig, TemplateConfig
from waypost.routing.registry import Routes


class TestRoutesConfig:
    def test_defaults(self) -> None:
        cfg = RoutesConfig()
        assert cfg.locale is None
        assert cfg.force_locale is False
        assert cfg.site_url is None
        assert cfg.redirect_status == 301
        assert cfg.locale_cookie == "locale"

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            RoutesConfig().locale = "en"  # type: ignore[misc]

    def test_registry_reads_config(self) -> None:
        routes = Routes(RoutesConfig(locale="en", force_locale=True, site_url="https://x.test"))
        assert routes.locale == "en"
        assert routes.force_locale is True
        assert routes.site_url == "https://x.test"

    def test_keyword_overrides_config(self) -> None:
        config = RoutesConfig(locale="en", force_locale=True)
        routes = Routes(config, locale="fr", force_locale=False)
        assert routes.locale == "fr"
        assert routes.force_locale is False

    def test_explicit_none_locale_overrides(self) -> None:
        assert Routes(RoutesConfig(locale="en"), locale=None).locale is None


class TestTemplateConfig:
    def test_defaults(self) -> None:
        cfg = TemplateConfig()
        assert cfg.template_dir == "templates"
        assert cfg.autoescape is True
        assert cfg.template_suffix == ".html"
        assert cfg.error_template == "error.html"
        assert cfg.not_found_template == "404.html"
