"""Tests for waypost.errors — exception hierarchy and error messages."""

import pytest

from waypost.errors import (
    ConfigurationError,
    HTTPError,
    InvalidMiddlewareFunction,
    InvalidMiddlewareList,
    MiddlewareAlreadyAttached,
    MiddlewareFailure,
    NoRouteToAttachMiddleware,
    PatternError,
    RouteAlreadyExists,
    RouteNotFound,
    WaypostError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "cls",
        [
            RouteAlreadyExists,
            InvalidMiddlewareList,
            InvalidMiddlewareFunction,
            NoRouteToAttachMiddleware,
            MiddlewareAlreadyAttached,
        ],
    )
    def test_setup_errors_are_configuration_errors(self, cls: type) -> None:
        assert issubclass(cls, ConfigurationError)
        assert issubclass(cls, WaypostError)

    def test_route_not_found_is_lookup_error(self) -> None:
        assert issubclass(RouteNotFound, LookupError)

    def test_pattern_error_is_value_error(self) -> None:
        assert issubclass(PatternError, ValueError)

    def test_http_errors(self) -> None:
        assert issubclass(MiddlewareFailure, HTTPError)
        assert issubclass(HTTPError, WaypostError)


class TestMessages:
    def test_route_already_exists(self) -> None:
        err = RouteAlreadyExists("about", "en")
        assert (err.name, err.locale) == ("about", "en")
        assert str(err) == "Route 'about' already exists for locale 'en'"

    def test_route_already_exists_without_locale(self) -> None:
        assert str(RouteAlreadyExists("about", None)) == "Route 'about' already exists"

    def test_invalid_function_names_position(self) -> None:
        err = InvalidMiddlewareFunction(2, "nope")
        assert err.index == 2
        assert "position 2" in str(err)

    def test_invalid_list_names_type(self) -> None:
        assert "dict" in str(InvalidMiddlewareList({}))

    def test_pattern_error(self) -> None:
        err = PatternError("/posts/:", "Missing parameter name")
        assert err.pattern == "/posts/:"
        assert str(err) == "Missing parameter name (pattern '/posts/:')"


class TestHTTPError:
    def test_str_with_detail(self) -> None:
        assert str(HTTPError(status=400, detail="Bad request")) == "400: Bad request"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=418)) == "418"

    def test_middleware_failure_defaults(self) -> None:
        err = MiddlewareFailure()
        assert err.status == 500
        assert err.headers == ()

    def test_raisable(self) -> None:
        with pytest.raises(MiddlewareFailure) as exc_info:
            raise MiddlewareFailure(status=401, detail="Login required")
        assert exc_info.value.status == 401
