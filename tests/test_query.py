"""Tests for waypost.http.query — flat query dicts."""

from waypost.http.query import build_query, parse_query


class TestParseQuery:
    def test_empty(self) -> None:
        assert parse_query("") == {}

    def test_pairs(self) -> None:
        assert parse_query("q=hello&page=2") == {"q": "hello", "page": "2"}

    def test_first_value_wins(self) -> None:
        assert parse_query("tag=a&tag=b") == {"tag": "a"}

    def test_blank_values_kept(self) -> None:
        assert parse_query("draft=&q=x") == {"draft": "", "q": "x"}

    def test_decoded(self) -> None:
        assert parse_query("q=hello%20world&x=a+b") == {"q": "hello world", "x": "a b"}


class TestBuildQuery:
    def test_skips_none(self) -> None:
        assert build_query({"a": 1, "b": None}) == "a=1"

    def test_lists_repeat(self) -> None:
        assert build_query({"tag": ["a", "b"]}) == "tag=a&tag=b"

    def test_encoded(self) -> None:
        assert build_query({"q": "a b&c"}) == "q=a+b%26c"

    def test_empty(self) -> None:
        assert build_query({}) == ""
