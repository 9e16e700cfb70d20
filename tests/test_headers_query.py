"""Tests for routehint.http.headers and routehint.http.query."""

from routehint.http.headers import Headers
from routehint.http.query import QueryItem, QueryParams, split_query


class TestHeaders:
    def test_case_insensitive(self) -> None:
        headers = Headers(((b"Content-Type", b"text/html"),))
        assert headers["content-type"] == "text/html"
        assert "CONTENT-TYPE" in headers

    def test_get_list_keeps_order(self) -> None:
        headers = Headers(((b"accept", b"a/b"), (b"x", b"1"), (b"Accept", b"c/d")))
        assert headers.get_list("accept") == ["a/b", "c/d"]
        assert headers["accept"] == "a/b"
        assert len(headers) == 2

    def test_missing(self) -> None:
        assert Headers().get("accept") is None


class TestSplitQuery:
    def test_items_keep_raw_text(self) -> None:
        assert split_query("a=1&b=x%20y&flag") == (
            QueryItem("a", "1", "a=1"),
            QueryItem("b", "x y", "b=x%20y"),
            QueryItem("flag", "", "flag"),
        )

    def test_empty_items_skipped(self) -> None:
        assert split_query("&a=1&&") == (QueryItem("a", "1", "a=1"),)


class TestQueryParams:
    def test_first_value_wins(self) -> None:
        params = QueryParams(b"a=1&a=2&b=")
        assert params["a"] == "1"
        assert params.get_list("a") == ["1", "2"]
        assert params.get("b") == ""
        assert params.get("c", "x") == "x"

    def test_raw_items(self) -> None:
        assert QueryParams(b"a=1").raw_items() == (QueryItem("a", "1", "a=1"),)
        assert QueryParams().raw_items() is None
