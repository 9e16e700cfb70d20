"""Tests for routehint.hint.diff — one DiffRecord per (route, request)."""

from routehint.hint.diff import ChangedMethod, DiffRecord, RequestShape, SameMethod, build
from routehint.hint.media import NeitherExpects, RequestHasButRouteDoesNotExpect, RouteExpectsButRequestLacks
from routehint.hint.segments import Missing, MultiMatch, SingleMatch, StaticMatch, Unexpected
from routehint.http.media import MediaType
from routehint.http.query import QueryItem
from routehint.routing.router import parse_route


def _handler() -> str:
    return "ok"


class TestRequestShapeFromUrl:
    def test_path_and_query(self) -> None:
        shape = RequestShape.from_url("get", "/hello/world?flag=2&x")
        assert shape.method == "GET"
        assert shape.segments == ("hello", "world")
        assert shape.query_items == (
            QueryItem("flag", "2", "flag=2"),
            QueryItem("x", "", "x"),
        )
        assert shape.target == "/hello/world?flag=2&x"

    def test_no_query_is_none(self) -> None:
        assert RequestShape.from_url("GET", "/a").query_items is None

    def test_bare_question_mark_is_none(self) -> None:
        assert RequestShape.from_url("GET", "/a?").query_items is None

    def test_get_uses_accept(self) -> None:
        shape = RequestShape.from_url(
            "GET", "/", accept="text/html;q=0.5, application/json", content_type="text/plain"
        )
        assert shape.media_type == MediaType("application", "json")

    def test_post_uses_content_type(self) -> None:
        shape = RequestShape.from_url(
            "POST", "/", accept="text/html", content_type="application/json; charset=utf-8"
        )
        assert shape.media_type is not None
        assert str(shape.media_type) == "application/json"

    def test_no_headers_no_media_type(self) -> None:
        assert RequestShape.from_url("GET", "/").media_type is None

    def test_empty_url_targets_root(self) -> None:
        shape = RequestShape.from_url("GET", "")
        assert shape.segments == ()
        assert shape.target == "/"


class TestBuild:
    def test_full_match_has_no_missing_or_unexpected(self) -> None:
        route = parse_route("/hello/{name}/mood/{mood}", _handler, "GET")
        record = build(route, RequestShape.from_url("GET", "/hello/world/mood/happy"))
        assert record.method_diff == SameMethod("GET")
        assert record.path_diff == (
            StaticMatch("hello"),
            SingleMatch("name", "world"),
            StaticMatch("mood"),
            SingleMatch("mood", "happy"),
        )
        assert record.query_diff == ()
        assert record.media_diff == NeitherExpects()

    def test_changed_method(self) -> None:
        route = parse_route("/", _handler, "GET")
        record = build(route, RequestShape.from_url("POST", "/"))
        assert record.method_diff == ChangedMethod("GET", "POST")

    def test_trailing_multi(self) -> None:
        route = parse_route("/guide/{_topic...}", _handler, "GET")
        record = build(route, RequestShape.from_url("GET", "/guide/a/b/c"))
        assert record.path_diff[-1] == MultiMatch("_topic", ("a", "b", "c"))
        assert not any(isinstance(d, Unexpected) for d in record.path_diff)

    def test_query_missing_literal(self) -> None:
        route = parse_route("/hello?flag=23&lalelu=1", _handler, "GET")
        record = build(route, RequestShape.from_url("GET", "/hello?flag=23"))
        assert record.query_diff == (StaticMatch("flag=23"), Missing("lalelu=1"))

    def test_route_format_request_silent(self) -> None:
        route = parse_route("/something.txt", _handler, "GET", format="text/plain")
        record = build(route, RequestShape.from_url("GET", "/something.txt"))
        assert isinstance(record.media_diff, RouteExpectsButRequestLacks)

    def test_request_format_route_silent(self) -> None:
        route = parse_route("/", _handler, "POST")
        record = build(route, RequestShape.from_url("POST", "/", content_type="application/json"))
        assert isinstance(record.media_diff, RequestHasButRouteDoesNotExpect)

    def test_unexpected_query_without_template(self) -> None:
        route = parse_route("/", _handler, "GET")
        record = build(route, RequestShape.from_url("GET", "/?a=1"))
        assert record.query_diff == (Unexpected("a=1"),)

    def test_bare_question_mark_template_reports_items(self) -> None:
        route = parse_route("/x?", _handler, "GET")
        record = build(route, RequestShape.from_url("GET", "/x?a=1"))
        assert record.query_diff == (Unexpected("a=1"),)

    def test_deterministic(self) -> None:
        route = parse_route("/{path...}?{when}&{query...}", _handler, "GET", format="json")
        shape = RequestShape.from_url("POST", "/x/y?a=1&when=now", content_type="text/html")
        first = build(route, shape)
        assert isinstance(first, DiffRecord)
        assert build(route, shape) == first
