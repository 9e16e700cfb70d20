"""Tests for routehint.server.terminal_hints — ANSI hint reports."""

import io

from routehint.hint.diff import RequestShape
from routehint.hint.registry import on_startup, on_unmatched_request
from routehint.routing.router import parse_route
from routehint.server.terminal_hints import format_report, use_color


def _handler() -> str:
    return "ok"


def _report(method: str, url: str):
    routes = [
        parse_route("/hello/{name}/mood/{mood}", _handler, "GET"),
        parse_route("/", _handler, "GET"),
    ]
    return on_unmatched_request(on_startup(routes), RequestShape.from_url(method, url))


class TestFormatReport:
    def test_plain_layout(self) -> None:
        text = format_report(_report("GET", "/hello/world/mood"), color=False)
        lines = text.splitlines()
        assert lines[0].startswith("-- Route hints: GET /hello/world/mood ")
        assert lines[1] == ""
        assert lines[2:8] == [
            "GET: /hello/{name}/mood/{mood}",
            "GET: /hello/world/mood",
            "",
            "GET: /",
            "GET: /hello/world/mood",
            "",
        ]
        assert "\033[" not in text

    def test_without_header(self) -> None:
        text = format_report(_report("GET", "/"), color=False, show_header=False)
        assert text.splitlines()[0] == "GET: /hello/{name}/mood/{mood}"
        assert "Route hints" not in text

    def test_color_marks_additions_and_removals(self) -> None:
        text = format_report(_report("POST", "/hello/world/mood"), color=True)
        assert "\033[38;2;0;128;0m{mood}\033[0m" in text
        assert "\033[38;2;179;0;0mPOST\033[0m" in text
        assert "\033[38;2;0;128;0mGET\033[0m" in text

    def test_no_routes(self) -> None:
        report = on_unmatched_request(on_startup([]), RequestShape.from_url("GET", "/"))
        assert "No routes registered." in format_report(report, color=False)


class TestUseColor:
    def test_stringio_is_not_a_tty(self) -> None:
        assert use_color(io.StringIO()) is False

    def test_stream_without_isatty(self) -> None:
        assert use_color(object()) is False
