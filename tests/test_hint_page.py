"""Tests for routehint.server.hint_page — HTML hint page via kida."""

from routehint.hint.diff import RequestShape
from routehint.hint.registry import on_startup, on_unmatched_request
from routehint.routing.router import parse_route
from routehint.server.hint_page import render_hint_page


def _handler() -> str:
    return "ok"


class TestRenderHintPage:
    def test_highlights_become_ins_and_del(self) -> None:
        routes = [parse_route("/hello/{name}/mood/{mood}", _handler, "GET")]
        report = on_unmatched_request(
            on_startup(routes), RequestShape.from_url("POST", "/hello/world/mood")
        )
        html = render_hint_page(report, status=405)
        assert html.startswith("<!DOCTYPE html>")
        assert "405" in html
        assert "<ins>{mood}</ins>" in html
        assert "<ins>GET</ins>" in html
        assert "<del>POST</del>" in html

    def test_request_text_is_escaped(self) -> None:
        routes = [parse_route("/", _handler, "GET")]
        report = on_unmatched_request(
            on_startup(routes), RequestShape.from_url("GET", "/<script>")
        )
        html = render_hint_page(report)
        assert "<del>&lt;script&gt;</del>" in html
        assert "<script>" not in html

    def test_empty_report(self) -> None:
        report = on_unmatched_request(on_startup([]), RequestShape.from_url("GET", "/"))
        assert "No routes registered." in render_hint_page(report)
