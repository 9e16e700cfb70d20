"""Tests for routehint.http.request — frozen Request with async body access."""

import pytest

from routehint.http.media import MediaType
from routehint.http.request import Request, split_path


def _make_scope(**overrides: object) -> dict[str, object]:
    """Build a minimal valid ASGI HTTP scope."""
    base: dict[str, object] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "root_path": "",
        "headers": [],
        "server": ("localhost", 8000),
        "client": ("127.0.0.1", 54321),
    }
    base.update(overrides)
    return base


def _make_receive(*bodies: bytes):
    """Create an ASGI receive callable that yields bodies."""
    messages = []
    for i, body in enumerate(bodies):
        is_last = i == len(bodies) - 1
        messages.append({"type": "http.request", "body": body, "more_body": not is_last})
    if not messages:
        messages.append({"type": "http.request", "body": b"", "more_body": False})
    it = iter(messages)

    async def receive():
        return next(it)

    return receive


class TestSplitPath:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/", []),
            ("", []),
            ("/a/b", ["a", "b"]),
            ("/a//b/", ["a", "b"]),
        ],
    )
    def test_non_empty_segments(self, path: str, expected: list[str]) -> None:
        assert split_path(path) == expected


class TestFromAsgi:
    def test_basic_fields(self) -> None:
        request = Request.from_asgi(
            _make_scope(method="POST", path="/hello/world", query_string=b"a=1&b"),
            _make_receive(),
        )
        assert request.method == "POST"
        assert request.segments == ["hello", "world"]
        assert request.query.get("a") == "1"
        assert request.url == "/hello/world?a=1&b"
        assert request.server == ("localhost", 8000)

    def test_frozen(self) -> None:
        request = Request.from_asgi(_make_scope(), _make_receive())
        with pytest.raises(AttributeError):
            request.method = "POST"  # type: ignore[misc]

    def test_raw_query_items(self) -> None:
        request = Request.from_asgi(_make_scope(query_string=b"q=a+b&x"), _make_receive())
        items = request.query.raw_items()
        assert items is not None
        assert [item.raw for item in items] == ["q=a+b", "x"]
        assert items[0].value == "a b"

    def test_no_query_string(self) -> None:
        request = Request.from_asgi(_make_scope(), _make_receive())
        assert request.query.raw_items() is None
        assert request.url == "/"


class TestFormat:
    def test_get_prefers_accept(self) -> None:
        request = Request.from_asgi(
            _make_scope(headers=[(b"accept", b"text/html;q=0.9, text/plain")]),
            _make_receive(),
        )
        assert request.format == MediaType("text", "plain")

    def test_post_uses_content_type(self) -> None:
        request = Request.from_asgi(
            _make_scope(
                method="POST",
                headers=[(b"content-type", b"application/json"), (b"accept", b"text/html")],
            ),
            _make_receive(),
        )
        assert request.format == MediaType("application", "json")

    def test_absent(self) -> None:
        assert Request.from_asgi(_make_scope(), _make_receive()).format is None


class TestBody:
    async def test_body_is_cached(self) -> None:
        request = Request.from_asgi(_make_scope(method="POST"), _make_receive(b"ab", b"cd"))
        assert await request.body() == b"abcd"
        assert await request.body() == b"abcd"

    async def test_text(self) -> None:
        request = Request.from_asgi(_make_scope(method="POST"), _make_receive(b"user_input=5"))
        assert await request.text() == "user_input=5"

    async def test_json(self) -> None:
        request = Request.from_asgi(_make_scope(method="POST"), _make_receive(b'{"a": 1}'))
        assert await request.json() == {"a": 1}

    async def test_path_params_share_body_cache(self) -> None:
        request = Request.from_asgi(_make_scope(method="POST"), _make_receive(b"x"))
        await request.body()
        routed = request.with_path_params({"id": "1"})
        assert routed.path_params == {"id": "1"}
        assert await routed.body() == b"x"
