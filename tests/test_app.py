"""Tests for routehint.app — registration, freezing, dispatch, and lifespan."""

from typing import Any

import pytest

from routehint import App, AppConfig, ConfigurationError, Request
from routehint.testing import TestClient


class TestRegistration:
    def test_routes_in_registration_order(self) -> None:
        app = App()

        @app.route("/a")
        def a():
            return "a"

        @app.route("/b", methods=["GET", "POST"], name="bee")
        def b():
            return "b"

        routes = app.routes
        assert [(r.method, r.path) for r in routes] == [
            ("GET", "/a"),
            ("GET", "/b"),
            ("POST", "/b"),
        ]
        assert routes[1].name == "bee"

    def test_query_template_and_format(self) -> None:
        app = App()

        @app.route("/hello?flag=23&{rest...}", format="json")
        def hello():
            return "hi"

        (route,) = app.routes
        assert [seg.value for seg in route.query_segments or ()] == ["flag=23", "{rest...}"]
        assert str(route.format) == "application/json"

    def test_frozen_after_routes(self) -> None:
        app = App()
        _ = app.routes
        with pytest.raises(RuntimeError, match="Cannot modify"):
            app.route("/late")(lambda: "late")

    def test_bad_template_fails_at_freeze(self) -> None:
        app = App()

        @app.route("/users/<id>")
        def user():
            return "x"

        with pytest.raises(ConfigurationError, match="<param>"):
            _ = app.routes

    def test_unknown_format(self) -> None:
        app = App()

        @app.route("/x", format="yaml")
        def x():
            return "x"

        with pytest.raises(ConfigurationError):
            _ = app.routes


class TestDispatch:
    async def test_path_param_conversion(self) -> None:
        app = App()

        @app.route("/users/{id:int}")
        def user(id: int):
            return f"{id + 1}"

        async with TestClient(app) as client:
            response = await client.get("/users/41")
        assert response.status == 200
        assert response.text == "42"

    async def test_query_captures(self) -> None:
        app = App()

        @app.route("/search?{q}&{rest...}")
        def search(q: str, rest: list[str]):
            return f"{q}|{','.join(rest)}"

        async with TestClient(app) as client:
            ok = await client.get("/search?a=1&q=x&b=2")
            missing = await client.get("/search?a=1")
        assert ok.text == "x|a=1,b=2"
        assert missing.status == 404

    async def test_static_query_literal(self) -> None:
        app = App()

        @app.route("/hello?flag=23")
        def hello():
            return "flag"

        async with TestClient(app) as client:
            assert (await client.get("/hello?flag=23")).status == 200
            assert (await client.get("/hello?flag=2")).status == 404
            assert (await client.get("/hello")).status == 404

    async def test_format_filters_payload(self) -> None:
        app = App()

        @app.route("/data", methods=["POST"], format="json")
        async def data(request: Request):
            return await request.json()

        async with TestClient(app) as client:
            ok = await client.post("/data", json={"a": 1})
            wrong = await client.post("/data", body=b"a=1", headers={"content-type": "text/plain"})
        assert ok.status == 200
        assert ok.text == '{"a": 1}'
        assert wrong.status == 404

    async def test_format_filters_accept(self) -> None:
        app = App()

        @app.route("/notes.txt", format="text/plain")
        def notes():
            return "notes"

        async with TestClient(app) as client:
            silent = await client.get("/notes.txt")
            html = await client.get("/notes.txt", headers={"accept": "text/html"})
        assert silent.status == 200
        assert html.status == 404

    async def test_body_too_large(self) -> None:
        app = App(AppConfig(max_content_length=4))

        @app.route("/upload", methods=["POST"])
        async def upload(request: Request):
            return await request.body()

        async with TestClient(app) as client:
            small = await client.post("/upload", body=b"1234", headers={"content-length": "4"})
            large = await client.post("/upload", body=b"12345", headers={"content-length": "5"})
        assert small.text == "1234"
        assert large.status == 413

    async def test_method_not_allowed(self) -> None:
        app = App()

        @app.route("/only-get")
        def only_get():
            return "x"

        async with TestClient(app) as client:
            response = await client.post("/only-get")
        assert response.status == 405
        assert response.header("allow") == "GET"

    async def test_error_handler(self) -> None:
        app = App()

        @app.error(404)
        def not_found(request: Request):
            return f"nothing at {request.path}"

        async with TestClient(app) as client:
            response = await client.get("/missing")
        assert response.status == 404
        assert response.text == "nothing at /missing"

    async def test_internal_error(self) -> None:
        app = App()

        @app.route("/boom")
        def boom():
            raise ValueError("boom")

        async with TestClient(app) as client:
            response = await client.get("/boom")
        assert response.status == 500
        assert response.text == "Internal Server Error"

    async def test_internal_error_debug(self) -> None:
        app = App(AppConfig(debug=True))

        @app.route("/boom")
        def boom():
            raise ValueError("boom")

        async with TestClient(app) as client:
            response = await client.get("/boom")
        assert "ValueError: boom" in response.text


class TestMiddleware:
    async def test_order(self) -> None:
        app = App()
        seen: list[str] = []

        def tag(label: str):
            async def mw(request: Request, next: Any):
                seen.append(label)
                return await next(request)

            return mw

        app.add_middleware(tag("outer"))
        app.add_middleware(tag("inner"))

        @app.route("/")
        def index():
            return "ok"

        async with TestClient(app) as client:
            await client.get("/")
        assert seen == ["outer", "inner"]


class TestLifespan:
    async def test_hooks_run(self) -> None:
        app = App()
        events: list[str] = []

        @app.on_startup
        async def start():
            events.append("start")

        @app.on_shutdown
        def stop():
            events.append("stop")

        messages = iter([{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}])
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return next(messages)

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await app({"type": "lifespan"}, receive, send)
        assert events == ["start", "stop"]
        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]

    async def test_startup_failure(self) -> None:
        app = App()

        @app.on_startup
        def start():
            raise RuntimeError("no database")

        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return {"type": "lifespan.startup"}

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await app({"type": "lifespan"}, receive, send)
        assert sent == [{"type": "lifespan.startup.failed", "message": "no database"}]
