"""Tests for the routehint example."""

import pytest

from routehint.testing import TestClient


class TestRouteHintApp:
    """Every route answers, and every miss is explained."""

    async def test_index(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/")
            assert response.text == "Welcome Visitor!"

    async def test_hello_mood(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/hello/world/mood/happy")
            assert response.text == "Hello happy world!"

    async def test_hello_flag(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/hello?lalelu=1&flag=23")
            assert response.text == "Hello Flag!"

    async def test_something_txt(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/something.txt")
            assert response.content_type.startswith("text/plain")

    async def test_guide(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/guide/python/asyncio")
            assert response.text == "Welcome to the Guide!"

    async def test_form(self, example_app) -> None:
        async with TestClient(example_app) as client:
            page = await client.get("/form")
            ok = await client.post("/form", body=b"user_input=42")
            bad = await client.post("/form", body=b"user_input=forty-two")
        assert "<form" in page.text
        assert ok.text == "UserInput { user_input: 42 }"
        assert bad.status == 422

    async def test_catch_all(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/some/where?a=1&when=now")
            assert response.text == "path: 'some/where' query: ['a=1'] when: 'now'"


class TestRouteHintMisses:
    async def test_missing_mood(
        self, example_app, capsys: pytest.CaptureFixture[str]
    ) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/hello/world/mood")
        assert response.status == 404
        assert "<ins>{mood}</ins>" in response.text
        err = capsys.readouterr().err
        assert "GET: /hello/{name}/mood/{mood}\nGET: /hello/world/mood\n" in err

    async def test_wrong_flag(self, example_app, capsys: pytest.CaptureFixture[str]) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/hello?flag=2&lalelu=1")
        assert response.status == 404
        assert "GET: /hello?flag=2&lalelu=1\n" in capsys.readouterr().err

    async def test_catch_all_needs_when(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/some/where")
        assert response.status == 404
        assert "<ins>{when}</ins>" in response.text

    async def test_text_route_rejects_html(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/something.txt", headers={"accept": "text/html"})
        assert response.status == 404
        assert "   text/" in response.text
