"""Tests for petrel.http.response — chainable immutable Response."""

from petrel.http.response import Response, empty_response, json_response, text_response


class TestResponse:
    def test_defaults(self) -> None:
        response = Response("hello")
        assert response.status == 200
        assert response.content_type == "text/plain; charset=utf-8"
        assert response.text == "hello"
        assert response.body_bytes == b"hello"

    def test_with_status_returns_copy(self) -> None:
        original = Response("x")
        changed = original.with_status(201)
        assert changed.status == 201
        assert original.status == 200

    def test_with_header_appends(self) -> None:
        response = Response().with_header("X-A", "1").with_header("X-A", "2")
        assert response.headers == (("X-A", "1"), ("X-A", "2"))
        assert response.header("x-a") == "1"
        assert response.header_map["x-a"] == "2"

    def test_with_headers(self) -> None:
        response = Response().with_headers({"X-A": "1", "X-B": "2"})
        assert response.header("X-B") == "2"

    def test_content_type_header(self) -> None:
        response = Response().with_content_type("text/html")
        assert response.header("Content-Type") == "text/html"

    def test_missing_header_default(self) -> None:
        assert Response().header("X-Nope") is None
        assert Response().header("X-Nope", "d") == "d"

    def test_bytes_body_text(self) -> None:
        assert Response(b"caf\xc3\xa9").text == "café"


class TestHelpers:
    def test_json_response(self) -> None:
        response = json_response({"error": "Post not found"}, status=404)
        assert response.status == 404
        assert response.content_type == "application/json"
        assert response.text == '{"error":"Post not found"}'
        assert response.json() == {"error": "Post not found"}

    def test_json_response_headers(self) -> None:
        response = json_response([], headers={"Cache-Control": "no-store"})
        assert response.header("cache-control") == "no-store"

    def test_text_response(self) -> None:
        response = text_response("hi", status=202)
        assert (response.status, response.text) == (202, "hi")

    def test_empty_response(self) -> None:
        response = empty_response()
        assert response.status == 204
        assert response.body_bytes == b""
