"""Tests for petrel.http.request — the immutable RequestContext."""

import pytest

from petrel.env import EnvBindings
from petrel.errors import BadRequest
from petrel.http.request import RequestContext


class TestBuild:
    def test_defaults(self) -> None:
        request = RequestContext.build("get", "/")
        assert request.method == "GET"
        assert request.path == "/"
        assert request.body == b""
        assert request.path_params == {}

    def test_query_in_path(self) -> None:
        request = RequestContext.build("GET", "/search?q=petrel&page=2")
        assert request.path == "/search"
        assert request.query_value("q") == "petrel"
        assert request.query_value("page") == "2"

    def test_query_mapping(self) -> None:
        request = RequestContext.build("GET", "/", query={"tag": ["a", "b"], "q": "x"})
        assert request.query["tag"] == ["a", "b"]
        assert request.query_value("q") == "x"
        assert request.query_value("missing", "d") == "d"

    def test_str_body_encoded(self) -> None:
        request = RequestContext.build("POST", "/", body="héllo")
        assert request.body == "héllo".encode()

    def test_headers(self) -> None:
        request = RequestContext.build(
            "GET", "/", headers={"Content-Type": "application/json", "Origin": "https://a.test"}
        )
        assert request.content_type == "application/json"
        assert request.origin == "https://a.test"

    def test_env(self) -> None:
        env = EnvBindings({"TOKEN": "t"})
        assert RequestContext.build("GET", "/", env=env).env["TOKEN"] == "t"


class TestBody:
    def test_json(self) -> None:
        request = RequestContext.build("POST", "/", body=b'{"title": "Hi"}')
        assert request.json() == {"title": "Hi"}

    def test_json_empty_body(self) -> None:
        with pytest.raises(BadRequest, match="Expected a JSON body"):
            RequestContext.build("POST", "/").json()

    def test_json_malformed(self) -> None:
        with pytest.raises(BadRequest, match="Invalid JSON body") as exc_info:
            RequestContext.build("POST", "/", body=b"{nope").json()
        assert exc_info.value.status == 400

    def test_text_invalid_utf8(self) -> None:
        with pytest.raises(BadRequest):
            RequestContext.build("POST", "/", body=b"\xff\xfe").text()


class TestParams:
    def test_with_params_copies(self) -> None:
        request = RequestContext.build("GET", "/api/posts/1")
        bound = request.with_params({"id": "1"})
        assert bound.param("id") == "1"
        assert request.path_params == {}

    def test_missing_param(self) -> None:
        with pytest.raises(KeyError):
            RequestContext.build("GET", "/").param("id")

    def test_frozen(self) -> None:
        request = RequestContext.build("GET", "/")
        with pytest.raises(AttributeError):
            request.method = "POST"  # type: ignore[misc]


class TestFromASGI:
    def test_scope(self) -> None:
        scope = {
            "type": "http",
            "method": "post",
            "path": "/api/posts",
            "query_string": b"draft=1",
            "headers": [(b"content-type", b"application/json")],
        }
        request = RequestContext.from_asgi(scope, b"{}")
        assert request.method == "POST"
        assert request.path == "/api/posts"
        assert request.query_value("draft") == "1"
        assert request.content_type == "application/json"
        assert request.json() == {}
