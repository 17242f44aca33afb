"""Tests for per-route CORS and OPTIONS preflight."""

from petrel import CORSConfig, Dispatcher, RequestContext
from petrel.testing import TestClient


def _api(cors: CORSConfig) -> Dispatcher:
    api = Dispatcher(env={})

    @api.route("/api/posts", methods=("GET", "POST"), cors=cors)
    def posts(request: RequestContext) -> dict:
        return {"ok": True}

    api.add_route("/private", lambda request: "secret")
    return api


class TestPreflight:
    async def test_preflight_allowed_origin(self) -> None:
        api = _api(CORSConfig(allow_origins=("https://app.example",), allow_headers=("X-Token",)))
        async with TestClient(api) as client:
            response = await client.options(
                "/api/posts", headers={"Origin": "https://app.example"}
            )
        assert response.status == 204
        assert response.body_bytes == b""
        assert response.header("Access-Control-Allow-Origin") == "https://app.example"
        assert response.header("Vary") == "Origin"
        assert response.header("Access-Control-Allow-Methods") == "GET, OPTIONS, POST"
        assert response.header("Access-Control-Allow-Headers") == "X-Token"
        assert response.header("Access-Control-Max-Age") == "600"

    async def test_preflight_disallowed_origin(self) -> None:
        api = _api(CORSConfig(allow_origins=("https://app.example",)))
        async with TestClient(api) as client:
            response = await client.options("/api/posts", headers={"Origin": "https://evil.test"})
        assert response.status == 204
        assert response.header("Access-Control-Allow-Origin") is None

    async def test_explicit_methods(self) -> None:
        api = _api(CORSConfig(allow_origins=("*",), allow_methods=("GET",)))
        async with TestClient(api) as client:
            response = await client.options("/api/posts", headers={"Origin": "https://a.test"})
        assert response.header("Access-Control-Allow-Methods") == "GET"
        assert response.header("Access-Control-Allow-Origin") == "*"

    async def test_methods_without_cors_not_advertised(self) -> None:
        api = Dispatcher(env={})
        cors = CORSConfig(allow_origins=("*",))
        api.add_route("/x", lambda request: "read", cors=cors)
        api.add_route("/x", lambda request: "write", methods=("POST",))
        async with TestClient(api) as client:
            response = await client.options("/x", headers={"Origin": "https://a.test"})
        assert response.header("Access-Control-Allow-Methods") == "GET, OPTIONS"

    async def test_no_cors_route_options_is_405(self) -> None:
        api = _api(CORSConfig(allow_origins=("*",)))
        async with TestClient(api) as client:
            response = await client.options("/private")
        assert response.status == 405

    async def test_explicit_options_handler_wins(self) -> None:
        api = Dispatcher(env={})
        cors = CORSConfig(allow_origins=("*",))
        api.add_route("/x", lambda request: "get", cors=cors)
        api.add_route("/x", lambda request: "custom", methods=("OPTIONS",))
        async with TestClient(api) as client:
            response = await client.options("/x")
        assert response.text == "custom"


class TestActualRequest:
    async def test_allow_origin_added(self) -> None:
        api = _api(CORSConfig(allow_origins=("https://app.example",), expose_headers=("X-Total",)))
        async with TestClient(api) as client:
            response = await client.get("/api/posts", headers={"Origin": "https://app.example"})
        assert response.status == 200
        assert response.header("Access-Control-Allow-Origin") == "https://app.example"
        assert response.header("Access-Control-Expose-Headers") == "X-Total"

    async def test_credentials(self) -> None:
        api = _api(CORSConfig(allow_origins=("*",), allow_credentials=True))
        async with TestClient(api) as client:
            response = await client.get("/api/posts", headers={"Origin": "https://a.test"})
        # Credentials never pair with a wildcard origin
        assert response.header("Access-Control-Allow-Origin") == "https://a.test"
        assert response.header("Access-Control-Allow-Credentials") == "true"

    async def test_no_origin_no_headers(self) -> None:
        api = _api(CORSConfig(allow_origins=("*",)))
        async with TestClient(api) as client:
            response = await client.get("/api/posts")
        assert response.header("Access-Control-Allow-Origin") is None

    async def test_error_responses_get_cors(self) -> None:
        api = Dispatcher(env={})

        @api.get("/boom", cors=CORSConfig(allow_origins=("*",)))
        def boom(request: RequestContext) -> str:
            raise RuntimeError("x")

        async with TestClient(api) as client:
            response = await client.get("/boom", headers={"Origin": "https://a.test"})
        assert response.status == 500
        assert response.header("Access-Control-Allow-Origin") == "*"
