"""Async test client for petrel dispatchers.

Returns the same ``Response`` type handlers produce. By default requests
go straight through ``Dispatcher.dispatch``; with ``via_asgi=True`` they
travel through the ASGI adapter instead. No sockets are involved.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from typing import Any

from petrel.dispatch.dispatcher import Dispatcher
from petrel.http.headers import Headers
from petrel.http.response import Response


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Async test client for petrel dispatchers.

    Usage::

        async with TestClient(api) as client:
            response = await client.get("/api/posts/1")
            assert response.status == 200
    """

    __slots__ = ("dispatcher", "via_asgi")

    def __init__(self, dispatcher: Dispatcher, *, via_asgi: bool = False) -> None:
        self.dispatcher = dispatcher
        self.via_asgi = via_asgi

    async def __aenter__(self) -> TestClient:
        self.dispatcher.freeze()
        return self

    async def __aexit__(self, *args: object) -> None:
        return None

    async def get(self, path: str, *, headers: Mapping[str, str] | None = None) -> Response:
        """Send a GET request."""
        return await self.request("GET", path, headers=headers)

    async def head(self, path: str, *, headers: Mapping[str, str] | None = None) -> Response:
        """Send a HEAD request."""
        return await self.request("HEAD", path, headers=headers)

    async def options(self, path: str, *, headers: Mapping[str, str] | None = None) -> Response:
        """Send an OPTIONS request."""
        return await self.request("OPTIONS", path, headers=headers)

    async def delete(self, path: str, *, headers: Mapping[str, str] | None = None) -> Response:
        """Send a DELETE request."""
        return await self.request("DELETE", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: bytes | str | None = None,
        json: Any = None,
    ) -> Response:
        """Send a POST request (``json=`` serializes and sets Content-Type)."""
        return await self._with_body("POST", path, headers, body, json)

    async def put(
        self,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: bytes | str | None = None,
        json: Any = None,
    ) -> Response:
        """Send a PUT request."""
        return await self._with_body("PUT", path, headers, body, json)

    async def patch(
        self,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: bytes | str | None = None,
        json: Any = None,
    ) -> Response:
        """Send a PATCH request."""
        return await self._with_body("PATCH", path, headers, body, json)

    async def _with_body(
        self,
        method: str,
        path: str,
        headers: Mapping[str, str] | None,
        body: bytes | str | None,
        json: Any,
    ) -> Response:
        extra_headers: dict[str, str] = {}
        request_body: bytes | str = body or b""
        if json is not None:
            request_body = json_module.dumps(json).encode("utf-8")
            extra_headers["content-type"] = "application/json"
        merged = {**extra_headers, **(headers or {})}
        return await self.request(method, path, headers=merged, body=request_body)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: bytes | str | None = None,
    ) -> Response:
        """Send an arbitrary request."""
        if self.via_asgi:
            return await self._asgi_request(method, path, headers=headers, body=body)
        request = self.dispatcher.request(method, path, body=body or b"", headers=headers)
        return await self.dispatcher.dispatch(request)

    async def _asgi_request(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | None,
        body: bytes | str | None,
    ) -> Response:
        path_part, _, query_string = path.partition("?")
        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "scheme": "http",
            "path": path_part,
            "raw_path": path_part.encode("latin-1"),
            "query_string": query_string.encode("latin-1"),
            "root_path": "",
            "headers": list(Headers.from_dict(headers).raw),
            "server": ("testserver", 80),
            "client": ("127.0.0.1", 0),
        }
        exchange = _Exchange(body.encode("utf-8") if isinstance(body, str) else (body or b""))
        await self.dispatcher.asgi()(scope, exchange.receive, exchange.send)
        return exchange.response()


class _Exchange:
    """One in-memory ASGI request/response exchange."""

    __slots__ = ("_body_sent", "chunks", "headers", "request_body", "status")

    def __init__(self, request_body: bytes) -> None:
        self.request_body = request_body
        self._body_sent = False
        self.status = 500
        self.headers = Headers()
        self.chunks: list[bytes] = []

    async def receive(self) -> dict[str, Any]:
        if self._body_sent:
            return {"type": "http.disconnect"}
        self._body_sent = True
        return {"type": "http.request", "body": self.request_body, "more_body": False}

    async def send(self, message: Mapping[str, Any]) -> None:
        if message["type"] == "http.response.start":
            self.status = message["status"]
            self.headers = Headers(message.get("headers", ()))
        elif message["type"] == "http.response.body":
            self.chunks.append(message.get("body", b""))

    def response(self) -> Response:
        """Rebuild a ``Response`` from what the application sent."""
        return Response(
            body=b"".join(self.chunks),
            status=self.status,
            content_type=self.headers.get("content-type", "text/plain; charset=utf-8"),
            headers=tuple(
                (name, value)
                for name in self.headers
                if name != "content-type"
                for value in self.headers.get_list(name)
            ),
        )
