"""The Response handlers return, plus JSON, text and empty helpers.

Responses are frozen; every ``with_*()`` call returns a modified copy,
so a handler can build one up step by step and CORS or error handling
can add headers without touching the original.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    Construct with a body, then chain ``.with_*()`` calls to set
    status and headers. Each call returns a new ``Response``.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/plain; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    # -- Chainable transformations --

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Return a new Response with additional headers."""
        new = tuple(headers.items())
        return replace(self, headers=(*self.headers, *new))

    def with_content_type(self, content_type: str) -> Response:
        """Return a new Response with a different content type."""
        return replace(self, content_type=content_type)

    # -- Header access --

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return the first value of header *name* (case-insensitive).

        ``Content-Type`` is answered from ``content_type``.
        """
        lowered = name.lower()
        if lowered == "content-type":
            return self.content_type
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return default

    @property
    def header_map(self) -> dict[str, str]:
        """Headers as a ``{lowercase-name: value}`` dict (last value wins)."""
        result = {"content-type": self.content_type}
        result.update((key.lower(), value) for key, value in self.headers)
        return result

    # -- Body helpers --

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body

    def json(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(self.body_bytes)


def json_response(
    data: Any,
    status: int = 200,
    headers: Mapping[str, str] | None = None,
) -> Response:
    """Serialize *data* as a UTF-8 JSON response."""
    body = json_module.dumps(data, ensure_ascii=False, separators=(",", ":"))
    response = Response(body=body, status=status, content_type="application/json")
    if headers:
        response = response.with_headers(headers)
    return response


def text_response(
    text: str,
    status: int = 200,
    headers: Mapping[str, str] | None = None,
) -> Response:
    """Plain-text response."""
    response = Response(body=text, status=status)
    if headers:
        response = response.with_headers(headers)
    return response


def empty_response(status: int = 204, headers: Mapping[str, str] | None = None) -> Response:
    """Response with no body (``204 No Content`` by default)."""
    response = Response(body=b"", status=status)
    if headers:
        response = response.with_headers(headers)
    return response
