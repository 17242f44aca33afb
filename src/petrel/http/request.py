"""Per-request context passed explicitly to every handler.

Frozen metadata and a fully-read body. The context is created fresh for
each incoming request and discarded once the response is produced;
handlers never reach for ambient request state.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import parse_qs

from petrel.env import EnvBindings
from petrel.errors import BadRequest
from petrel.http.headers import Headers


@dataclass(frozen=True, slots=True)
class RequestContext:
    """An immutable view of one HTTP request.

    ``path_params`` is filled in by the dispatcher after matching; the
    handler sees the captured dynamic segments (``{"id": "1"}``).
    ``env`` carries the full (server-side) environment bindings.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query: Mapping[str, list[str]] = field(default_factory=dict)
    body: bytes = b""
    path_params: Mapping[str, str] = field(default_factory=dict)
    env: EnvBindings = field(default_factory=EnvBindings)

    # -- Computed properties --

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def origin(self) -> str | None:
        """The Origin header value (set on cross-origin requests)."""
        return self.headers.get("origin")

    # -- Accessors --

    def param(self, name: str) -> str:
        """Return a captured path parameter."""
        return self.path_params[name]

    def query_value(self, name: str, default: str | None = None) -> str | None:
        """Return the first query-string value for *name*."""
        values = self.query.get(name)
        if not values:
            return default
        return values[0]

    def text(self) -> str:
        """Decode the body as UTF-8.

        Raises:
            BadRequest: The body is not valid UTF-8.
        """
        try:
            return self.body.decode("utf-8")
        except UnicodeDecodeError:
            raise BadRequest("Request body is not valid UTF-8") from None

    def json(self) -> Any:
        """Parse the body as JSON.

        Raises:
            BadRequest: The body is empty or not valid JSON.
        """
        if not self.body:
            raise BadRequest("Expected a JSON body")
        try:
            return json_module.loads(self.text())
        except json_module.JSONDecodeError:
            raise BadRequest("Invalid JSON body") from None

    # -- Factories --

    def with_params(self, path_params: Mapping[str, str]) -> RequestContext:
        """Return a copy carrying the matched path parameters."""
        return replace(self, path_params=dict(path_params))

    @classmethod
    def build(
        cls,
        method: str,
        path: str,
        *,
        body: bytes | str = b"",
        headers: Mapping[str, str] | None = None,
        query: str | Mapping[str, str | list[str]] | None = None,
        env: EnvBindings | None = None,
    ) -> RequestContext:
        """Create a context from plain Python values.

        *query* may be a raw query string (``"page=2&tag=a"``) or a
        mapping; a query string embedded in *path* is split off.
        """
        if "?" in path:
            path, _, raw = path.partition("?")
            query = query or raw
        if isinstance(body, str):
            body = body.encode("utf-8")
        return cls(
            method=method.upper(),
            path=path or "/",
            headers=Headers.from_dict(headers),
            query=_parse_query(query),
            body=body,
            env=env if env is not None else EnvBindings(),
        )

    @classmethod
    def from_asgi(
        cls,
        scope: Mapping[str, Any],
        body: bytes,
        *,
        env: EnvBindings | None = None,
    ) -> RequestContext:
        """Create a context from an ASGI HTTP scope and its read body."""
        raw_qs: bytes = scope.get("query_string", b"")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"] or "/",
            headers=Headers(scope.get("headers", ())),
            query=_parse_query(raw_qs.decode("latin-1")),
            body=body,
            env=env if env is not None else EnvBindings(),
        )


def _parse_query(query: str | Mapping[str, str | list[str]] | None) -> dict[str, list[str]]:
    if not query:
        return {}
    if isinstance(query, str):
        return parse_qs(query, keep_blank_values=True)
    return {k: list(v) if isinstance(v, list) else [v] for k, v in query.items()}
