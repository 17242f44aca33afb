"""ASGI adapter — serves a Dispatcher to any ASGI server or runtime.

The only component that touches raw ASGI directly. Reads the request
body, builds a ``RequestContext``, dispatches, and translates the
``Response`` into ``http.response.start`` / ``http.response.body``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from petrel.http.request import RequestContext
from petrel.http.response import Response

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, MutableMapping

    from petrel.dispatch.dispatcher import Dispatcher

    type Scope = MutableMapping[str, Any]
    type Receive = Callable[[], Awaitable[MutableMapping[str, Any]]]
    type Send = Callable[[MutableMapping[str, Any]], Awaitable[None]]

logger = logging.getLogger("petrel.asgi")


def _body_allowed(status: int, method: str) -> bool:
    """Whether a response may carry a body."""
    # RFC: HEAD, 1xx, 204, and 304 responses do not include a message body.
    if method == "HEAD":
        return False
    return not (100 <= status < 200 or status in {204, 304})


async def read_body(receive: Receive) -> bytes:
    """Read the full request body from ASGI ``http.request`` messages."""
    chunks: list[bytes] = []
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            break
        body = message.get("body", b"")
        if body:
            chunks.append(body)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


async def send_response(response: Response, send: Send, *, method: str = "GET") -> None:
    """Translate a petrel Response into ASGI send() calls."""
    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    for name, value in response.headers:
        if name.lower() in ("content-type", "content-length"):
            continue
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    body = response.body_bytes
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))
    if not _body_allowed(response.status, method):
        body = b""

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send({"type": "http.response.body", "body": body})


class ASGIAdapter:
    """ASGI 3 application wrapping a ``Dispatcher``.

    Usage::

        app = api.asgi()   # hand to any ASGI server
    """

    __slots__ = ("dispatcher",)

    def __init__(self, dispatcher: Dispatcher) -> None:
        self.dispatcher = dispatcher

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
            return
        if scope["type"] != "http":
            return

        body = await read_body(receive)
        request = RequestContext.from_asgi(scope, body, env=self.dispatcher.env)
        response = await self.dispatcher.dispatch(request)
        await send_response(response, send, method=request.method)

    async def _lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                self.dispatcher.freeze()
                logger.debug("Dispatcher ready with %d routes", len(self.dispatcher.routes))
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
