"""Error handling pipeline for dispatched requests.

Maps HTTPError exceptions and unexpected failures to Response objects,
using registered error responders or JSON defaults (``{"error": ...}``).
"""

import inspect
import logging
from collections.abc import Callable
from http import HTTPStatus
from typing import Any

from petrel.dispatch.negotiation import negotiate
from petrel.errors import HTTPError
from petrel.http.request import RequestContext
from petrel.http.response import Response, json_response

logger = logging.getLogger("petrel.dispatch")


def _reason(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return f"Error {status}"


async def call_error_responder(
    responder: Callable[..., Any],
    request: RequestContext,
    exc: Exception,
) -> Response:
    """Invoke a registered error responder with introspected arguments.

    Responders may accept zero, one (request), or two (request, exc) args.
    Supports both sync and async responders.
    """
    params = list(inspect.signature(responder).parameters.values())

    if len(params) >= 2:
        result = responder(request, exc)
    elif len(params) == 1:
        result = responder(request)
    else:
        result = responder()

    if inspect.isawaitable(result):
        result = await result
    return negotiate(result)


async def handle_http_error(
    exc: HTTPError,
    request: RequestContext,
    responders: dict[int | type, Callable[..., Any]],
    *,
    expose_detail: bool,
) -> Response:
    """Map an HTTPError to a Response.

    *expose_detail* controls whether ``exc.detail`` reaches the body;
    router misses only expose it in debug mode.
    """
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)

    responder = responders.get(type(exc)) or responders.get(exc.status)
    if responder is not None:
        response = await call_error_responder(responder, request, exc)
        # Keep the error status unless the responder chose its own
        if response.status == 200:
            response = response.with_status(exc.status)
    else:
        message = exc.detail if (expose_detail and exc.detail) else _reason(exc.status)
        response = json_response({"error": message}, status=exc.status)

    for name, value in exc.headers:
        if response.header(name) is None:
            response = response.with_header(name, value)
    return response


async def handle_internal_error(
    exc: Exception,
    request: RequestContext,
    responders: dict[int | type, Callable[..., Any]],
    *,
    debug: bool,
) -> Response:
    """Handle unexpected exceptions (timeouts included) as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)

    responder = responders.get(type(exc)) or responders.get(500)
    if responder is not None:
        try:
            response = await call_error_responder(responder, request, exc)
        except Exception:
            logger.exception("Error responder failed for %s %s", request.method, request.path)
        else:
            if response.status == 200:
                response = response.with_status(500)
            return response

    message = f"{type(exc).__name__}: {exc}" if debug else "Internal Server Error"
    return json_response({"error": message}, status=500)
