"""Return-value negotiation — maps handler return values to Responses.

isinstance-based dispatch, no magic, fully predictable:

1. ``Response``         -> pass through unmodified
2. ``str``              -> 200, text/plain
3. ``bytes``            -> 200, application/octet-stream
4. ``dict`` / ``list``  -> 200, application/json
5. ``(value, int)``     -> negotiate value, override status
"""

from typing import Any

from petrel.http.response import Response, json_response


def negotiate(value: Any) -> Response:
    """Convert a handler's return value to a Response.

    Raises:
        TypeError: The value has no response mapping (e.g. ``None``).
    """
    match value:
        case Response():
            return value
        case str():
            return Response(body=value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return json_response(value)
        case (inner, int() as status):
            return negotiate(inner).with_status(status)
        case _:
            msg = (
                f"Handler returned {type(value).__name__}; expected Response, "
                f"str, bytes, dict, list, or (value, status)."
            )
            raise TypeError(msg)
