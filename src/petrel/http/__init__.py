"""HTTP types — request context, response, headers."""

from petrel.http.headers import Headers
from petrel.http.request import RequestContext
from petrel.http.response import Response, empty_response, json_response, text_response

__all__ = [
    "Headers",
    "RequestContext",
    "Response",
    "empty_response",
    "json_response",
    "text_response",
]
