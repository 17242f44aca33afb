"""Per-route CORS configuration and preflight responses.

A route registered with ``cors=CORSConfig(...)`` answers ``OPTIONS``
preflight requests itself (unless an explicit ``OPTIONS`` handler is
registered) and has ``Access-Control-Allow-Origin`` added to the
responses of its other methods.
"""

from dataclasses import dataclass

from petrel.http.request import RequestContext
from petrel.http.response import Response


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """CORS configuration for one route.

    All fields have secure defaults (no origin is allowed).
    Override what you need::

        CORSConfig(
            allow_origins=("https://example.com",),
            allow_headers=("Content-Type", "Authorization"),
        )

    ``allow_methods`` defaults to the methods on the path whose routes
    declare CORS.
    """

    allow_origins: tuple[str, ...] = ()
    allow_methods: tuple[str, ...] | None = None
    allow_headers: tuple[str, ...] = ()
    expose_headers: tuple[str, ...] = ()
    allow_credentials: bool = False
    max_age: int = 600  # 10 minutes

    def is_allowed_origin(self, origin: str) -> bool:
        """Check if the origin is in the allow list."""
        if "*" in self.allow_origins:
            return True
        return origin in self.allow_origins


def add_cors_headers(response: Response, config: CORSConfig, origin: str) -> Response:
    """Add CORS headers to a response for an allowed *origin*.

    Headers the handler already set are left alone.
    """
    if response.header("Access-Control-Allow-Origin") is not None:
        return response

    if "*" in config.allow_origins and not config.allow_credentials:
        response = response.with_header("Access-Control-Allow-Origin", "*")
    else:
        response = response.with_header("Access-Control-Allow-Origin", origin)
        response = response.with_header("Vary", "Origin")

    if config.allow_credentials:
        response = response.with_header("Access-Control-Allow-Credentials", "true")

    if config.expose_headers:
        response = response.with_header(
            "Access-Control-Expose-Headers",
            ", ".join(config.expose_headers),
        )
    return response


def preflight_response(
    config: CORSConfig,
    request: RequestContext,
    allowed: frozenset[str],
) -> Response:
    """Build a ``204`` preflight response with all CORS headers.

    The origin headers are only present when the request's origin is
    allowed; the browser then refuses the actual request.
    """
    response = Response(body=b"", status=204)
    origin = request.origin
    if origin is not None and config.is_allowed_origin(origin):
        response = add_cors_headers(response, config, origin)
    elif origin is None and "*" in config.allow_origins:
        response = response.with_header("Access-Control-Allow-Origin", "*")

    methods = config.allow_methods or tuple(sorted(allowed | {"OPTIONS"}))
    response = response.with_header("Access-Control-Allow-Methods", ", ".join(methods))

    if config.allow_headers:
        response = response.with_header(
            "Access-Control-Allow-Headers",
            ", ".join(config.allow_headers),
        )

    return response.with_header("Access-Control-Max-Age", str(config.max_age))
