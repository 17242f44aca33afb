"""Request dispatcher — routes one request to one handler.

Routes are registered explicitly (no file-system conventions) and
compiled into a ``Router`` when the dispatcher freezes. ``dispatch``
guarantees exactly one ``Response`` per request: router misses become
404/405, ``HTTPError`` raised by a handler keeps its status, and any
other fault (including running past ``handler_timeout``) becomes 500.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

from petrel._internal.invoke import invoke_bounded
from petrel._internal.types import ErrorResponder, Handler
from petrel.config import SiteConfig
from petrel.dispatch.cors import CORSConfig, add_cors_headers, preflight_response
from petrel.dispatch.errors import handle_http_error, handle_internal_error
from petrel.dispatch.negotiation import negotiate
from petrel.env import EnvBindings
from petrel.errors import ConfigurationError, HTTPError, MethodNotAllowed, NotFound
from petrel.http.request import RequestContext
from petrel.http.response import Response, json_response
from petrel.routing.route import Route
from petrel.routing.router import Router

if TYPE_CHECKING:
    from petrel.asgi import ASGIAdapter

logger = logging.getLogger("petrel.dispatch")


class Dispatcher:
    """Explicit route table for serverless request handlers.

    Usage::

        api = Dispatcher()

        @api.get("/api/posts/[id]")
        def show_post(request: RequestContext) -> Response:
            post = POSTS.get(request.param("id"))
            if post is None:
                return json_response({"error": "Post not found"}, status=404)
            return json_response(post)

        response = await api.dispatch(api.request("GET", "/api/posts/1"))
    """

    __slots__ = ("_error_responders", "_frozen", "_pending", "_router", "config", "env")

    def __init__(
        self,
        config: SiteConfig | None = None,
        env: EnvBindings | Mapping[str, str] | None = None,
    ) -> None:
        self.config = config or SiteConfig()
        if env is None:
            env = EnvBindings.from_environ(public_prefix=self.config.public_env_prefix)
        elif not isinstance(env, EnvBindings):
            env = EnvBindings(env, public_prefix=self.config.public_env_prefix)
        self.env: EnvBindings = env
        self._pending: list[Route] = []
        self._error_responders: dict[int | type, ErrorResponder] = {}
        self._router: Router | None = None
        self._frozen = False

    # -- Registration --

    def add_route(
        self,
        pattern: str,
        handler: Handler,
        methods: Iterable[str] = ("GET",),
        *,
        cors: CORSConfig | None = None,
        name: str | None = None,
    ) -> Route:
        """Register *handler* for *pattern* and *methods*."""
        self._check_not_frozen()
        route = Route(
            pattern=pattern,
            handler=handler,
            methods=frozenset(m.upper() for m in methods),
            name=name,
            cors=cors,
        )
        self._pending.append(route)
        return route

    def route(
        self,
        pattern: str,
        methods: Iterable[str] = ("GET",),
        *,
        cors: CORSConfig | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Decorator form of ``add_route``."""

        def decorator(func: Handler) -> Handler:
            self.add_route(pattern, func, methods, cors=cors, name=name)
            return func

        return decorator

    def get(self, pattern: str, **kwargs: Any) -> Callable[[Handler], Handler]:
        return self.route(pattern, ("GET",), **kwargs)

    def post(self, pattern: str, **kwargs: Any) -> Callable[[Handler], Handler]:
        return self.route(pattern, ("POST",), **kwargs)

    def put(self, pattern: str, **kwargs: Any) -> Callable[[Handler], Handler]:
        return self.route(pattern, ("PUT",), **kwargs)

    def patch(self, pattern: str, **kwargs: Any) -> Callable[[Handler], Handler]:
        return self.route(pattern, ("PATCH",), **kwargs)

    def delete(self, pattern: str, **kwargs: Any) -> Callable[[Handler], Handler]:
        return self.route(pattern, ("DELETE",), **kwargs)

    def error(self, key: int | type[Exception]) -> Callable[[ErrorResponder], ErrorResponder]:
        """Register a responder for a status code or exception type.

        Usage::

            @api.error(404)
            def not_found(request, exc):
                return json_response({"error": "nothing here"}, status=404)
        """

        def decorator(func: ErrorResponder) -> ErrorResponder:
            self._check_not_frozen()
            self._error_responders[key] = func
            return func

        return decorator

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = "Cannot register routes or responders after the dispatcher is frozen."
            raise ConfigurationError(msg)

    # -- Compilation --

    def freeze(self) -> None:
        """Compile the route table. Idempotent.

        Raises:
            ConfigurationError: Overlapping or malformed route patterns.
        """
        if self._frozen:
            return
        router = Router()
        for route in self._pending:
            router.add(route)
        router.compile()
        self._router = router
        self._frozen = True
        logger.debug("Compiled %d routes", len(self._pending))

    @property
    def routes(self) -> list[Route]:
        """All registered routes (freezes the dispatcher)."""
        self.freeze()
        assert self._router is not None
        return self._router.routes

    # -- Requests --

    def request(
        self,
        method: str,
        path: str,
        *,
        body: bytes | str = b"",
        headers: Mapping[str, str] | None = None,
        query: str | Mapping[str, str | list[str]] | None = None,
    ) -> RequestContext:
        """Build a ``RequestContext`` bound to this dispatcher's env."""
        return RequestContext.build(
            method,
            path,
            body=body,
            headers=headers,
            query=query,
            env=self.env,
        )

    async def dispatch(self, request: RequestContext) -> Response:
        """Route *request* to its handler and return exactly one Response."""
        self.freeze()
        assert self._router is not None
        try:
            return await self._dispatch(request)
        except Exception as exc:
            # Error responders themselves failed; fall back to a bare 500.
            logger.exception("Error handling failed for %s %s", request.method, request.path)
            message = "Internal Server Error"
            if self.config.debug:
                message = f"{type(exc).__name__}: {exc}"
            return json_response({"error": message}, status=500)

    async def _dispatch(self, request: RequestContext) -> Response:
        assert self._router is not None
        resolved = self._router.resolve(request.path)
        if resolved is None:
            exc = NotFound(f"No route matches {request.method} {request.path!r}")
            return await handle_http_error(
                exc, request, self._error_responders, expose_detail=self.config.debug
            )

        routes_by_method, params = resolved
        request = request.with_params(params)
        cors = _route_cors(routes_by_method)

        if request.method == "OPTIONS" and "OPTIONS" not in routes_by_method and cors:
            cross_origin = frozenset(m for m, r in routes_by_method.items() if r.cors is not None)
            return preflight_response(cors, request, cross_origin)

        try:
            match = self._router.match(request.method, request.path)
        except MethodNotAllowed as exc:
            return await handle_http_error(
                exc, request, self._error_responders, expose_detail=self.config.debug
            )

        route = match.route
        try:
            result = await invoke_bounded(
                route.handler,
                request,
                timeout=self.config.handler_timeout,
            )
            response = negotiate(result)
        except HTTPError as exc:
            response = await handle_http_error(
                exc, request, self._error_responders, expose_detail=True
            )
        except Exception as exc:
            response = await handle_internal_error(
                exc, request, self._error_responders, debug=self.config.debug
            )

        if route.cors is not None and request.origin is not None:
            if route.cors.is_allowed_origin(request.origin):
                response = add_cors_headers(response, route.cors, request.origin)
        return response

    # -- ASGI --

    def asgi(self) -> ASGIAdapter:
        """Return an ASGI application serving this dispatcher."""
        from petrel.asgi import ASGIAdapter

        return ASGIAdapter(self)


def _route_cors(routes_by_method: Mapping[str, Route]) -> CORSConfig | None:
    """The CORS config declared by any route on the matched path."""
    for method in sorted(routes_by_method):
        cors = routes_by_method[method].cors
        if cors is not None:
            return cors
    return None
