"""Trie router for ``[name]`` route patterns.

The dispatcher adds every route, then seals the table when it
freezes. At every level a literal child is tried before the dynamic
child, so ``/blog/index`` wins over
``/blog/[slug]`` for the path ``/blog/index``.
"""

from petrel.errors import ConfigurationError, MethodNotAllowed, NotFound
from petrel.routing.paths import parse_pattern, pattern_params
from petrel.routing.route import Route, RouteMatch


class _TrieNode:
    """One path component level of the trie; mutated only by ``Router.add``."""

    __slots__ = ("children", "param_child", "param_names", "routes_by_method")

    def __init__(self) -> None:
        # Literal segment children: "posts" -> node
        self.children: dict[str, _TrieNode] = {}
        # Dynamic child; parameter names live on the terminal node
        self.param_child: _TrieNode | None = None
        # Parameter names of every route ending here (all must agree)
        self.param_names: tuple[str, ...] | None = None
        # Routes at this node, keyed by HTTP method
        self.routes_by_method: dict[str, Route] = {}


def _normalize_methods(methods: frozenset[str]) -> frozenset[str]:
    return frozenset(m.upper() for m in methods)


class Router:
    """Compiled router with trie-based path matching.

    Usage::

        router = Router()
        router.add(Route("/api/posts", list_posts, frozenset({"GET"})))
        router.add(Route("/api/posts/[id]", show_post, frozenset({"GET"})))
        router.compile()
        match = router.match("GET", "/api/posts/1")
        match.path_params  # {"id": "1"}
    """

    __slots__ = ("_compiled", "_root")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route to the router. Must be called before compile().

        Raises:
            ConfigurationError: After compilation, or when the route
                overlaps one already registered (same shape and method,
                or same shape with different parameter names).
        """
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise ConfigurationError(msg)

        methods = _normalize_methods(route.methods)
        if not methods:
            msg = f"Route {route.pattern!r} declares no methods."
            raise ConfigurationError(msg)

        node = self._root
        for seg in parse_pattern(route.pattern):
            if seg.is_param:
                if node.param_child is None:
                    node.param_child = _TrieNode()
                node = node.param_child
            else:
                node = node.children.setdefault(seg.value, _TrieNode())

        names = pattern_params(route.pattern)
        if node.param_names is not None and node.param_names != names:
            existing = next(iter(node.routes_by_method.values()))
            msg = (
                f"Route {route.pattern!r} overlaps {existing.pattern!r}: "
                f"same shape with different parameter names."
            )
            raise ConfigurationError(msg)

        for method in sorted(methods):
            if method in node.routes_by_method:
                existing = node.routes_by_method[method]
                msg = (
                    f"Route {route.pattern!r} overlaps {existing.pattern!r} "
                    f"for method {method}."
                )
                raise ConfigurationError(msg)

        node.param_names = names
        for method in methods:
            node.routes_by_method[method] = route

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes, sorted by pattern.

        A route serving several methods appears once.
        """
        seen: set[int] = set()
        result: list[Route] = []
        self._collect_routes(self._root, seen, result)
        return sorted(result, key=lambda r: (r.pattern, sorted(r.methods)))

    def _collect_routes(self, node: _TrieNode, seen: set[int], result: list[Route]) -> None:
        for route in node.routes_by_method.values():
            if id(route) not in seen:
                seen.add(id(route))
                result.append(route)
        for child in node.children.values():
            self._collect_routes(child, seen, result)
        if node.param_child is not None:
            self._collect_routes(node.param_child, seen, result)

    def compile(self) -> None:
        """Seal the route table; later ``add()`` calls raise."""
        self._compiled = True

    @property
    def compiled(self) -> bool:
        return self._compiled

    def resolve(self, path: str) -> tuple[dict[str, Route], dict[str, str]] | None:
        """Find the routes registered for *path*, ignoring the method.

        Returns ``(routes_by_method, path_params)`` or ``None``.
        """
        parts = [p for p in path.strip("/").split("/") if p]
        found = self._match_node(self._root, parts, 0, [])
        if found is None:
            return None
        node, values = found
        names = node.param_names or ()
        return node.routes_by_method, dict(zip(names, values, strict=True))

    def allowed_methods(self, path: str) -> frozenset[str]:
        """Methods registered for *path* (empty when nothing matches)."""
        resolved = self.resolve(path)
        if resolved is None:
            return frozenset()
        return frozenset(resolved[0])

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request path and method against compiled routes.

        ``HEAD`` falls back to the ``GET`` route when no ``HEAD`` route
        is registered.

        Raises:
            NotFound: No route matches the path.
            MethodNotAllowed: The path matches but the method doesn't.
        """
        method = method.upper()
        resolved = self.resolve(path)
        if resolved is None:
            raise NotFound(f"No route matches {method} {path!r}")

        routes_by_method, params = resolved
        allowed = frozenset(routes_by_method)
        route = routes_by_method.get(method)
        if route is None and method == "HEAD":
            route = routes_by_method.get("GET")
        if route is None:
            raise MethodNotAllowed(allowed)
        return RouteMatch(route=route, path_params=params, allowed=allowed)

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        values: list[str],
    ) -> tuple[_TrieNode, list[str]] | None:
        """Depth-first match of *parts* from *index*, literal branch first."""
        if index == len(parts):
            if node.routes_by_method:
                return node, values
            return None

        part = parts[index]

        # 1. Literal child first
        child = node.children.get(part)
        if child is not None:
            result = self._match_node(child, parts, index + 1, values)
            if result is not None:
                return result

        # 2. Dynamic child captures exactly one component
        if node.param_child is not None:
            result = self._match_node(node.param_child, parts, index + 1, [*values, part])
            if result is not None:
                return result

        return None
