"""Routing — route patterns and a compiled route table.

Patterns use bracketed dynamic segments (``/api/posts/[id]``). Routes are
registered during setup and compiled into an immutable lookup structure
when the dispatcher freezes. The same pattern syntax drives static page
generation, where ``build_path`` substitutes concrete values.
"""

from petrel.routing.paths import build_path, parse_pattern, pattern_params
from petrel.routing.route import PathSegment, Route, RouteMatch
from petrel.routing.router import Router

__all__ = [
    "PathSegment",
    "Route",
    "RouteMatch",
    "Router",
    "build_path",
    "parse_pattern",
    "pattern_params",
]
