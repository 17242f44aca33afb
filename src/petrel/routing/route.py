"""Route and RouteMatch frozen dataclasses."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from petrel.dispatch.cors import CORSConfig


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Literal: ``/posts``  (is_param=False)
    Dynamic: ``/[id]``   (is_param=True, param_name="id")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    One handler serving one or more HTTP methods on one pattern.
    Created during setup, compiled into the router at freeze time.
    """

    pattern: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    name: str | None = None
    cors: CORSConfig | None = None

    @property
    def param_names(self) -> tuple[str, ...]:
        from petrel.routing.paths import pattern_params

        return pattern_params(self.pattern)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]
    allowed: frozenset[str] = frozenset()
