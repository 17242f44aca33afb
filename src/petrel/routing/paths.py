"""Route pattern parsing and path building.

Pattern syntax::

    "/"                          -> ()
    "/blog/[slug]"               -> (literal "blog", dynamic "slug")
    "/[lang]/[category]/[slug]"  -> three dynamic segments

Each dynamic segment captures exactly one path component.
"""

import re
from collections.abc import Mapping
from functools import lru_cache
from typing import Any
from urllib.parse import quote

from petrel.errors import ConfigurationError, MissingPropsError
from petrel.routing.route import PathSegment

_PARAM_RE = re.compile(r"^\[([A-Za-z_][A-Za-z0-9_]*)\]$")


@lru_cache(maxsize=256)
def parse_pattern(pattern: str) -> tuple[PathSegment, ...]:
    """Parse a route pattern into segments.

    Raises:
        ConfigurationError: On malformed or foreign-style parameters
            (``{id}``, ``<id>``), partial brackets, or repeated names.
    """
    if not pattern.startswith("/"):
        msg = f"Route pattern must start with '/': {pattern!r}"
        raise ConfigurationError(msg)

    segments: list[PathSegment] = []
    seen: set[str] = set()
    for part in pattern.strip("/").split("/"):
        if not part:
            continue
        if (part.startswith("{") and part.endswith("}")) or (
            part.startswith("<") and part.endswith(">")
        ):
            msg = (
                f"Route pattern {pattern!r} uses {part!r}; dynamic segments "
                f"are written [name], e.g. /posts/[id]"
            )
            raise ConfigurationError(msg)

        m = _PARAM_RE.match(part)
        if m is not None:
            name = m.group(1)
            if name in seen:
                msg = f"Route pattern {pattern!r} repeats parameter [{name}]"
                raise ConfigurationError(msg)
            seen.add(name)
            segments.append(PathSegment(value=part, is_param=True, param_name=name))
            continue

        if "[" in part or "]" in part:
            msg = (
                f"Route pattern {pattern!r} has segment {part!r}; a dynamic "
                f"segment must fill the whole path component"
            )
            raise ConfigurationError(msg)
        segments.append(PathSegment(value=part))
    return tuple(segments)


def pattern_params(pattern: str) -> tuple[str, ...]:
    """Names of the dynamic segments in *pattern*, left to right."""
    return tuple(s.param_name for s in parse_pattern(pattern) if s.param_name)


def build_path(pattern: str, params: Mapping[str, Any], *, origin: str = "") -> str:
    """Substitute *params* into *pattern* to produce a concrete URL path.

    Values are converted with ``str()`` and percent-quoted so each one
    stays a single path component. Extra keys are ignored.

    Raises:
        MissingPropsError: A dynamic segment has no (or an empty) value.
    """
    parts: list[str] = []
    for seg in parse_pattern(pattern):
        if not seg.is_param:
            parts.append(seg.value)
            continue
        name = seg.param_name or ""
        value = params.get(name)
        if value is None or str(value) == "":
            raise MissingPropsError(pattern, name, origin)
        parts.append(quote(str(value), safe=""))
    return "/" + "/".join(parts)
