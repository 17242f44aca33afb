"""Static path generation — which concrete pages a dynamic route produces.

Given a pattern such as ``/blog/[slug]`` and a content source, the
generator enumerates one ``StaticPath`` per entry. Multi-segment
patterns (``/[lang]/[category]/[slug]``) take every segment value from
the entry: ``slug`` from the entry slug, anything else from metadata.
A list-valued attribute fans out, so an entry with ``lang = ["en",
"fr"]`` yields two pages. Only combinations present in the content are
produced; nothing is generated for combinations no entry declares.

Output is sorted by URL so repeated builds are identical, and two paths
resolving to the same URL abort with ``DuplicateRouteError``.
"""

import itertools
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from petrel.content.entry import ContentEntry
from petrel.content.sources import ContentSource
from petrel.errors import DuplicateRouteError, MissingPropsError
from petrel.routing.paths import build_path, pattern_params

type PathSpec = StaticPath | tuple[Mapping[str, Any], Mapping[str, Any]] | Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class StaticPath:
    """One concrete page of a dynamic route.

    Attributes:
        params: Concrete value for every dynamic segment.
        props: Data handed to the page template.
        url: The pattern with params substituted.
        origin: Human-readable provenance for error messages.
    """

    params: Mapping[str, str]
    props: Mapping[str, Any] = field(default_factory=dict)
    url: str = ""
    origin: str = ""


def _segment_values(entry: ContentEntry, name: str, pattern: str) -> list[str]:
    """All values *entry* supplies for the dynamic segment *name*."""
    value = entry.get(name)
    origin = f"entry {entry.slug!r}"
    if value is None:
        raise MissingPropsError(pattern, name, origin)
    if isinstance(value, list | tuple):
        values = [str(v) for v in value if v is not None and str(v) != ""]
        if not values:
            raise MissingPropsError(pattern, name, origin)
        return values
    text = str(value)
    if not text:
        raise MissingPropsError(pattern, name, origin)
    return [text]


def default_props(entry: ContentEntry, params: Mapping[str, str]) -> dict[str, Any]:  # noqa: ARG001
    """Props for an entry page: its metadata plus ``entry`` and ``slug``."""
    return {**entry.metadata, "entry": entry, "slug": entry.slug}


class StaticPathGenerator:
    """Enumerate the pages a route pattern materializes.

    Usage::

        gen = StaticPathGenerator("/blog/[slug]")
        paths = gen.from_source(posts)
        [p.url for p in paths]  # ["/blog/first-post", "/blog/second-post"]
    """

    __slots__ = ("param_names", "pattern")

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        # Parsing validates the pattern up front
        self.param_names = pattern_params(pattern)

    def from_source(
        self,
        source: ContentSource,
        *,
        props: Callable[[ContentEntry, Mapping[str, str]], Mapping[str, Any]] | None = None,
    ) -> tuple[StaticPath, ...]:
        """One path per (entry, segment-value combination).

        An empty source yields an empty tuple.

        Raises:
            MissingPropsError: An entry has no value for a segment.
            DuplicateRouteError: Two paths resolve to the same URL.
        """
        make_props = props or default_props
        collected: list[StaticPath] = []
        for entry in source.list_all():
            choices = [_segment_values(entry, name, self.pattern) for name in self.param_names]
            for combo in itertools.product(*choices):
                params = dict(zip(self.param_names, combo, strict=True))
                origin = f"{source.name}:{entry.source_path or entry.slug}"
                collected.append(
                    StaticPath(
                        params=params,
                        props=dict(make_props(entry, params)),
                        url=build_path(self.pattern, params, origin=origin),
                        origin=origin,
                    )
                )
        return self._finalize(collected)

    def from_paths(self, paths: Iterable[PathSpec]) -> tuple[StaticPath, ...]:
        """Accept explicitly enumerated paths.

        Each item is a ``StaticPath``, a ``(params, props)`` pair, or a
        bare params mapping (empty props).

        Raises:
            MissingPropsError: A segment has no value.
            DuplicateRouteError: Two paths resolve to the same URL.
        """
        collected: list[StaticPath] = []
        for index, item in enumerate(paths):
            origin = f"{self.pattern}#{index}"
            match item:
                case StaticPath():
                    params, props = item.params, item.props
                    origin = item.origin or origin
                case (Mapping() as params, Mapping() as props):
                    pass
                case Mapping():
                    params, props = item, {}
                case _:
                    msg = f"Unsupported static path spec: {item!r}"
                    raise TypeError(msg)
            clean = {name: str(params[name]) for name in self.param_names if name in params}
            url = build_path(self.pattern, clean, origin=origin)
            collected.append(StaticPath(params=clean, props=dict(props), url=url, origin=origin))
        return self._finalize(collected)

    def _finalize(self, paths: list[StaticPath]) -> tuple[StaticPath, ...]:
        seen: dict[str, StaticPath] = {}
        for path in paths:
            previous = seen.get(path.url)
            if previous is not None:
                raise DuplicateRouteError(path.url, previous.origin, path.origin)
            seen[path.url] = path
        return tuple(sorted(paths, key=lambda p: p.url))
