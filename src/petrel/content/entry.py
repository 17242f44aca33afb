"""ContentEntry — one unit of publishable content."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True, slots=True)
class ContentEntry:
    """A blog post, doc page, or any other item with a unique slug.

    ``metadata`` holds front-matter values (title, date, tags, ...);
    ``body`` is the raw Markdown (or plain text) content.
    """

    slug: str
    metadata: Mapping[str, Any] = field(default_factory=dict)
    body: str = ""
    source_path: Path | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.metadata, MappingProxyType):
            object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @property
    def title(self) -> str:
        """The ``title`` metadata value, falling back to the slug."""
        return str(self.metadata.get("title") or self.slug)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a metadata value; ``"slug"`` returns the entry slug."""
        if key == "slug":
            return self.slug
        return self.metadata.get(key, default)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, source_path: Path | None = None) -> ContentEntry:
        """Build an entry from a flat mapping.

        ``slug`` and ``body`` are lifted out; every other key becomes
        metadata.
        """
        values = dict(data)
        slug = values.pop("slug", None)
        body = values.pop("body", "")
        return cls(
            slug="" if slug is None else str(slug),
            metadata=values,
            body=str(body or ""),
            source_path=source_path,
        )
