"""Content sources — where ContentEntry items come from.

A *source* answers two queries at build time:

- ``list_all()``: every entry, in a stable order
- ``get_by_slug(slug)``: one entry or ``None``

Slug uniqueness is enforced by every source; a duplicate aborts the
build with ``DuplicateRouteError`` because two pages cannot share a URL.
Attribute validation is delegated to an optional ``CollectionSchema``.
"""

import json
import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from petrel.content.entry import ContentEntry
from petrel.content.frontmatter import FrontMatterError, parse_front_matter
from petrel.content.schema import CollectionSchema
from petrel.errors import DuplicateRouteError, SchemaValidationError

logger = logging.getLogger("petrel.content")


@runtime_checkable
class ContentSource(Protocol):
    """Anything that can enumerate content entries by slug."""

    name: str

    def list_all(self) -> Sequence[ContentEntry]: ...

    def get_by_slug(self, slug: str) -> ContentEntry | None: ...


def _index(
    name: str,
    entries: Iterable[ContentEntry],
    schema: CollectionSchema | None,
) -> dict[str, ContentEntry]:
    """Validate *entries* and index them by slug."""
    index: dict[str, ContentEntry] = {}
    for entry in entries:
        origin = str(entry.source_path or entry.slug)
        if not entry.slug:
            raise SchemaValidationError(name, origin, {"slug": ["This field is required"]})
        if schema is not None:
            errors = schema.check(entry)
            if errors:
                raise SchemaValidationError(name, entry.slug, errors)
        previous = index.get(entry.slug)
        if previous is not None:
            raise DuplicateRouteError(
                entry.slug,
                f"{name}:{previous.source_path or previous.slug}",
                f"{name}:{origin}",
            )
        index[entry.slug] = entry
    return index


class MemorySource:
    """An in-memory collection.

    Usage::

        posts = MemorySource("posts", [
            {"slug": "first-post", "title": "First"},
            {"slug": "second-post", "title": "Second"},
        ])

    Entries keep their given order.
    """

    __slots__ = ("_index", "name", "schema")

    def __init__(
        self,
        name: str,
        entries: Iterable[ContentEntry | Mapping[str, Any]] = (),
        *,
        schema: CollectionSchema | None = None,
    ) -> None:
        self.name = name
        self.schema = schema
        items = [e if isinstance(e, ContentEntry) else ContentEntry.from_dict(e) for e in entries]
        self._index = _index(name, items, schema)

    def list_all(self) -> Sequence[ContentEntry]:
        return tuple(self._index.values())

    def get_by_slug(self, slug: str) -> ContentEntry | None:
        return self._index.get(slug)

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"MemorySource({self.name!r}, {len(self._index)} entries)"


class DirectorySource:
    """A collection loaded from Markdown and JSON files in a directory.

    - ``*.md``: optional ``+++`` TOML front matter, Markdown body
    - ``*.json``: one object per file (``body`` key optional)

    The slug is the ``slug`` metadata value or the file stem, also for
    files in subdirectories (``2024/hello.md`` -> ``hello``). Entries
    with ``draft = true`` are skipped unless *include_drafts* is set.
    Files are read once, in sorted path order, on first access.
    """

    __slots__ = ("_index", "include_drafts", "name", "path", "patterns", "schema")

    def __init__(
        self,
        path: str | Path,
        *,
        name: str | None = None,
        schema: CollectionSchema | None = None,
        patterns: Sequence[str] = ("*.md", "*.json"),
        include_drafts: bool = False,
    ) -> None:
        self.path = Path(path)
        self.name = name or self.path.name
        self.schema = schema
        self.patterns = tuple(patterns)
        self.include_drafts = include_drafts
        self._index: dict[str, ContentEntry] | None = None

    def _load(self) -> dict[str, ContentEntry]:
        if self._index is not None:
            return self._index

        files: set[Path] = set()
        if self.path.is_dir():
            for pattern in self.patterns:
                files.update(p for p in self.path.rglob(pattern) if p.is_file())
        else:
            logger.warning("Content directory %s does not exist", self.path)

        entries: list[ContentEntry] = []
        for file in sorted(files):
            entry = self._read(file)
            if entry.get("draft") is True and not self.include_drafts:
                logger.debug("Skipping draft %s", file)
                continue
            entries.append(entry)

        self._index = _index(self.name, entries, self.schema)
        logger.debug("Loaded %d entries from %s", len(self._index), self.path)
        return self._index

    def _read(self, file: Path) -> ContentEntry:
        relative = file.relative_to(self.path)
        try:
            text = file.read_text(encoding="utf-8")
            if file.suffix == ".json":
                data = json.loads(text)
                if not isinstance(data, dict):
                    raise SchemaValidationError(
                        self.name, str(relative), {"file": ["Must contain a JSON object"]}
                    )
                metadata, body = data, str(data.pop("body", ""))
            else:
                metadata, body = parse_front_matter(text)
        except (FrontMatterError, json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
            raise SchemaValidationError(self.name, str(relative), {"file": [str(exc)]}) from exc

        slug = metadata.pop("slug", None) or file.stem
        return ContentEntry(slug=str(slug), metadata=metadata, body=body, source_path=relative)

    def reload(self) -> None:
        """Forget cached entries; the next query re-reads the directory."""
        self._index = None

    def list_all(self) -> Sequence[ContentEntry]:
        return tuple(self._load().values())

    def get_by_slug(self, slug: str) -> ContentEntry | None:
        return self._load().get(slug)

    def __repr__(self) -> str:
        return f"DirectorySource({str(self.path)!r})"


def sort_entries(
    entries: Iterable[ContentEntry],
    key: str | Callable[[ContentEntry], Any] = "date",
    *,
    reverse: bool = True,
) -> list[ContentEntry]:
    """Sort entries by a metadata key (newest first by default).

    Entries missing the key sort last; ties break on slug so the order
    is deterministic. Values compare as they are (numbers numerically)
    and fall back to their string form only when types cannot be mixed.
    """
    entries = list(entries)
    if callable(key):
        return sorted(entries, key=lambda e: (key(e), e.slug), reverse=reverse)

    present = [e for e in entries if e.get(key) is not None]
    missing = [e for e in entries if e.get(key) is None]
    try:
        ordered = sorted(present, key=lambda e: (e.get(key), e.slug), reverse=reverse)
    except TypeError:
        ordered = sorted(present, key=lambda e: (str(e.get(key)), e.slug), reverse=reverse)
    return ordered + sorted(missing, key=lambda e: e.slug)
