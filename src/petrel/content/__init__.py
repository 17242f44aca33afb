"""Content collections — entries, sources, front matter, schemas."""

from petrel.content.entry import ContentEntry
from petrel.content.frontmatter import FrontMatterError, parse_front_matter
from petrel.content.schema import (
    CollectionSchema,
    Rule,
    date,
    max_length,
    one_of,
    required,
    string,
    string_list,
)
from petrel.content.sources import ContentSource, DirectorySource, MemorySource, sort_entries

__all__ = [
    "CollectionSchema",
    "ContentEntry",
    "ContentSource",
    "DirectorySource",
    "FrontMatterError",
    "MemorySource",
    "Rule",
    "date",
    "max_length",
    "one_of",
    "parse_front_matter",
    "required",
    "sort_entries",
    "string",
    "string_list",
]
