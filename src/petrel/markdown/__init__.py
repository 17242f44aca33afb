"""Markdown rendering for petrel via patitas.

Content entry bodies are Markdown; the build renders them to HTML and
templates can also use the ``markdown`` filter::

    {{ entry.body | markdown }}

Requires ``patitas``::

    pip install petrel
"""

from petrel.markdown.errors import MarkdownError, MarkdownNotInstalledError
from petrel.markdown.renderer import MarkdownRenderer

__all__ = [
    "MarkdownError",
    "MarkdownNotInstalledError",
    "MarkdownRenderer",
]
