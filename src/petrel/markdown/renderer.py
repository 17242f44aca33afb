"""Markdown rendering via patitas.

Parsers are cached per (plugins, highlight) pair, so every page of a
build and every later build in the same process share one configured
``patitas.Markdown`` instance.
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache
from typing import TYPE_CHECKING

from petrel.markdown.errors import MarkdownNotInstalledError

if TYPE_CHECKING:
    from patitas import Markdown


class MarkdownRenderer:
    """Render Markdown source to HTML.

    Args:
        plugins: Patitas plugins to enable (default: all).
        highlight: Enable syntax highlighting for fenced code blocks.

    Raises:
        MarkdownNotInstalledError: patitas is not importable.
    """

    __slots__ = ("_md", "highlight", "plugins")

    def __init__(
        self,
        *,
        plugins: Sequence[str] | None = None,
        highlight: bool = False,
    ) -> None:
        self.plugins: tuple[str, ...] = tuple(plugins or ("all",))
        self.highlight = highlight
        self._md: Markdown = _parser(self.plugins, highlight)

    def render(self, source: str) -> str:
        """Render *source* to an HTML string (``""`` for empty input)."""
        return self._md(source) if source else ""

    __call__ = render

    def __repr__(self) -> str:
        return f"MarkdownRenderer(plugins={list(self.plugins)!r}, highlight={self.highlight})"


@lru_cache(maxsize=8)
def _parser(plugins: tuple[str, ...], highlight: bool) -> Markdown:
    try:
        from patitas import Markdown
    except ImportError:
        msg = (
            "petrel needs 'patitas' to render Markdown content. "
            "Install with: pip install patitas"
        )
        raise MarkdownNotInstalledError(msg) from None

    return Markdown(plugins=list(plugins), highlight=highlight)
