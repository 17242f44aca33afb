"""Tests for petrel.markdown — renderer wrapper over patitas."""

from __future__ import annotations

from petrel.build.templates import markdown_filter


# ── MarkdownRenderer ─────────────────────────────────────────────────────


class TestMarkdownRenderer:
    """Test the core MarkdownRenderer wrapper over patitas."""

    def test_renders_heading(self) -> None:
        from petrel.markdown import MarkdownRenderer

        html = MarkdownRenderer().render("# Hello")
        assert "<h1" in html
        assert "Hello" in html

    def test_renders_emphasis(self) -> None:
        from petrel.markdown import MarkdownRenderer

        html = MarkdownRenderer().render("**bold** and *italic*")
        assert "<strong>" in html
        assert "<em>" in html

    def test_empty_source_returns_empty(self) -> None:
        from petrel.markdown import MarkdownRenderer

        assert MarkdownRenderer().render("") == ""

    def test_callable(self) -> None:
        from petrel.markdown import MarkdownRenderer

        md = MarkdownRenderer()
        assert md("Hello") == md.render("Hello")


# ── Template filter ──────────────────────────────────────────────────────


class TestMarkdownFilter:
    def test_returns_markup(self) -> None:
        from kida.template import Markup

        from petrel.markdown import MarkdownRenderer

        result = markdown_filter(MarkdownRenderer())("*x*")
        assert isinstance(result, Markup)
        assert "<em>x</em>" in result

    def test_none_is_empty(self) -> None:
        from petrel.markdown import MarkdownRenderer

        assert markdown_filter(MarkdownRenderer())(None) == ""


# ── Errors ───────────────────────────────────────────────────────────────


class TestMarkdownErrors:
    def test_not_installed_is_petrel_error(self) -> None:
        from petrel.errors import PetrelError
        from petrel.markdown import MarkdownError, MarkdownNotInstalledError

        assert issubclass(MarkdownNotInstalledError, MarkdownError)
        assert issubclass(MarkdownError, PetrelError)
