"""Tests for petrel.routing.paths — pattern parsing and path building."""

import pytest

from petrel.errors import ConfigurationError, MissingPropsError
from petrel.routing import build_path, parse_pattern, pattern_params


class TestParsePattern:
    def test_root(self) -> None:
        assert parse_pattern("/") == ()

    def test_static(self) -> None:
        segments = parse_pattern("/api/posts")
        assert [s.value for s in segments] == ["api", "posts"]
        assert not any(s.is_param for s in segments)

    def test_dynamic(self) -> None:
        segments = parse_pattern("/blog/[slug]")
        assert segments[1].is_param is True
        assert segments[1].param_name == "slug"

    def test_requires_leading_slash(self) -> None:
        with pytest.raises(ConfigurationError, match="start with '/'"):
            parse_pattern("blog/[slug]")

    @pytest.mark.parametrize("pattern", ["/posts/{id}", "/posts/<id>"])
    def test_rejects_foreign_syntax(self, pattern: str) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            parse_pattern(pattern)
        assert "[name]" in str(exc_info.value)

    def test_rejects_partial_brackets(self) -> None:
        with pytest.raises(ConfigurationError, match="whole path component"):
            parse_pattern("/posts/post-[id]")

    def test_rejects_repeated_names(self) -> None:
        with pytest.raises(ConfigurationError, match="repeats"):
            parse_pattern("/[id]/[id]")


class TestPatternParams:
    def test_names_in_order(self) -> None:
        assert pattern_params("/[lang]/docs/[slug]") == ("lang", "slug")

    def test_static_has_none(self) -> None:
        assert pattern_params("/about") == ()


class TestBuildPath:
    def test_substitutes(self) -> None:
        assert build_path("/blog/[slug]", {"slug": "first-post"}) == "/blog/first-post"

    def test_root(self) -> None:
        assert build_path("/", {}) == "/"

    def test_converts_to_string(self) -> None:
        assert build_path("/api/posts/[id]", {"id": 7}) == "/api/posts/7"

    def test_quotes_values(self) -> None:
        assert build_path("/tags/[tag]", {"tag": "a b/c"}) == "/tags/a%20b%2Fc"

    def test_ignores_extra_keys(self) -> None:
        assert build_path("/blog/[slug]", {"slug": "x", "other": "y"}) == "/blog/x"

    def test_missing_value(self) -> None:
        with pytest.raises(MissingPropsError) as exc_info:
            build_path("/blog/[slug]", {}, origin="post.md")
        assert exc_info.value.name == "slug"
        assert "post.md" in str(exc_info.value)

    def test_empty_value(self) -> None:
        with pytest.raises(MissingPropsError):
            build_path("/blog/[slug]", {"slug": ""})
