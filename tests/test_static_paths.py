"""Tests for petrel.build.paths — enumerating the pages of a route."""

import pytest

from petrel.build.paths import StaticPath, StaticPathGenerator
from petrel.content import ContentEntry, MemorySource
from petrel.errors import ConfigurationError, DuplicateRouteError, MissingPropsError


def _posts(*slugs: str) -> MemorySource:
    return MemorySource("posts", [{"slug": s, "title": s.title()} for s in slugs])


# ── from_source ──────────────────────────────────────────────────────────


class TestFromSource:
    def test_one_path_per_entry(self) -> None:
        paths = StaticPathGenerator("/blog/[slug]").from_source(
            _posts("first-post", "second-post")
        )
        assert [p.url for p in paths] == ["/blog/first-post", "/blog/second-post"]
        assert paths[0].params == {"slug": "first-post"}

    def test_props_default_to_metadata(self) -> None:
        (path,) = StaticPathGenerator("/blog/[slug]").from_source(_posts("hello"))
        assert path.props["title"] == "Hello"
        assert path.props["slug"] == "hello"
        assert isinstance(path.props["entry"], ContentEntry)

    def test_custom_props(self) -> None:
        (path,) = StaticPathGenerator("/blog/[slug]").from_source(
            _posts("hello"),
            props=lambda entry, params: {"heading": entry.title.upper(), **params},
        )
        assert path.props == {"heading": "HELLO", "slug": "hello"}

    def test_empty_source(self) -> None:
        assert StaticPathGenerator("/blog/[slug]").from_source(MemorySource("posts")) == ()

    def test_sorted_by_url(self) -> None:
        paths = StaticPathGenerator("/blog/[slug]").from_source(_posts("zeta", "alpha", "mid"))
        assert [p.params["slug"] for p in paths] == ["alpha", "mid", "zeta"]

    def test_multi_segment(self) -> None:
        source = MemorySource(
            "docs",
            [
                {"slug": "install", "lang": "en", "category": "guide"},
                {"slug": "installer", "lang": "fr", "category": "guide"},
            ],
        )
        paths = StaticPathGenerator("/[lang]/[category]/[slug]").from_source(source)
        assert [p.url for p in paths] == ["/en/guide/install", "/fr/guide/installer"]

    def test_list_values_fan_out(self) -> None:
        source = MemorySource("docs", [{"slug": "intro", "lang": ["en", "fr"]}])
        paths = StaticPathGenerator("/[lang]/[slug]").from_source(source)
        assert [p.url for p in paths] == ["/en/intro", "/fr/intro"]

    def test_missing_attribute(self) -> None:
        source = MemorySource("docs", [{"slug": "intro"}])
        with pytest.raises(MissingPropsError) as exc_info:
            StaticPathGenerator("/[lang]/[slug]").from_source(source)
        assert exc_info.value.name == "lang"
        assert "intro" in str(exc_info.value)

    def test_empty_list_attribute(self) -> None:
        source = MemorySource("docs", [{"slug": "intro", "lang": []}])
        with pytest.raises(MissingPropsError):
            StaticPathGenerator("/[lang]/[slug]").from_source(source)

    def test_duplicate_url(self) -> None:
        source = MemorySource(
            "docs",
            [
                {"slug": "a", "section": "same"},
                {"slug": "b", "section": "same"},
            ],
        )
        with pytest.raises(DuplicateRouteError) as exc_info:
            StaticPathGenerator("/[section]").from_source(source)
        assert exc_info.value.url == "/same"

    def test_invalid_pattern(self) -> None:
        with pytest.raises(ConfigurationError):
            StaticPathGenerator("/blog/{slug}")


# ── from_paths ───────────────────────────────────────────────────────────


class TestFromPaths:
    def test_pairs(self) -> None:
        paths = StaticPathGenerator("/tags/[tag]").from_paths(
            [({"tag": "python"}, {"count": 2}), ({"tag": "asgi"}, {"count": 1})]
        )
        assert [p.url for p in paths] == ["/tags/asgi", "/tags/python"]
        assert paths[1].props == {"count": 2}

    def test_bare_params(self) -> None:
        (path,) = StaticPathGenerator("/page/[n]").from_paths([{"n": 2}])
        assert path.url == "/page/2"
        assert path.params == {"n": "2"}
        assert path.props == {}

    def test_static_path_objects(self) -> None:
        (path,) = StaticPathGenerator("/x/[id]").from_paths(
            [StaticPath(params={"id": "1"}, props={"a": 1}, origin="custom")]
        )
        assert (path.url, path.origin) == ("/x/1", "custom")

    def test_generator_input(self) -> None:
        def pages():
            for n in range(3):
                yield {"n": n}

        assert len(StaticPathGenerator("/page/[n]").from_paths(pages())) == 3

    def test_static_pattern(self) -> None:
        (path,) = StaticPathGenerator("/about").from_paths([({}, {"title": "About"})])
        assert path.url == "/about"

    def test_missing_param(self) -> None:
        with pytest.raises(MissingPropsError):
            StaticPathGenerator("/tags/[tag]").from_paths([{"other": "x"}])

    def test_duplicate(self) -> None:
        with pytest.raises(DuplicateRouteError):
            StaticPathGenerator("/tags/[tag]").from_paths([{"tag": "a"}, {"tag": "a"}])

    def test_unsupported_item(self) -> None:
        with pytest.raises(TypeError):
            StaticPathGenerator("/tags/[tag]").from_paths(["a"])
