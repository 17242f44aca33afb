"""Tests for petrel.build.output — URL layout and staged writes."""

from pathlib import Path, PurePosixPath

import pytest

from petrel.build.output import StagedOutput, output_path_for
from petrel.errors import BuildError


class TestOutputPathFor:
    def test_root(self) -> None:
        assert output_path_for("/") == PurePosixPath("index.html")
        assert output_path_for("/", "file") == PurePosixPath("index.html")

    def test_directory_format(self) -> None:
        assert output_path_for("/blog/first-post") == PurePosixPath("blog/first-post/index.html")

    def test_file_format(self) -> None:
        assert output_path_for("/blog/first-post", "file") == PurePosixPath("blog/first-post.html")

    def test_quoted_components_decoded(self) -> None:
        assert output_path_for("/tags/a%20b") == PurePosixPath("tags/a b/index.html")

    @pytest.mark.parametrize("url", ["/../etc", "/blog/%2E%2E", "/a/%2Fb"])
    def test_rejects_escaping_urls(self, url: str) -> None:
        with pytest.raises(BuildError):
            output_path_for(url)


class TestStagedOutput:
    def test_writes_target(self, tmp_path: Path) -> None:
        target = tmp_path / "dist"
        with StagedOutput(target) as staging:
            (staging / "index.html").write_text("hi")
        assert (target / "index.html").read_text() == "hi"
        assert [p.name for p in tmp_path.iterdir()] == ["dist"]

    def test_replaces_previous(self, tmp_path: Path) -> None:
        target = tmp_path / "dist"
        target.mkdir()
        (target / "stale.html").write_text("old")
        with StagedOutput(target) as staging:
            (staging / "index.html").write_text("new")
        assert sorted(p.name for p in target.iterdir()) == ["index.html"]

    def test_failure_keeps_previous(self, tmp_path: Path) -> None:
        target = tmp_path / "dist"
        target.mkdir()
        (target / "index.html").write_text("old")
        with pytest.raises(RuntimeError):
            with StagedOutput(target) as staging:
                (staging / "index.html").write_text("partial")
                raise RuntimeError("render failed")
        assert (target / "index.html").read_text() == "old"
        assert [p.name for p in tmp_path.iterdir()] == ["dist"]

    def test_failure_without_previous(self, tmp_path: Path) -> None:
        target = tmp_path / "dist"
        with pytest.raises(RuntimeError):
            with StagedOutput(target):
                raise RuntimeError("boom")
        assert not target.exists()
