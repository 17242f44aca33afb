"""Output layout — URL to file mapping and the all-or-nothing writer.

``output_path_for`` decides where a page lives inside the output
directory. ``StagedOutput`` writes a build into a sibling staging
directory and swaps it into place only when everything succeeded, so
a failed build never leaves partial output behind.
"""

import logging
import shutil
import tempfile
from pathlib import Path, PurePosixPath
from types import TracebackType
from urllib.parse import unquote

from petrel.errors import BuildError

logger = logging.getLogger("petrel.build")


def output_path_for(url: str, build_format: str = "directory") -> PurePosixPath:
    """Map a URL path to a file path relative to the output directory.

    ``directory`` format::

        "/"              -> index.html
        "/blog/first"    -> blog/first/index.html

    ``file`` format::

        "/"              -> index.html
        "/blog/first"    -> blog/first.html

    Raises:
        BuildError: The URL contains ``.`` or ``..`` components.
    """
    parts = [unquote(p) for p in url.strip("/").split("/") if p]
    for part in parts:
        if part in (".", "..") or "/" in part or "\\" in part:
            msg = f"URL {url!r} cannot be written to the output directory"
            raise BuildError(msg)

    if not parts:
        return PurePosixPath("index.html")
    if build_format == "file":
        return PurePosixPath(*parts[:-1], f"{parts[-1]}.html")
    return PurePosixPath(*parts, "index.html")


class StagedOutput:
    """Context manager writing into a staging directory next to *target*.

    Usage::

        with StagedOutput(Path("dist")) as staging:
            (staging / "index.html").write_text(html)
        # dist/ now holds exactly what was written

    On an exception the staging directory is removed and *target* is
    left untouched.
    """

    __slots__ = ("_staging", "target")

    def __init__(self, target: Path) -> None:
        self.target = target
        self._staging: Path | None = None

    def __enter__(self) -> Path:
        self.target.parent.mkdir(parents=True, exist_ok=True)
        self._staging = Path(
            tempfile.mkdtemp(prefix=f".{self.target.name}-staging-", dir=self.target.parent)
        )
        return self._staging

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        staging = self._staging
        assert staging is not None
        self._staging = None

        if exc_type is not None:
            shutil.rmtree(staging, ignore_errors=True)
            logger.debug("Discarded staging directory %s", staging)
            return

        backup: Path | None = None
        if self.target.exists():
            backup = self.target.with_name(f".{self.target.name}-previous")
            if backup.exists():
                shutil.rmtree(backup)
            self.target.rename(backup)
        try:
            staging.rename(self.target)
        except OSError:
            if backup is not None:
                backup.rename(self.target)
            shutil.rmtree(staging, ignore_errors=True)
            raise
        if backup is not None:
            shutil.rmtree(backup, ignore_errors=True)
