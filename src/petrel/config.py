"""Site configuration.

One frozen dataclass drives both the build and the dispatcher.
``load_config`` reads the ``[site]`` table of a ``petrel.toml`` file
into one.
"""

import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from petrel.errors import ConfigurationError

_BUILD_FORMATS = frozenset({"directory", "file"})
_LOG_LEVELS = frozenset({"debug", "info", "warning", "error"})


@dataclass(frozen=True, slots=True)
class SiteConfig:
    """Site configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = SiteConfig(output_dir="build", base_url="/docs")
    """

    # Content and templates
    content_dir: str | Path = "content"
    template_dir: str | Path = "templates"
    static_dir: str | Path | None = "public"
    autoescape: bool = True
    trim_blocks: bool = True
    lstrip_blocks: bool = True

    # Output
    output_dir: str | Path = "dist"
    base_url: str = ""
    build_format: str = "directory"  # "directory" -> a/b/index.html, "file" -> a/b.html

    # Markdown
    markdown_plugins: tuple[str, ...] = ("all",)
    markdown_highlight: bool = False

    # Request handling
    handler_timeout: float | None = 15.0  # seconds per handler call; None disables
    public_env_prefix: str = "PUBLIC_"

    # Diagnostics
    debug: bool = False
    log_level: str = "warning"  # petrel.* loggers, unless the CLI passes --log-level

    def __post_init__(self) -> None:
        if self.build_format not in _BUILD_FORMATS:
            msg = (
                f"build_format must be one of {sorted(_BUILD_FORMATS)}, "
                f"got {self.build_format!r}"
            )
            raise ConfigurationError(msg)
        if self.handler_timeout is not None and self.handler_timeout <= 0:
            msg = f"handler_timeout must be positive or None, got {self.handler_timeout!r}"
            raise ConfigurationError(msg)
        if self.log_level not in _LOG_LEVELS:
            msg = f"log_level must be one of {sorted(_LOG_LEVELS)}, got {self.log_level!r}"
            raise ConfigurationError(msg)


_PATH_FIELDS = ("content_dir", "template_dir", "static_dir", "output_dir")


def load_config(path: str | Path, **overrides: Any) -> SiteConfig:
    """Load a ``SiteConfig`` from the ``[site]`` table of a TOML file.

    A missing file yields the defaults (plus *overrides*). Relative
    directory settings are resolved against the file's directory so a
    build behaves the same from any working directory.

    Raises:
        ConfigurationError: On unreadable TOML or unknown keys.
    """
    config_path = Path(path)
    values: dict[str, Any] = {}

    if config_path.is_file():
        try:
            with config_path.open("rb") as fh:
                document = tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {config_path}: {exc}"
            raise ConfigurationError(msg) from exc

        values = dict(document.get("site", {}))
        known = {f.name for f in fields(SiteConfig)}
        unknown = sorted(set(values) - known)
        if unknown:
            msg = f"Unknown [site] keys in {config_path}: {', '.join(unknown)}"
            raise ConfigurationError(msg)

        if "markdown_plugins" in values:
            values["markdown_plugins"] = tuple(values["markdown_plugins"])

        root = config_path.parent
        for name in _PATH_FIELDS:
            value = values.get(name)
            if value is not None and not Path(value).is_absolute():
                values[name] = root / value

    values.update(overrides)
    return SiteConfig(**values)
