"""Kida environment setup for static rendering.

Creates a kida Environment from the site configuration and binds the
built-in filters and globals. The environment is created once per build
and shared by every page.
"""

from collections.abc import Callable, Mapping
from typing import Any

from kida import Environment, FileSystemLoader
from kida.template import Markup

from petrel.config import SiteConfig
from petrel.env import EnvBindings
from petrel.markdown import MarkdownRenderer


def make_url(base_url: str) -> Callable[[str], str]:
    """Build the ``url`` template global for a deployment base URL.

    Example:
        {{ url("/blog/first-post") }}  ->  "/docs/blog/first-post"  (base_url="/docs")
    """
    base = base_url.rstrip("/")

    def url(path: str = "/") -> str:
        if "://" in path:
            return path
        return f"{base}/{path.lstrip('/')}"

    return url


def markdown_filter(renderer: MarkdownRenderer) -> Callable[[str | None], Markup]:
    """Wrap *renderer* as a template filter returning ``Markup``."""

    def markdown(source: str | None) -> Markup:
        return Markup(renderer.render(source or ""))

    return markdown


def create_environment(
    config: SiteConfig,
    *,
    markdown: MarkdownRenderer,
    env: EnvBindings,
    filters: Mapping[str, Callable[..., Any]] | None = None,
    globals_: Mapping[str, Any] | None = None,
    loader: Any = None,
) -> Environment:
    """Create a kida Environment for a build.

    Templates see ``env`` (public variables only), ``url()``, ``site``
    (selected config values), and the ``markdown`` filter. *loader*
    replaces the default ``FileSystemLoader(config.template_dir)``.
    """
    environment = Environment(
        loader=loader or FileSystemLoader(str(config.template_dir)),
        autoescape=config.autoescape,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
    )

    environment.update_filters({"markdown": markdown_filter(markdown)})

    # User-defined filters may override built-ins
    if filters:
        environment.update_filters(dict(filters))

    environment.add_global("env", dict(env.public()))
    environment.add_global("url", make_url(config.base_url))
    environment.add_global("site", {"base_url": config.base_url})

    for name, value in (globals_ or {}).items():
        environment.add_global(name, value)

    return environment
