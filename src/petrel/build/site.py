"""Site — page registry and the static build.

Pages are registered explicitly against route patterns::

    site = Site(SiteConfig(template_dir="templates"))
    posts = site.collection("blog")  # content/blog

    site.page("/", "index.html", props=lambda: {"posts": sort_entries(posts.list_all())})
    site.collection_page("/blog/[slug]", "post.html", posts)
    site.not_found_page("404.html")

    result = site.build()

``collect()`` enumerates every page without touching the filesystem;
``build()`` renders them all in memory first, then writes the output
through a staging directory. Any error aborts the whole build and the
previous output stays in place.
"""

from __future__ import annotations

import json
import logging
import shutil
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path, PurePosixPath
from typing import Any

from kida import Environment
from kida.template import Markup

from petrel.build.output import StagedOutput, output_path_for
from petrel.build.paths import PathSpec, StaticPath, StaticPathGenerator
from petrel.build.templates import create_environment
from petrel.config import SiteConfig
from petrel.content.entry import ContentEntry
from petrel.content.schema import CollectionSchema
from petrel.content.sources import ContentSource, DirectorySource
from petrel.env import EnvBindings
from petrel.errors import ConfigurationError, DuplicateRouteError, TemplateRenderError
from petrel.markdown import MarkdownRenderer
from petrel.routing.paths import pattern_params

logger = logging.getLogger("petrel.build")

type Props = Mapping[str, Any] | Callable[[], Mapping[str, Any]]
type EntryProps = Callable[[ContentEntry, Mapping[str, str]], Mapping[str, Any]]

NOT_FOUND_URL = "/404"
MANIFEST_NAME = "manifest.json"


@dataclass(frozen=True, slots=True)
class GeneratedPage:
    """One materialized page. Immutable once rendered.

    ``html`` is empty until the page is rendered by ``Site.build()``.
    """

    url: str
    template: str
    output_path: PurePosixPath
    params: Mapping[str, str] = field(default_factory=dict)
    props: Mapping[str, Any] = field(default_factory=dict)
    html: str = ""
    origin: str = ""


@dataclass(frozen=True, slots=True)
class BuildResult:
    """Summary of a completed build."""

    output_dir: Path
    pages: tuple[GeneratedPage, ...]
    static_files: tuple[PurePosixPath, ...] = ()

    @property
    def urls(self) -> list[str]:
        return [page.url for page in self.pages]

    def page(self, url: str) -> GeneratedPage:
        """Look up a generated page by URL."""
        for page in self.pages:
            if page.url == url:
                return page
        raise KeyError(url)


@dataclass(frozen=True, slots=True)
class PageRoute:
    """A registered page route and how to enumerate its pages."""

    pattern: str
    template: str
    enumerate: Callable[[], tuple[StaticPath, ...]]
    output_path: PurePosixPath | None = None


class Site:
    """Explicit page registry and static-build driver."""

    __slots__ = (
        "_filters",
        "_globals",
        "_routes",
        "config",
        "env",
        "loader",
    )

    def __init__(
        self,
        config: SiteConfig | None = None,
        *,
        env: EnvBindings | Mapping[str, str] | None = None,
        loader: Any = None,
    ) -> None:
        self.config = config or SiteConfig()
        if env is None:
            env = EnvBindings.from_environ(public_prefix=self.config.public_env_prefix)
        elif not isinstance(env, EnvBindings):
            env = EnvBindings(env, public_prefix=self.config.public_env_prefix)
        self.env: EnvBindings = env
        self.loader = loader
        self._routes: list[PageRoute] = []
        self._filters: dict[str, Callable[..., Any]] = {}
        self._globals: dict[str, Any] = {}

    # -- Content --

    def collection(
        self,
        name: str,
        *,
        schema: CollectionSchema | None = None,
        include_drafts: bool = False,
    ) -> DirectorySource:
        """Open the collection stored in ``<content_dir>/<name>``.

        The path is fixed when this is called; replace ``config`` first.
        """
        return DirectorySource(
            Path(self.config.content_dir) / name,
            name=name,
            schema=schema,
            include_drafts=include_drafts,
        )

    # -- Registration --

    def page(self, pattern: str, template: str, *, props: Props | None = None) -> PageRoute:
        """Register a static (non-dynamic) page."""
        if pattern_params(pattern):
            msg = (
                f"Page {pattern!r} has dynamic segments; use collection_page() "
                f"or paths_page() to enumerate its values."
            )
            raise ConfigurationError(msg)

        def enumerate_one() -> tuple[StaticPath, ...]:
            data = props() if callable(props) else (props or {})
            return StaticPathGenerator(pattern).from_paths([({}, data)])

        return self._add(PageRoute(pattern, template, enumerate_one))

    def collection_page(
        self,
        pattern: str,
        template: str,
        source: ContentSource,
        *,
        props: EntryProps | None = None,
    ) -> PageRoute:
        """Register one page per entry of *source* (``getStaticPaths`` from content)."""
        generator = StaticPathGenerator(pattern)
        return self._add(
            PageRoute(pattern, template, lambda: generator.from_source(source, props=props))
        )

    def paths_page(
        self,
        pattern: str,
        template: str,
        paths: Callable[[], Iterable[PathSpec]],
    ) -> PageRoute:
        """Register pages from an explicit path enumerator.

        *paths* returns ``(params, props)`` pairs, ``StaticPath`` objects,
        or bare params mappings.
        """
        generator = StaticPathGenerator(pattern)
        return self._add(PageRoute(pattern, template, lambda: generator.from_paths(paths())))

    def static_paths(
        self, pattern: str, template: str
    ) -> Callable[[Callable[[], Iterable[PathSpec]]], Callable[[], Iterable[PathSpec]]]:
        """Decorator form of ``paths_page``::

            @site.static_paths("/tags/[tag]", "tag.html")
            def tag_pages():
                for tag, entries in group_by_tag(posts):
                    yield {"tag": tag}, {"posts": entries}
        """

        def decorator(func: Callable[[], Iterable[PathSpec]]) -> Callable[[], Iterable[PathSpec]]:
            self.paths_page(pattern, template, func)
            return func

        return decorator

    def not_found_page(self, template: str, *, props: Props | None = None) -> PageRoute:
        """Register the page written to ``404.html`` at the output root."""

        def enumerate_one() -> tuple[StaticPath, ...]:
            data = props() if callable(props) else (props or {})
            return (StaticPath(params={}, props=dict(data), url=NOT_FOUND_URL, origin="404"),)

        return self._add(
            PageRoute(NOT_FOUND_URL, template, enumerate_one, PurePosixPath("404.html"))
        )

    def template_filter(
        self, name: str | None = None
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a kida template filter."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self._filters[name or func.__name__] = func
            return func

        return decorator

    def template_global(self, name: str, value: Any) -> None:
        """Register a value visible to every template."""
        self._globals[name] = value

    def _add(self, route: PageRoute) -> PageRoute:
        self._routes.append(route)
        return route

    @property
    def routes(self) -> tuple[PageRoute, ...]:
        return tuple(self._routes)

    # -- Enumeration --

    def collect(self) -> tuple[GeneratedPage, ...]:
        """Enumerate every page of every route, without rendering.

        Raises:
            DuplicateRouteError: Two pages share a URL or an output file.
            MissingPropsError: A dynamic segment has no value.
        """
        by_url: dict[str, GeneratedPage] = {}
        by_file: dict[PurePosixPath, GeneratedPage] = {}
        for route in self._routes:
            for path in route.enumerate():
                output = route.output_path or output_path_for(path.url, self.config.build_format)
                origin = path.origin or route.pattern
                page = GeneratedPage(
                    url=path.url,
                    template=route.template,
                    output_path=output,
                    params=path.params,
                    props=path.props,
                    origin=origin,
                )
                previous = by_url.get(page.url) or by_file.get(page.output_path)
                if previous is not None:
                    raise DuplicateRouteError(page.url, previous.origin, page.origin)
                by_url[page.url] = page
                by_file[page.output_path] = page
        return tuple(sorted(by_url.values(), key=lambda p: p.url))

    # -- Rendering --

    def markdown_renderer(self) -> MarkdownRenderer:
        """Create the Markdown renderer configured for this site."""
        return MarkdownRenderer(
            plugins=self.config.markdown_plugins,
            highlight=self.config.markdown_highlight,
        )

    def template_environment(self, markdown: MarkdownRenderer | None = None) -> Environment:
        """Create the kida Environment used to render pages."""
        return create_environment(
            self.config,
            markdown=markdown or self.markdown_renderer(),
            env=self.env,
            filters=self._filters,
            globals_=self._globals,
            loader=self.loader,
        )

    def render(
        self,
        page: GeneratedPage,
        environment: Environment | None = None,
        markdown: MarkdownRenderer | None = None,
    ) -> GeneratedPage:
        """Render one page; returns a copy with ``html`` filled in.

        Entry pages get the rendered body as ``content`` unless their
        props already define it.

        Raises:
            TemplateRenderError: The template is missing or failed.
        """
        markdown = markdown or self.markdown_renderer()
        environment = environment or self.template_environment(markdown)
        context: dict[str, Any] = {
            **page.props,
            "params": dict(page.params),
            "page": {"url": page.url, "path": str(page.output_path)},
        }
        entry = page.props.get("entry")
        if isinstance(entry, ContentEntry) and "content" not in context:
            context["content"] = Markup(markdown.render(entry.body))
        try:
            html = environment.get_template(page.template).render(context)
        except Exception as exc:
            raise TemplateRenderError(page.url, page.template, exc) from exc
        logger.debug("Rendered %s with %s", page.url, page.template)
        return replace(page, html=html)

    # -- Build --

    def build(self, output_dir: str | Path | None = None) -> BuildResult:
        """Render every page and write the output directory.

        Rendering happens entirely before the first write; the write goes
        through a staging directory swapped in on success.

        Raises:
            BuildError: Any build-time failure; nothing is written.
        """
        target = Path(output_dir or self.config.output_dir)
        pages = self.collect()
        markdown = self.markdown_renderer()
        environment = self.template_environment(markdown)
        rendered = tuple(self.render(page, environment, markdown) for page in pages)

        with StagedOutput(target) as staging:
            static_files = self._copy_static(staging)
            taken = set(static_files)
            if PurePosixPath(MANIFEST_NAME) in taken:
                raise DuplicateRouteError(
                    f"/{MANIFEST_NAME}", f"static:{MANIFEST_NAME}", "build manifest"
                )
            for page in rendered:
                if page.output_path in taken:
                    raise DuplicateRouteError(page.url, f"static:{page.output_path}", page.origin)
                destination = staging.joinpath(*page.output_path.parts)
                destination.parent.mkdir(parents=True, exist_ok=True)
                destination.write_text(page.html, encoding="utf-8")
            self._write_manifest(staging, rendered, static_files)

        logger.info(
            "Built %d pages (%d static files) into %s",
            len(rendered),
            len(static_files),
            target,
        )
        return BuildResult(output_dir=target, pages=rendered, static_files=static_files)

    def _copy_static(self, staging: Path) -> tuple[PurePosixPath, ...]:
        static_dir = self.config.static_dir
        if static_dir is None or not Path(static_dir).is_dir():
            return ()
        root = Path(static_dir)
        copied: list[PurePosixPath] = []
        for source in sorted(p for p in root.rglob("*") if p.is_file()):
            relative = PurePosixPath(source.relative_to(root).as_posix())
            destination = staging.joinpath(*relative.parts)
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, destination)
            copied.append(relative)
        return tuple(copied)

    def _write_manifest(
        self,
        staging: Path,
        pages: tuple[GeneratedPage, ...],
        static_files: tuple[PurePosixPath, ...],
    ) -> None:
        manifest = {
            "pages": [
                {"url": p.url, "file": str(p.output_path), "template": p.template} for p in pages
            ],
            "static": [str(f) for f in static_files],
        }
        (staging / MANIFEST_NAME).write_text(
            json.dumps(manifest, indent=2, sort_keys=True) + "\n",
            encoding="utf-8",
        )
