"""Static build — path generation, templates, and the Site driver."""

from petrel.build.output import StagedOutput, output_path_for
from petrel.build.paths import PathSpec, StaticPath, StaticPathGenerator, default_props
from petrel.build.site import BuildResult, GeneratedPage, PageRoute, Site
from petrel.build.templates import create_environment

__all__ = [
    "BuildResult",
    "GeneratedPage",
    "PageRoute",
    "PathSpec",
    "Site",
    "StagedOutput",
    "StaticPath",
    "StaticPathGenerator",
    "create_environment",
    "default_props",
    "output_path_for",
]
