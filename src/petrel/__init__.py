"""Petrel — static page generation and serverless request dispatch.

Two cooperating pieces:

- a build-time ``Site`` that enumerates pages from content and writes
  one static file per page, and
- a request-time ``Dispatcher`` that routes HTTP requests to handlers
  by path pattern and method.

Build a blog::

    from petrel import DirectorySource, Site

    site = Site()
    posts = DirectorySource("content/blog")
    site.collection_page("/blog/[slug]", "post.html", posts)
    site.build()

Serve an API::

    from petrel import Dispatcher, json_response

    api = Dispatcher()

    @api.get("/api/posts/[id]")
    def show_post(request):
        return json_response({"id": request.param("id")})
"""

__version__ = "0.1.0"
__all__ = [
    "BadRequest",
    "BuildError",
    "BuildResult",
    "CORSConfig",
    "CollectionSchema",
    "ConfigurationError",
    "ContentEntry",
    "ContentSource",
    "DirectorySource",
    "Dispatcher",
    "DuplicateRouteError",
    "EnvBindings",
    "GeneratedPage",
    "HTTPError",
    "MemorySource",
    "MethodNotAllowed",
    "MissingPropsError",
    "NotFound",
    "PetrelError",
    "RequestContext",
    "Response",
    "SchemaValidationError",
    "Site",
    "SiteConfig",
    "StaticPath",
    "StaticPathGenerator",
    "json_response",
    "load_config",
    "sort_entries",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import petrel`` fast (no kida or patitas import for a
    dispatcher-only deployment) while providing a clean top-level API.
    """
    if name in ("Site", "BuildResult", "GeneratedPage"):
        from petrel.build import site as _site

        return getattr(_site, name)

    if name in ("StaticPath", "StaticPathGenerator"):
        from petrel.build import paths as _paths

        return getattr(_paths, name)

    if name == "Dispatcher":
        from petrel.dispatch.dispatcher import Dispatcher

        return Dispatcher

    if name == "CORSConfig":
        from petrel.dispatch.cors import CORSConfig

        return CORSConfig

    if name in ("SiteConfig", "load_config"):
        from petrel import config as _config

        return getattr(_config, name)

    if name == "EnvBindings":
        from petrel.env import EnvBindings

        return EnvBindings

    if name == "RequestContext":
        from petrel.http.request import RequestContext

        return RequestContext

    if name in ("Response", "json_response"):
        from petrel.http import response as _resp

        return getattr(_resp, name)

    if name in (
        "CollectionSchema",
        "ContentEntry",
        "ContentSource",
        "DirectorySource",
        "MemorySource",
        "sort_entries",
    ):
        from petrel import content as _content

        return getattr(_content, name)

    if name in (
        "BadRequest",
        "BuildError",
        "ConfigurationError",
        "DuplicateRouteError",
        "HTTPError",
        "MethodNotAllowed",
        "MissingPropsError",
        "NotFound",
        "PetrelError",
        "SchemaValidationError",
    ):
        from petrel import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
