"""Petrel exception hierarchy.

Shared across the build pipeline, router, dispatcher, and CLI so every
module raises and catches the same types.
"""

from collections.abc import Mapping
from dataclasses import dataclass


class PetrelError(Exception):
    """Base for all petrel-specific errors."""


class ConfigurationError(PetrelError):
    """Raised when site or dispatcher configuration is invalid.

    Typically raised while registering routes or during ``freeze()``.
    """


# ---------------------------------------------------------------------------
# Build-time errors: any of these aborts the whole build
# ---------------------------------------------------------------------------


class BuildError(PetrelError):
    """Base for failures that abort a static build."""


class DuplicateRouteError(BuildError):
    """Two generated pages resolve to the same URL."""

    def __init__(self, url: str, first: str, second: str) -> None:
        self.url = url
        self.first = first
        self.second = second
        super().__init__(f"Duplicate route {url!r}: produced by {first} and {second}")


class MissingPropsError(BuildError):
    """A dynamic segment has no value to substitute."""

    def __init__(self, pattern: str, name: str, origin: str = "") -> None:
        self.pattern = pattern
        self.name = name
        where = f" (from {origin})" if origin else ""
        super().__init__(f"Route {pattern!r} needs a value for [{name}]{where}")


class SchemaValidationError(BuildError):
    """A content entry does not satisfy its collection schema."""

    def __init__(
        self,
        collection: str,
        slug: str,
        errors: Mapping[str, list[str]],
    ) -> None:
        self.collection = collection
        self.slug = slug
        self.errors = dict(errors)
        details = "; ".join(f"{name}: {', '.join(msgs)}" for name, msgs in self.errors.items())
        super().__init__(f"Invalid entry {slug!r} in collection {collection!r}: {details}")


class TemplateRenderError(BuildError):
    """A page template failed to render."""

    def __init__(self, url: str, template: str, cause: Exception) -> None:
        self.url = url
        self.template = template
        super().__init__(f"Failed to render {url!r} with {template!r}: {cause}")


# ---------------------------------------------------------------------------
# Request-time errors
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class HTTPError(PetrelError):
    """An error that maps directly to an HTTP status code.

    Raised by the router or by handlers. The dispatcher catches these and
    turns them into a ``Response`` (or a registered error responder).
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class BadRequest(HTTPError):  # noqa: N818
    """400 — the request body or parameters could not be understood."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status=400, detail=detail)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )


class HandlerTimeout(PetrelError):
    """A handler ran past the configured execution bound."""

    def __init__(self, handler_name: str, seconds: float) -> None:
        self.handler_name = handler_name
        self.seconds = seconds
        super().__init__(f"Handler {handler_name!r} exceeded {seconds:g}s")
