"""Markdown layer error hierarchy."""

from petrel.errors import PetrelError


class MarkdownError(PetrelError):
    """Base for all petrel.markdown errors."""


class MarkdownNotInstalledError(MarkdownError):
    """Raised when patitas is not installed."""
