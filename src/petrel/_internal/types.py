"""Shared type aliases used across petrel modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Request handler: receives a RequestContext, returns a Response (or a
# value the dispatcher can convert). May be ``def`` or ``async def``.
Handler: TypeAlias = Callable[..., Any]

# Error responder: receives (request, error) and returns a Response
ErrorResponder: TypeAlias = Callable[..., Any]
