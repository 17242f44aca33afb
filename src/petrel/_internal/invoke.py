"""Invoke helpers — call sync or async handlers uniformly.

Petrel handlers can be ``def`` or ``async def``. Any code that calls
a user-provided handler must handle both cases, and request handlers
additionally run under the configured execution bound. This module
keeps both concerns in one place.

Usage::

    from petrel._internal.invoke import invoke, invoke_bounded

    result = await invoke(handler, *args)
    result = await invoke_bounded(handler, request, timeout=15.0)
"""

import functools
import inspect
from typing import Any

import anyio
import anyio.to_thread

from petrel.errors import HandlerTimeout


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's a coroutine.

    Works with both sync and async callables::

        def show(request):
            return json_response(POSTS[request.param("id")])

        async def show(request):
            post = await fetch_post(request.param("id"))
            return json_response(post)
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


async def invoke_bounded(
    handler: Any,
    *args: Any,
    timeout: float | None,
    **kwargs: Any,
) -> Any:
    """Call a handler under a wall-clock limit.

    With ``timeout=None`` this is plain ``invoke``. Otherwise sync
    handlers run on a worker thread so a handler that never returns
    cannot hold the request past the deadline; the thread is abandoned
    when the deadline passes.

    Raises:
        HandlerTimeout: The deadline passed before the handler finished.
    """
    if timeout is None:
        return await invoke(handler, *args, **kwargs)

    name = getattr(handler, "__name__", repr(handler))
    try:
        with anyio.fail_after(timeout) as scope:
            if inspect.iscoroutinefunction(handler):
                return await handler(*args, **kwargs)
            result = await anyio.to_thread.run_sync(
                functools.partial(handler, *args, **kwargs),
                abandon_on_cancel=True,
            )
            if inspect.isawaitable(result):
                result = await result
            return result
    except TimeoutError as exc:
        # A TimeoutError raised by the handler itself is its own fault.
        if scope.cancel_called:
            raise HandlerTimeout(name, timeout) from exc
        raise
