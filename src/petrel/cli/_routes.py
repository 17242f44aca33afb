"""``petrel routes`` — list registered request handlers.

Resolves an import string to a Dispatcher, freezes it, and prints a
table of METHOD, PATTERN, and handler name.
"""

import argparse
import sys

from petrel.cli._resolve import resolve_object
from petrel.dispatch.dispatcher import Dispatcher
from petrel.errors import ConfigurationError


def run_routes(args: argparse.Namespace) -> None:
    """List registered routes for a dispatcher."""
    try:
        dispatcher = resolve_object(args.dispatcher, Dispatcher, "api")
        routes = dispatcher.routes
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not routes:
        print("No routes registered.")
        return

    rows: list[tuple[str, str, str]] = []
    for route in routes:
        methods_str = ", ".join(sorted(route.methods))
        handler_name = getattr(route.handler, "__name__", str(route.handler))
        if route.name:
            handler_name = f"{handler_name} ({route.name})"
        if route.cors is not None:
            handler_name = f"{handler_name} [cors]"
        rows.append((methods_str, route.pattern, handler_name))

    max_methods = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_path = max(max(len(r[1]) for r in rows), 7)  # "PATTERN" header

    fmt = f"{{:<{max_methods}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATTERN", "HANDLER"))
    sep_len = max_methods + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for methods_str, pattern, handler_name in rows:
        print(fmt.format(methods_str, pattern, handler_name))
