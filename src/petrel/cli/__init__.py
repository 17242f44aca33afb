"""Petrel CLI — build the static site and inspect routes.

Entry point registered as ``petrel`` in ``pyproject.toml``::

    [project.scripts]
    petrel = "petrel.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``petrel`` command."""
    parser = argparse.ArgumentParser(
        prog="petrel",
        description="Petrel — static pages at build time, handlers at request time.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["debug", "info", "warning", "error"],
        help="Logging verbosity (default: the site config's log_level, else warning)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- petrel build -----------------------------------------------------
    build_parser = subparsers.add_parser(
        "build", help="Render every page into the output directory"
    )
    build_parser.add_argument("site", help="Import string (e.g. mysite:site)")
    build_parser.add_argument("--out", default=None, help="Output directory (overrides config)")
    build_parser.add_argument(
        "--config",
        default=None,
        help="Path to a petrel.toml whose [site] table replaces the site's config",
    )

    # -- petrel paths -----------------------------------------------------
    paths_parser = subparsers.add_parser("paths", help="List every page the build would write")
    paths_parser.add_argument("site", help="Import string (e.g. mysite:site)")

    # -- petrel routes ----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered request handlers")
    routes_parser.add_argument("dispatcher", help="Import string (e.g. mysite:api)")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=(args.log_level or "warning").upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "build":
        from petrel.cli._build import run_build

        run_build(args)
    elif args.command == "paths":
        from petrel.cli._build import run_paths

        run_paths(args)
    elif args.command == "routes":
        from petrel.cli._routes import run_routes

        run_routes(args)
