"""``petrel build`` and ``petrel paths``."""

import argparse
import logging
import sys

from petrel.build.site import Site
from petrel.cli._resolve import resolve_object
from petrel.config import load_config
from petrel.errors import PetrelError


def _load_site(import_string: str) -> Site:
    try:
        return resolve_object(import_string, Site, "site")
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def _apply_log_level(args: argparse.Namespace, site: Site) -> None:
    """Use the site config's log level when ``--log-level`` was not given."""
    if args.log_level is None:
        logging.getLogger("petrel").setLevel(site.config.log_level.upper())


def run_build(args: argparse.Namespace) -> None:
    """Build the site; any build error exits with status 1 and writes nothing."""
    site = _load_site(args.site)
    try:
        if args.config:
            site.config = load_config(args.config)
        _apply_log_level(args, site)
        result = site.build(args.out)
    except PetrelError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(f"Built {len(result.pages)} pages into {result.output_dir}")


def run_paths(args: argparse.Namespace) -> None:
    """Print URL, output file and template for every page, without writing."""
    site = _load_site(args.site)
    _apply_log_level(args, site)
    try:
        pages = site.collect()
    except PetrelError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not pages:
        print("No pages.")
        return

    width = max(len(p.url) for p in pages)
    for page in pages:
        print(f"{page.url:<{width}}  {page.output_path}  ({page.template})")
