"""Command line front end: ``python -m unpkg_catalog <command> ...``.

Results are printed to stdout as JSON; logs go to stderr.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from unpkg_catalog.config import Settings
from unpkg_catalog.logging_config import setup_logging
from unpkg_catalog.state import open_catalog


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="unpkg-catalog",
        description="Resolve package versions and files published on the unpkg CDN",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    library = commands.add_parser("library", help="Resolve a package and list its files")
    library.add_argument("identifier", help="name or name@version")

    latest = commands.add_parser("latest", help="Print the latest published version")
    latest.add_argument("identifier", help="name or name@version")

    complete = commands.add_parser("complete", help="Suggest names or versions")
    complete.add_argument("identifier", help="partially typed name or name@version")
    complete.add_argument(
        "--caret",
        type=int,
        default=None,
        help="caret position in the identifier (default: end of input)",
    )

    search = commands.add_parser("search", help="Search package names")
    search.add_argument("term")
    search.add_argument("--max-hits", type=int, default=20)

    return parser.parse_args(argv)


async def run(args: argparse.Namespace, settings: Settings) -> Any:
    async with open_catalog(settings) as state:
        catalog = state.catalog
        if args.command == "library":
            library = await catalog.get_library(args.identifier)
            return library.model_dump() if library is not None else None
        if args.command == "latest":
            return await catalog.get_latest_version(args.identifier)
        if args.command == "complete":
            caret = len(args.identifier) if args.caret is None else args.caret
            completion_set = await catalog.get_completion_set(args.identifier, caret)
            return completion_set.model_dump()
        groups = await catalog.search(args.term, args.max_hits)
        return [group.name for group in groups]


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = Settings()
    setup_logging(settings.logging)

    result = asyncio.run(run(args, settings))
    json.dump(result, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0 if result is not None else 1


if __name__ == "__main__":
    sys.exit(main())
