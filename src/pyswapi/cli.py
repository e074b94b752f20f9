"""Command-line entry point: list characters or dump a character's page."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from pyswapi.client import SwapiClient
from pyswapi.config import PyswapiConfig
from pyswapi.exceptions import SwapiConfigError
from pyswapi.selectors import PersonViewModel

_logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyswapi",
        description="Browse Star Wars characters and their films, starships and vehicles.",
    )
    action = parser.add_mutually_exclusive_group(required=True)
    action.add_argument("--list", action="store_true", dest="list_mode", help="Print the character menu")
    action.add_argument("--select", metavar="NAME", help="Load the page of the named character")
    parser.add_argument("--base-url", help="Override the API root (default: SWAPI_BASE_URL or built-in)")
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


async def _main(args: argparse.Namespace) -> int:
    overrides: dict[str, object] = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
    if args.timeout is not None:
        overrides["request_timeout"] = args.timeout
    config = PyswapiConfig.from_env(**overrides)

    async with SwapiClient(config) as client:
        if args.list_mode:
            for character in client.state.characters:
                print(f"{character.name}\t{character.url}")
            return 0

        character = client.character_by_name(args.select)
        if character is None:
            print(f"Unknown character: {args.select}", file=sys.stderr)
            return 1

        await client.select_character(character)
        view = client.view_model()
        print(view.model_dump_json(indent=2))
        if isinstance(view, PersonViewModel) and view.person.error is not None:
            return 1
        return 0


def run(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    try:
        return asyncio.run(_main(args))
    except SwapiConfigError as exc:
        _logger.error("Invalid configuration: %s", exc)
        return 2
