#!/usr/bin/env python3
"""
Pantry Command-Line Tool

Inspect and edit a pantry persistence directory. Values are stored as
strings.

Usage:
    pantry --directory ./data list
    pantry --directory ./data get mykey
    pantry --directory ./data set mykey myvalue --ttl 60
    pantry --directory ./data remove mykey
    pantry --directory ./data purge       # Delete expired entries

Environment Variables:
    PANTRY_PERSISTENCE_DIRECTORY - Default directory
    PANTRY_EXPIRATION            - Default TTL for set (seconds)
    PANTRY_DEBUG                 - Enable debug logging (true/false)
"""

import argparse
import logging
import sys
from datetime import datetime
from typing import List, Optional

from .cache.store import Pantry
from .config.options import Options
from .config.settings import settings
from .errors import PantryError

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="pantry",
        description="Pantry: inspect and edit a persistence directory",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--directory",
        type=str,
        default=settings.PERSISTENCE_DIRECTORY,
        help="Persistence directory",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        default=settings.DEBUG,
        help="Enable debug logging",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="List live entries")

    get_parser = commands.add_parser("get", help="Print the value of a key")
    get_parser.add_argument("key")

    set_parser = commands.add_parser("set", help="Store and persist a value")
    set_parser.add_argument("key")
    set_parser.add_argument("value")
    set_parser.add_argument(
        "--ttl",
        type=float,
        default=settings.DEFAULT_EXPIRATION,
        help="Time-to-live in seconds",
    )

    remove_parser = commands.add_parser("remove", help="Remove a key and its file")
    remove_parser.add_argument("key")

    commands.add_parser("purge", help="Delete files of expired entries")

    return parser.parse_args(argv)


def setup_logging(debug: bool = False) -> None:
    """Configure logging based on debug flag."""
    level = logging.DEBUG if debug else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr),
        ]
    )


def run_command(pantry: Pantry[str], args: argparse.Namespace) -> int:
    """Execute one sub-command against a loaded pantry."""
    if args.command == "list":
        for key, value in sorted(pantry.all()):
            print(f"{key}\t{value}")
        return EXIT_OK

    if args.command == "get":
        value, found = pantry.get(args.key)
        if not found:
            print(f"{args.key}: not found", file=sys.stderr)
            return EXIT_NOT_FOUND
        print(value)
        return EXIT_OK

    if args.command == "set":
        result = pantry.set(args.key, args.value, ttl=args.ttl)
        result.persist()
        expires = datetime.fromtimestamp(result.entry.expires_at).isoformat(timespec="seconds")
        print(f"{args.key} stored until {expires}")
        return EXIT_OK

    if args.command == "remove":
        pantry.remove(args.key).persist()
        print(f"{args.key} removed")
        return EXIT_OK

    if args.command == "purge":
        removed = pantry.sweep()
        print(f"{removed} expired entries purged")
        return EXIT_OK

    raise ValueError(f"unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command-line tool."""
    args = parse_args(argv)

    setup_logging(debug=args.debug)
    logger = logging.getLogger(__name__)

    if not args.directory:
        logger.error("No persistence directory given (use --directory)")
        return EXIT_ERROR

    try:
        with Pantry[str](Options(persistence_directory=args.directory)) as pantry:
            pantry.load()
            return run_command(pantry, args)
    except PantryError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
