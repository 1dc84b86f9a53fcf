#!/usr/bin/env python3
"""
Command-line interface for the short link service.

Usage:
    python cli.py shorten <url>
    python cli.py resolve <short_id>
    python cli.py init-db
    python cli.py health
"""

import argparse
import asyncio
import json
import sys
from typing import Optional

from config import Config
from shortlink.database import create_gateway
from shortlink.errors import ShortLinkError, ShortLinkNotFoundError
from shortlink.service import ShortLinkService
from shortlink.shortcode import ShortCodeGenerator
from shortlink.common.logging_config import setup_logging
from shortlink.common.validators import is_valid_url


def _emit(payload: dict, ok: bool) -> int:
    print(json.dumps(payload, indent=2), file=sys.stdout if ok else sys.stderr)
    return 0 if ok else 1


class ShortlinkCLI:
    """Command-line interface for the short link service."""

    def __init__(self, config: Config, verbose: bool = False):
        """Initialize CLI."""
        self.config = config
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.db = None
        self.service: Optional[ShortLinkService] = None

    async def initialize(self):
        """Initialize gateway and service."""
        self.db = create_gateway(self.config, logger=self.logger)
        self.service = ShortLinkService(
            db=self.db,
            short_code_generator=ShortCodeGenerator(length=self.config.short_code_length),
            logger=self.logger,
            max_collision_retries=self.config.max_collision_retries,
        )

    async def cleanup(self):
        """Cleanup resources."""
        if self.service:
            await self.service.close()

    async def shorten(self, url: str) -> int:
        """Shorten a URL."""
        is_valid, error = is_valid_url(url)
        if not is_valid:
            return _emit({"success": False, "error": f"Invalid URL: {error}"}, ok=False)

        try:
            link = await self.service.shorten(url)
        except ShortLinkError as e:
            return _emit({"success": False, "error": str(e)}, ok=False)

        return _emit({"success": True, **link.to_dict()}, ok=True)

    async def resolve(self, short_id: str) -> int:
        """Get original URL for a short id."""
        try:
            long_url = await self.service.resolve(short_id)
        except ShortLinkNotFoundError as e:
            return _emit({"success": False, "error": str(e)}, ok=False)
        except ShortLinkError as e:
            return _emit({"success": False, "error": f"Error: {e}"}, ok=False)

        return _emit({"success": True, "id": short_id, "long_url": long_url}, ok=True)

    async def init_db(self) -> int:
        """Create the url table."""
        try:
            await self.db.ensure_tables()
        except Exception as e:
            self.logger.debug("Table creation failed", exc_info=True)
            return _emit({"success": False, "error": f"Error creating tables: {e}"}, ok=False)

        return _emit({"success": True, "message": "Tables initialized"}, ok=True)

    async def health(self) -> int:
        """Check service health."""
        health_status = await self.service.health_check()
        return _emit(
            {"success": health_status["overall"], "health": health_status},
            ok=health_status["overall"],
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Shortlink CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s shorten https://example.com/long/url

  # Get original URL
  %(prog)s resolve aB3x

  # Create the url table
  %(prog)s init-db

  # Check health
  %(prog)s health
        """
    )

    parser.add_argument(
        "--db-url",
        default=None,
        help="Database URL (default: DATABASE_URL from env/.env)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")

    resolve_parser = subparsers.add_parser("resolve", help="Get original URL")
    resolve_parser.add_argument("short_id", help="Short id to look up")

    subparsers.add_parser("init-db", help="Create the url table")
    subparsers.add_parser("health", help="Check datastore health")

    return parser


async def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    overrides = {"database_url": args.db_url} if args.db_url else {}
    cli = ShortlinkCLI(Config(**overrides), verbose=args.verbose)

    try:
        await cli.initialize()

        if args.command == "shorten":
            return await cli.shorten(args.url)
        elif args.command == "resolve":
            return await cli.resolve(args.short_id)
        elif args.command == "init-db":
            return await cli.init_db()
        elif args.command == "health":
            return await cli.health()
        else:
            parser.print_help()
            return 1

    finally:
        await cli.cleanup()


def run():
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
