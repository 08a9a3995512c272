"""
Command-line interface for URL shortener service.

Runs the service in-process against the configured store.

Usage:
    url-shortener-cli shorten <url> [--expires-at ISO8601]
    url-shortener-cli resolve <short_code>
    url-shortener-cli stats <short_code>
    url-shortener-cli list [--limit N]
    url-shortener-cli health
    url-shortener-cli init-db
"""

import argparse
import asyncio
import json
import sys
from datetime import datetime
from typing import Optional

from config import Config, load_config
from .common.logging_config import setup_logging
from .common.validators import is_valid_url, normalize_url
from .database import create_store
from .database.models import Resolved, Expired, NotFound
from .database.postgres import URLShortenerPostgres
from .errors import StoreError
from .service import URLShortenerService
from .shortcode import ShortCodeGenerator


def _emit(payload: dict, error: bool = False) -> int:
    print(json.dumps(payload, indent=2, default=str), file=sys.stderr if error else sys.stdout)
    return 1 if error else 0


class URLShortenerCLI:
    """Command-line interface for URL shortener."""

    def __init__(self, config: Config, verbose: bool = False):
        """Initialize CLI."""
        self.config = config
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING", stream=sys.stderr)
        self.db = None
        self.service = None

    async def initialize(self):
        """Initialize store and service."""
        self.db = create_store(self.config, logger=self.logger)
        self.service = URLShortenerService(
            db=self.db,
            short_code_generator=ShortCodeGenerator(default_length=self.config.short_code_length),
            logger=self.logger,
            max_collision_retries=self.config.max_collision_retries,
        )

    async def cleanup(self):
        """Cleanup resources."""
        if self.service:
            await self.service.close()

    async def shorten(self, url: str, expires_at: Optional[datetime] = None) -> int:
        """Shorten a URL."""
        url = normalize_url(url)
        is_valid, error = is_valid_url(url)
        if not is_valid:
            return _emit({"success": False, "error": f"Invalid URL: {error}"}, error=True)

        short_code = await self.service.create_short_url(url, expires_at)
        return _emit({"success": True, "short_code": short_code, "original_url": url})

    async def resolve(self, short_code: str) -> int:
        """Resolve a short code (counts a click, like a browser visit)."""
        result = await self.service.resolve(short_code)

        if isinstance(result, Resolved):
            return _emit({"success": True, "short_code": short_code, "original_url": result.original_url})
        if isinstance(result, Expired):
            return _emit({
                "success": False,
                "error": "This link has expired",
                "expires_at": result.expires_at.isoformat(),
            }, error=True)
        return _emit({"success": False, "error": f"Short code '{short_code}' not found"}, error=True)

    async def stats(self, short_code: str) -> int:
        """Get statistics for a short code."""
        result = await self.service.get_stats(short_code)

        if isinstance(result, NotFound):
            return _emit({"success": False, "error": f"Short code '{short_code}' not found"}, error=True)
        return _emit({"success": True, **result.to_dict()})

    async def list_urls(self, limit: int = 100) -> int:
        """List short codes."""
        urls = await self.service.list_urls(limit)
        return _emit({"success": True, "count": len(urls), "urls": urls})

    async def health(self) -> int:
        """Check service health."""
        health_status = await self.service.health_check()
        if not health_status["overall"]:
            return _emit({"success": False, "health": health_status}, error=True)

        stats = await self.service.get_statistics()
        return _emit({"success": True, "health": health_status, "statistics": stats})

    async def init_db(self) -> int:
        """Create the urls table."""
        if not isinstance(self.db, URLShortenerPostgres):
            return _emit({"success": True, "message": "Nothing to initialize for the in-memory store"})

        await self.db.ensure_tables()
        return _emit({"success": True, "message": "Tables initialized"})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="url-shortener-cli",
        description="URL Shortener CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s shorten https://example.com/long/url

  # Shorten with an expiration
  %(prog)s shorten https://example.com/sale --expires-at 2030-01-01T00:00:00Z

  # Get statistics
  %(prog)s stats aB3dE9x

  # List short codes
  %(prog)s list --limit 10
        """
    )

    parser.add_argument(
        "--db-url",
        default=None,
        help="Store URL (default: DATABASE_URL from the environment or .env)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")
    shorten_parser.add_argument(
        "--expires-at",
        type=datetime.fromisoformat,
        help="Expiration instant (ISO 8601, UTC if no offset)"
    )

    resolve_parser = subparsers.add_parser("resolve", help="Resolve a short code")
    resolve_parser.add_argument("short_code", help="Short code to resolve")

    stats_parser = subparsers.add_parser("stats", help="Get short code statistics")
    stats_parser.add_argument("short_code", help="Short code to get stats for")

    list_parser = subparsers.add_parser("list", help="List short codes")
    list_parser.add_argument("--limit", type=int, default=100, help="Maximum number to return")

    subparsers.add_parser("health", help="Check store health")
    subparsers.add_parser("init-db", help="Create the urls table")

    return parser


async def run(args: argparse.Namespace, config: Config) -> int:
    """Execute a parsed command."""
    cli = URLShortenerCLI(config=config, verbose=args.verbose)

    try:
        await cli.initialize()

        if args.command == "shorten":
            return await cli.shorten(args.url, args.expires_at)
        elif args.command == "resolve":
            return await cli.resolve(args.short_code)
        elif args.command == "stats":
            return await cli.stats(args.short_code)
        elif args.command == "list":
            return await cli.list_urls(args.limit)
        elif args.command == "health":
            return await cli.health()
        elif args.command == "init-db":
            return await cli.init_db()
        return 1

    except StoreError as e:
        return _emit({"success": False, "error": f"Store error: {e}"}, error=True)

    finally:
        await cli.cleanup()


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    config = load_config()
    if args.db_url:
        config = config.model_copy(update={"database_url": args.db_url})

    return asyncio.run(run(args, config))


if __name__ == "__main__":
    sys.exit(main())
