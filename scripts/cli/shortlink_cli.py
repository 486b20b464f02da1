#!/usr/bin/env python3
"""
Command-line client for the short link service.

Keeps a local history of the links you created (newest first, last 10),
the same way the browser front end keeps one in local storage.

Usage:
    python shortlink_cli.py shorten <url>
    python shortlink_cli.py analytics <short_id>
    python shortlink_cli.py recent [--clear]
"""

import argparse
import asyncio
import json
import os
import sys
import time
from datetime import datetime, timezone

import httpx

# Add parent directories to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from shortlink.client import ClientError, RecentLink, RecentLinks, ShortLinkClient
from shortlink.common.logging_config import setup_logging

DEFAULT_HISTORY_FILE = os.path.join(os.path.expanduser("~"), ".shortlink_recent.json")


class ShortLinkCLI:
    """Command-line interface for the short link service."""

    def __init__(self, client: ShortLinkClient, recent: RecentLinks):
        self.client = client
        self.recent = recent

    async def shorten(self, url: str) -> int:
        """Shorten a URL and remember it locally."""
        try:
            short_id = await self.client.shorten(url)
        except ClientError as e:
            print(json.dumps({"success": False, "error": e.message}, indent=2), file=sys.stderr)
            return 1

        short_url = self.client.short_url(short_id)
        self.recent.add(RecentLink(
            short_id=short_id,
            original_url=url,
            short_url=short_url,
            created_at=int(time.time() * 1000),
        ))

        print(json.dumps({
            "success": True,
            "id": short_id,
            "short_url": short_url,
            "original_url": url,
        }, indent=2))
        return 0

    async def analytics(self, short_id: str, newest_first: bool = False) -> int:
        """Show click analytics for a short ID."""
        try:
            data = await self.client.analytics(short_id)
        except ClientError as e:
            print(json.dumps({"success": False, "error": e.message}, indent=2), file=sys.stderr)
            return 1

        visits = [
            datetime.fromtimestamp(item["timestamp"] / 1000, tz=timezone.utc).isoformat()
            for item in data["analytics"]
        ]
        if newest_first:
            visits.reverse()

        print(json.dumps({
            "success": True,
            "id": short_id,
            "total_clicks": data["totalClicks"],
            "visits": visits,
        }, indent=2))
        return 0

    def list_recent(self, clear: bool = False) -> int:
        """Print (or clear) the local history."""
        if clear:
            self.recent.clear()
        print(json.dumps({"success": True, "recent": self.recent.to_list()}, indent=2))
        return 0


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Short link service CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s shorten https://example.com/long/url

  # Show analytics, most recent visit first
  %(prog)s analytics aZ3kP9qx --newest-first

  # List links created from this machine
  %(prog)s recent
        """
    )

    parser.add_argument(
        "--base-url",
        default=os.getenv("SHORTLINK_BASE_URL", "http://localhost:8001"),
        help="Service base URL (default: from SHORTLINK_BASE_URL env or http://localhost:8001)"
    )
    parser.add_argument(
        "--history-file",
        default=os.getenv("SHORTLINK_HISTORY_FILE", DEFAULT_HISTORY_FILE),
        help="Where the local recent-links history is kept"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")

    analytics_parser = subparsers.add_parser("analytics", help="Show click analytics")
    analytics_parser.add_argument("short_id", help="Short ID to report on")
    analytics_parser.add_argument("--newest-first", action="store_true", help="Reverse visit order")

    recent_parser = subparsers.add_parser("recent", help="List recently created links")
    recent_parser.add_argument("--clear", action="store_true", help="Forget the local history")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    logger = setup_logging(level="DEBUG" if args.verbose else "WARNING")
    recent = RecentLinks(path=args.history_file, logger=logger)

    async with ShortLinkClient(base_url=args.base_url, logger=logger) as client:
        cli = ShortLinkCLI(client, recent)
        try:
            if args.command == "shorten":
                return await cli.shorten(args.url)
            elif args.command == "analytics":
                return await cli.analytics(args.short_id, newest_first=args.newest_first)
            elif args.command == "recent":
                return cli.list_recent(clear=args.clear)
        except httpx.TransportError as e:
            print(json.dumps({
                "success": False,
                "error": f"Cannot reach {args.base_url}: {e}"
            }, indent=2), file=sys.stderr)
            return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
