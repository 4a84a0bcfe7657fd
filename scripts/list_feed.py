#!/usr/bin/env python3
"""
List Feed - Command-line Tool

Prints the community feed (processed videos) or one user's profile feed
from the local catalog, newest first.

Usage:
    python scripts/list_feed.py                     # Community feed
    python scripts/list_feed.py --owner user-1      # Profile feed
    python scripts/list_feed.py --limit 10 --json   # Machine-readable output
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog import CatalogConfig, CatalogError, create_catalog
from core.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Print a feed from the local video catalog",
    )

    parser.add_argument(
        "--owner",
        type=str,
        default=None,
        help="Show this user's profile feed instead of the community feed",
    )

    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of videos (default: feed_page_limit from catalog.yaml)",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print records as JSON documents",
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to catalog.yaml (default: config/catalog.yaml)",
    )

    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Log file path (default: LOG_DIR/videofeed.log, falls back to ./logs)",
    )

    args = parser.parse_args()
    setup_logging(level=logging.WARNING, log_file=args.log_file)

    config = CatalogConfig(Path(args.config) if args.config else None)
    limit = args.limit or config.feed_page_limit

    try:
        catalog = create_catalog(config=config)
    except CatalogError as e:
        logger.error(f"❌ Cannot open catalog: {e}")
        return 1

    try:
        if args.owner:
            records = catalog.list_by_owner(args.owner, limit=limit)
            title = f"Profile feed: {args.owner}"
        else:
            records = catalog.list_processed(limit=limit)
            title = "Community feed"
    except CatalogError as e:
        logger.error(f"❌ Cannot read catalog: {e}")
        return 1
    finally:
        catalog.cleanup()

    if args.json:
        print(json.dumps([r.to_dict() for r in records], indent=2))
        return 0

    print("=" * 70)
    print(f"{title} ({len(records)} videos)")
    print("=" * 70)

    if not records:
        print("No videos")
        return 0

    for record in records:
        print(
            f"{record.created_at:%Y-%m-%d %H:%M:%S}  "
            f"{record.status.value:<10}  {record.video_id}",
        )
        print(f"    {record.playback_url}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
