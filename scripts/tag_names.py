#!/usr/bin/env python3
"""
Manage the persistent tag name list used by editor dropdowns.

Usage:
    uv run python scripts/tag_names.py list
    uv run python scripts/tag_names.py add enemy boss pickup
    uv run python scripts/tag_names.py destroy boss

Options:
    --data-dir   Directory holding tagStore.json (default: $MULTITAG_DATA_DIR or /tmp/multitag)
    --verbose    Enable debug logging
"""

import argparse
import logging
import os
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv
load_dotenv()

from multitag.services.name_cache import DEFAULT_FILENAME, TagNameCache

logger = logging.getLogger("tag_names")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage the multitag tag name cache")
    parser.add_argument(
        "--data-dir",
        default=os.environ.get("MULTITAG_DATA_DIR", "/tmp/multitag"),
        help="Directory holding the tag cache (default: /tmp/multitag)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="Print every cached tag name")
    add = sub.add_parser("add", help="Add tag names")
    add.add_argument("names", nargs="+")
    destroy = sub.add_parser("destroy", help="Remove a tag name")
    destroy.add_argument("name")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else os.environ.get("MULTITAG_LOG_LEVEL", "INFO"),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    cache = TagNameCache(Path(args.data_dir) / DEFAULT_FILENAME)
    logger.debug("Using tag cache at %s", cache.cache_path)

    if args.command == "add":
        cache.add_names(args.names)
        logger.info("Cache now holds %d names", len(cache))
    elif args.command == "destroy":
        if args.name not in cache:
            logger.warning("Tag name %r is not in the cache", args.name)
        cache.destroy_name(args.name)

    for name in cache.all_names():
        print(name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
