"""Command-line entry points for MetaMatch.

Usage:
    # Fetch the whole file (or the node in FIGMA_FILE_URL) into data/
    metamatch fetch

    # Fetch one node
    metamatch fetch 16650-538

    # Generate CSS from the first figma-node-styles-*.json in data/
    metamatch process

    # Generate CSS from a specific snapshot into another directory
    metamatch process data/figma-node-styles-abc-1-2-1700000000000.json --out build/css
"""
from __future__ import annotations

import argparse
import asyncio
import sys
from typing import List, Optional

from . import settings
from .config import FigmaConfigError
from .css.file_generator import CSSWriteError
from .extraction.style_parser import StyleParseError
from .integrations.figma_client import FigmaClientError
from .logging_config import get_cli_logger
from .pipeline import MetaMatch, find_style_snapshot, process_styles
from .storage import StorageError, StorageManager
from .utils.validator import ValidationError

_HANDLED_ERRORS = (
    CSSWriteError,
    FigmaClientError,
    FigmaConfigError,
    FileNotFoundError,
    StorageError,
    StyleParseError,
    ValidationError,
)


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="metamatch",
        description="Extract Figma styles and generate per-node CSS",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    fetch = sub.add_parser("fetch", help="Fetch styles from Figma into a JSON snapshot")
    fetch.add_argument(
        "node_id", nargs="?",
        help="Node ID (e.g. 123:456 or 123-456); defaults to the node in FIGMA_FILE_URL, else the whole file",
    )
    fetch.add_argument(
        "--data-dir", default=settings.DATA_DIR,
        help=f"Snapshot directory (default: {settings.DATA_DIR})",
    )

    process = sub.add_parser("process", help="Generate CSS files from a node style snapshot")
    process.add_argument(
        "json_file", nargs="?",
        help="Snapshot path; defaults to the first figma-node-styles-*.json in --data-dir",
    )
    process.add_argument(
        "--data-dir", default=settings.DATA_DIR,
        help=f"Snapshot directory (default: {settings.DATA_DIR})",
    )
    process.add_argument(
        "--out", default=settings.CSS_OUTPUT_DIR,
        help=f"CSS output directory (default: {settings.CSS_OUTPUT_DIR})",
    )

    return parser.parse_args(args)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logger = get_cli_logger(args.verbose)

    try:
        if args.command == "fetch":
            app = MetaMatch(storage=StorageManager(args.data_dir))
            asyncio.run(app.run(args.node_id))
        else:
            json_file = args.json_file or find_style_snapshot(args.data_dir)
            process_styles(json_file, args.out)
    except _HANDLED_ERRORS as e:
        logger.error(f"{args.command} failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
