"""Command line entry point for running sync passes and resolving URLs."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .cache.thumbnail_cache import ThumbnailCache
from .config import Config, get_config
from .exceptions import ThumbnailCacheError
from .services.transcoder import ThumbnailTranscoder
from .store.local import LocalFolderStore
from .ui.console import ConsoleManager
from .utils.logger import configure_logger

logger = logging.getLogger(__name__)


def setup_logging(config: Config, console_manager: ConsoleManager) -> None:
    """Route package logs through the console and, if configured, a log file.

    Args:
        config: Source of the log format, level and optional log file
        console_manager: Console that renders log records
    """
    console_manager.setup_logging(logging.getLogger("thumbsync"))
    configure_logger(
        level=config.log_level,
        format_string=config.log_format,
        file_path=config.log_file,
        console=False,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="thumbsync",
        description="Keep a cache of 480x270 thumbnails in sync with a folder of images",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Examples:
  # Generate missing or outdated thumbnails for ./vault/wallpapers
  thumbsync sync wallpapers --root ./vault

  # Use a specific ffmpeg build
  thumbsync sync wallpapers --root ./vault --ffmpeg /opt/ffmpeg/bin/ffmpeg

  # Print the URL to display for one image
  thumbsync resolve wallpapers/lake.png --root ./vault
        """,
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    parser.add_argument(
        "--json-output",
        action="store_true",
        help="Emit machine-readable JSON events to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands", required=True)

    sync_parser = subparsers.add_parser(
        "sync",
        help="Synchronize the thumbnail cache with a folder",
        description="Remove orphaned thumbnails and regenerate missing or outdated ones",
    )
    sync_parser.add_argument("folder", help="Folder of source images, relative to --root")
    sync_parser.add_argument("--ffmpeg", help="Path to the ffmpeg executable (default: $FFMPEG_PATH or ffmpeg)")

    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Print the display URL for an image",
        description="Print the thumbnail URL if it is fresh, otherwise the original image URL",
    )
    resolve_parser.add_argument("file", help="Image path, relative to --root")

    for sub in (sync_parser, resolve_parser):
        sub.add_argument("--root", "-r", default=".", help="Store root directory (default: .)")
        sub.add_argument(
            "--cache-dir", help="Cache directory (default: $THUMBSYNC_CACHE_DIR or .thumbsync/cache)"
        )

    return parser


async def _run_sync(cache: ThumbnailCache, folder: str) -> dict:
    report = await cache.sync(folder)
    await cache.wait_until_idle()
    return report.to_dict()


def sync_command(args: argparse.Namespace, config: Config, console_manager: ConsoleManager) -> int:
    """Handle the sync subcommand.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    if args.ffmpeg:
        config.ffmpeg_path = args.ffmpeg
    if not ThumbnailTranscoder.check_available(config.ffmpeg_path):
        console_manager.notice(f"ffmpeg not usable at '{config.ffmpeg_path}', thumbnails will fail")

    cache = ThumbnailCache(LocalFolderStore(args.root), config=config, notifier=console_manager)
    results = asyncio.run(_run_sync(cache, args.folder))
    console_manager.print_summary(
        {
            "scanned": results["scanned"],
            "queued": results["enqueued"],
            "orphans removed": len(results["removed"]),
            "orphan errors": len(results["errors"]),
        }
    )
    return 0


def resolve_command(args: argparse.Namespace, config: Config) -> int:
    """Handle the resolve subcommand.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    store = LocalFolderStore(args.root)
    try:
        item = store.get_item(args.file)
    except FileNotFoundError:
        logger.error(f"Image not found: {args.file}")
        return 1

    cache = ThumbnailCache(store, config=config)
    print(cache.resolve(item))
    return 0


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = get_config()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    if args.cache_dir:
        config.cache_dir = Path(args.cache_dir)
    console_manager = ConsoleManager(
        verbose=args.verbose or config.verbose,
        json_output=args.json_output or config.json_output,
    )
    setup_logging(config, console_manager)

    try:
        if args.command == "sync":
            return sync_command(args, config, console_manager)
        elif args.command == "resolve":
            return resolve_command(args, config)
        else:
            parser.print_help()
            return 1
    except (ThumbnailCacheError, ValueError) as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.error("Operation cancelled by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
