# src/main.py - v1
"""CLI entry point: build and clear-cache commands.

Usage:
    threadbook build [POST_ID ...] [-o OUTPUT]
    threadbook clear-cache [--tag TAG ...]

With no post ids, ``build`` assembles the LessWrong Sequences Highlights.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from threadbook.logging.logger import get_logger, setup_logging
from threadbook.version import __version__

if TYPE_CHECKING:
    from threadbook.config.settings import Settings

# Stays under the threadbook tree when run as __main__.
logger = get_logger("cli")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    from pydantic import ValidationError

    from threadbook.config.settings import ConfigurationError, load_settings

    try:
        settings = load_settings()
    except (ConfigurationError, ValidationError) as exc:
        _setup_logging(args.verbose)
        logger.error("Configuration error: %s", exc)
        return 1

    _setup_logging(args.verbose, settings)

    try:
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="threadbook",
        description=f"threadbook v{__version__} - EPUB from posts with AI summaries",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- build ---
    p_build = subparsers.add_parser(
        "build", help="Generate an EPUB from LessWrong posts",
    )
    p_build.add_argument(
        "post_ids", nargs="*", default=[],
        help="LessWrong post ids (default: the Sequences Highlights)",
    )
    p_build.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Output file (default: <first post slug>.epub)",
    )
    p_build.set_defaults(func=_cmd_build)

    # --- clear-cache ---
    p_clear = subparsers.add_parser(
        "clear-cache", help="Delete cached posts, summaries and images",
    )
    p_clear.add_argument(
        "--tag", action="append", dest="tags", default=None,
        help="Cache tag to clear (repeatable; default: all)",
    )
    p_clear.set_defaults(func=_cmd_clear_cache)

    return parser


async def _cmd_build(args: argparse.Namespace, settings: Settings) -> int:
    """Build the book and write it only once every stage succeeded."""
    from threadbook.pipeline.runner import build_book

    result = await build_book(args.post_ids, settings)
    output_path: Path = args.output or Path(result.default_filename)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(result.epub_bytes)

    print("\nBook complete:")
    print(f"  Title:     {result.title}")
    print(f"  Posts:     {result.post_count}")
    print(f"  Duration:  {result.duration_ms / 1000:.1f}s")
    print(f"  Output:    {output_path}")
    return 0


async def _cmd_clear_cache(args: argparse.Namespace, settings: Settings) -> int:
    """Remove cache namespaces."""
    from threadbook.pipeline.runner import CACHE_TAGS, clear_cache

    unknown = [t for t in (args.tags or []) if t not in CACHE_TAGS]
    if unknown:
        logger.error(
            "Unknown cache tag(s): %s. Available: %s",
            ", ".join(unknown), ", ".join(CACHE_TAGS),
        )
        return 1

    cleared = await clear_cache(settings, args.tags)
    print(f"Cleared cache tags: {', '.join(cleared)}")
    return 0


def _setup_logging(verbose: bool, settings: Settings | None = None) -> None:
    """Configure logging for CLI usage."""
    if settings is None:
        setup_logging(level="DEBUG" if verbose else "INFO")
        return
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
