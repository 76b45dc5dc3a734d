"""
Main CLI entry point for the notedex CLI tool.

This module provides the main entry point for the notedex CLI tool, including
command-line argument parsing and dispatching to appropriate command handlers.
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from notedex import __version__
from notedex.commands import (
    ingest_notes_command,
    render_note_command,
    search_notes_command,
)
from notedex.config import load_config_or_default
from notedex.document import SerializationMode
from notedex.exceptions import ConfigurationError, NotedexError
from notedex.utils import get_logger, setup_logging

logger = get_logger(__name__)

DEFAULT_CONFIG = "notedex.toml"


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Command-line arguments to parse. If None, sys.argv[1:] is used.

    Returns:
        Parsed command-line arguments.
    """
    parser = argparse.ArgumentParser(
        description="notedex - Normalize frontmatter notes and search them through Meilisearch."
    )
    parser.add_argument(
        "--version", action="version", version=f"notedex v{__version__}"
    )

    subparsers = parser.add_subparsers(title="commands", dest="command")

    # ingest
    ingest_parser = subparsers.add_parser(
        "ingest", help="Parse note files and submit them to the search index."
    )
    ingest_parser.add_argument(
        "pattern",
        nargs="?",
        default=None,
        help="Glob pattern of note files. Defaults to ingest.pattern from the configuration.",
    )
    ingest_parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Path to the notedex configuration file."
    )
    ingest_parser.add_argument(
        "--legacy",
        action="store_true",
        default=None,
        help="Read files as legacy single-author notes.",
    )
    ingest_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List notes that would be submitted without submitting.",
    )

    # search
    search_parser = subparsers.add_parser("search", help="Query the search index.")
    search_parser.add_argument("query", help="Query text.")
    search_parser.add_argument(
        "--filter",
        dest="filter_text",
        default="",
        help='Tag filter, e.g. "vim | !bash".',
    )
    search_parser.add_argument(
        "--limit", type=int, default=20, help="Maximum number of matches."
    )
    search_parser.add_argument(
        "--preview", action="store_true", help="Print the first match's body."
    )
    search_parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Path to the notedex configuration file."
    )

    # render
    render_parser = subparsers.add_parser(
        "render", help="Parse one note file and print it."
    )
    render_parser.add_argument("path", help="Note file to render.")
    render_parser.add_argument(
        "--mode",
        choices=[mode.value for mode in SerializationMode],
        default=SerializationMode.STORAGE.value,
        help="Serialization mode.",
    )

    return parser.parse_args(args)


def _configure_logging(parsed_args: argparse.Namespace) -> None:
    try:
        config_path = getattr(parsed_args, "config", None)
        if config_path:
            config = load_config_or_default(config_path)
            setup_logging(
                level=config.logging.level, structured=config.logging.structured
            )
        else:
            setup_logging()
    except Exception as e:
        # If logging setup fails, fall back to basic logging
        print(f"Warning: Failed to set up logging: {e}", file=sys.stderr)
        setup_logging(level="INFO", structured=False)


async def main_async(args: Optional[List[str]] = None) -> int:
    """
    Main async entry point for the notedex CLI tool.

    Args:
        args: Command-line arguments to parse. If None, sys.argv[1:] is used.

    Returns:
        Exit code.
    """
    parsed_args = parse_args(args)
    _configure_logging(parsed_args)

    try:
        if parsed_args.command == "ingest":
            logger.info("Starting ingest command")
            await ingest_notes_command(
                parsed_args.config,
                parsed_args.pattern,
                legacy=parsed_args.legacy,
                dry_run=parsed_args.dry_run,
            )
            logger.info("Ingest command completed successfully")
        elif parsed_args.command == "search":
            await search_notes_command(
                parsed_args.config,
                parsed_args.query,
                filter_text=parsed_args.filter_text,
                limit=parsed_args.limit,
                preview=parsed_args.preview,
            )
        elif parsed_args.command == "render":
            render_note_command(parsed_args.path, parsed_args.mode)
        else:
            logger.error("No command specified")
            parse_args(["--help"])
            return 1
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e.message}")
        return e.exit_code
    except NotedexError as e:
        logger.error(f"Error: {e.message}")
        return e.exit_code
    except Exception as e:
        logger.error(f"Unexpected error: {str(e)}", exc_info=True)
        return 1

    return 0


def main(args: Optional[List[str]] = None) -> int:
    """
    Main entry point for the notedex CLI tool.

    Args:
        args: Command-line arguments to parse. If None, sys.argv[1:] is used.

    Returns:
        Exit code.
    """
    try:
        return asyncio.run(main_async(args))
    except KeyboardInterrupt:
        print("Operation cancelled by user", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Unexpected error: {str(e)}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
