"""
slidemark.cli - Command-line interface.

Main entry point for the slidemark CLI tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from slidemark import __version__
from slidemark.commands import completion, lessons_cmd, parse_cmd


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="slidemark",
        description="Parse present slide and lesson documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  slidemark parse talk.slide                 # Summary of a document
  slidemark parse talk.slide --format json   # Full document tree as JSON
  slidemark parse talk.slide --format outline
  slidemark parse talk.slide --titles-only   # Header only
  slidemark lessons content/ -o lessons.json # Build lesson JSON

Configuration:
  .slidemark.toml in the current directory or a parent, e.g.

    [parser]
    profile_url = "https://twitter.com/"
    play_enabled = true

For detailed command help: slidemark <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"slidemark {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # parse command
    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse a document and print it",
    )
    parse_parser.add_argument(
        "file",
        type=Path,
        help="Document to parse ('-' for stdin)",
    )
    parse_parser.add_argument(
        "--format",
        choices=parse_cmd.FORMATS,
        default="summary",
        help="Output format (default: summary)",
    )
    parse_parser.add_argument(
        "--titles-only",
        action="store_true",
        help="Parse only the title, subtitle, time and tags",
    )

    # lessons command
    lessons_parser = subparsers.add_parser(
        "lessons",
        help="Build lesson JSON from a directory of lesson files",
    )
    lessons_parser.add_argument(
        "content_dir",
        type=Path,
        help="Directory holding the lesson files",
    )
    lessons_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write JSON to this file instead of stdout",
        metavar="FILE",
    )

    # completion command
    completion_parser = subparsers.add_parser(
        "completion",
        help="Shell tab-completion setup",
    )
    completion_parser.add_argument(
        "--shell",
        choices=completion.SHELLS,
        help="Target shell (default: detected from $SHELL)",
    )
    completion_parser.add_argument(
        "--install",
        action="store_true",
        help="Append the activation line to the shell rc file",
    )

    return parser


def configure_logging(args: argparse.Namespace) -> None:
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("slidemark").setLevel(level)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install slidemark[completion]
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)

    # Handle no command
    if not args.command:
        parser.print_help()
        return 0

    configure_logging(args)

    try:
        if args.command == "parse":
            return parse_cmd.run(args)
        elif args.command == "lessons":
            return lessons_cmd.run(args)
        elif args.command == "completion":
            return completion.run(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
