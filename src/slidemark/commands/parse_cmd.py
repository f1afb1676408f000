"""
slidemark.commands.parse_cmd - Parse a document and print its tree.

Prints the document as JSON, as a heading outline, or as a short summary.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from slidemark.config import ConfigError, find_config_file, load_config
from slidemark.errors import ParseError
from slidemark.models import Document
from slidemark.parser import ParseMode
from slidemark.parser.document import DocumentParser
from slidemark.parser.header import format_time
from slidemark.serialize import document_to_json, outline

FORMATS = ("json", "outline", "summary")


def load_configuration(args: argparse.Namespace) -> dict[str, Any] | None:
    """Load configuration from --config, a discovered file, or the defaults."""
    config_path = getattr(args, "config", None) or find_config_file(Path.cwd())
    try:
        return load_config(config_path)
    except ConfigError as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return None


def format_summary(doc: Document) -> str:
    lines = [doc.title]
    if doc.subtitle:
        lines.append(doc.subtitle)
    if doc.time:
        lines.append(format_time(doc.time))
    if doc.tags:
        lines.append("Tags: " + ", ".join(doc.tags))
    lines.append(f"{len(doc.authors)} author(s), {sum(1 for _ in doc.iter_sections())} section(s)")
    return "\n".join(lines)


def run(args: argparse.Namespace) -> int:
    """
    Run the parse command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, 1 for parse or config errors)
    """
    config = load_configuration(args)
    if config is None:
        return 1

    parser = DocumentParser.from_config(config)
    mode = ParseMode.TITLES_ONLY if args.titles_only else ParseMode.FULL

    try:
        if str(args.file) == "-":
            doc = parser.parse(sys.stdin, "<stdin>", mode)
        else:
            doc = parser.parse_file(args.file, mode)
    except ParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error reading {args.file}: {e}", file=sys.stderr)
        return 1

    if args.format == "json":
        print(document_to_json(doc))
    elif args.format == "outline":
        print(outline(doc))
    else:
        print(format_summary(doc))
    return 0
