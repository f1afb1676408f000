"""
slidemark.commands.lessons_cmd - Build lesson JSON from a content directory.

Writes one JSON object mapping lesson names to lessons, to stdout or a file.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict

from slidemark.commands.parse_cmd import load_configuration
from slidemark.lessons import LessonLoadError, load_lessons


def run(args: argparse.Namespace) -> int:
    """Run the lessons command."""
    config = load_configuration(args)
    if config is None:
        return 1

    if not args.content_dir.is_dir():
        print(f"Error: {args.content_dir} is not a directory", file=sys.stderr)
        return 1

    try:
        lessons = load_lessons(args.content_dir, config)
    except LessonLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    output = json.dumps(
        {name: asdict(lesson) for name, lesson in lessons.items()},
        indent=2,
        ensure_ascii=False,
    )
    if args.output:
        args.output.write_text(output + "\n", encoding="utf-8")
        if not args.quiet:
            print(f"Wrote {len(lessons)} lesson(s) to {args.output}")
    else:
        print(output)
    return 0
