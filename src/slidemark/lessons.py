"""
slidemark.lessons - Load a directory of lesson documents.

Each ``*.article`` file in the content directory is parsed and turned
into a Lesson: one Page per top-level section, each listing the runnable
``.play`` files it shows so clients can fetch and cache them.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Iterator

from slidemark.config.loader import ConfigLoader, merge_configs
from slidemark.errors import ParseError
from slidemark.models import Code, Element, Section
from slidemark.parser.document import DocumentParser
from slidemark.serialize import serialize_section
from slidemark.utilities.hasher import calculate_hash

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".article"


@dataclass
class LessonFile:
    """A runnable code file shown on a page."""

    name: str
    content: str
    hash: str


@dataclass
class Page:
    """One top-level section of a lesson."""

    title: str
    content: dict[str, Any] = field(default_factory=dict)
    files: list[LessonFile] = field(default_factory=list)


@dataclass
class Lesson:
    title: str
    description: str
    pages: list[Page] = field(default_factory=list)


class LessonLoadError(Exception):
    """A lesson file could not be parsed."""

    def __init__(self, path: Path, cause: Exception) -> None:
        super().__init__(f"parsing {path.name}: {cause}")
        self.path = path
        self.cause = cause


def find_play_code(element: Element) -> Iterator[Code]:
    """Yield the runnable snippets in an element tree, in document order."""
    if isinstance(element, Code):
        if element.play:
            yield element
    elif isinstance(element, Section):
        for child in element.elements:
            yield from find_play_code(child)


def lesson_files(section: Section) -> list[LessonFile]:
    return [
        LessonFile(
            name=code.file_name,
            content=code.raw.decode("utf-8", errors="replace"),
            hash=calculate_hash(code.raw),
        )
        for code in find_play_code(section)
    ]


def lesson_parser(config: dict[str, Any] | None = None) -> DocumentParser:
    """A DocumentParser with runnable ``.play`` snippets enabled."""
    config = merge_configs(config or {}, {"parser": {"play_enabled": True}})
    return DocumentParser.from_config(config)


def parse_lesson(path: Path, parser: DocumentParser | None = None) -> Lesson:
    """
    Parse one lesson file.

    Args:
        path: Path to the ``.article`` file
        parser: Parser to use; defaults to lesson_parser()

    Returns:
        The Lesson built from the document's title, subtitle and sections
    """
    parser = parser or lesson_parser()
    doc = parser.parse_file(path)
    pages = [
        Page(title=section.title, content=serialize_section(section), files=lesson_files(section))
        for section in doc.sections
    ]
    return Lesson(title=doc.title, description=doc.subtitle, pages=pages)


def load_lessons(
    content_dir: Path, config: dict[str, Any] | None = None
) -> dict[str, Lesson]:
    """
    Parse every lesson file in a directory.

    Args:
        content_dir: Directory holding the lesson files
        config: Loaded configuration; ``lessons.extension`` picks the suffix

    Returns:
        Lessons keyed by file name without the extension, sorted by name

    Raises:
        LessonLoadError: If any file fails to parse
    """
    config = config or {}
    extension = ConfigLoader.from_dict(config).get("lessons.extension", DEFAULT_EXTENSION)
    parser = lesson_parser(config)

    lessons: dict[str, Lesson] = {}
    for path in sorted(Path(content_dir).iterdir()):
        if not path.is_file() or path.suffix != extension:
            continue
        try:
            lessons[path.stem] = parse_lesson(path, parser)
        except ParseError as e:
            raise LessonLoadError(path, e) from e
        logger.debug("Loaded lesson %s (%d pages)", path.stem, len(lessons[path.stem].pages))

    logger.info("Loaded %d lesson(s) from %s", len(lessons), content_dir)
    return lessons


def lesson_to_json(lesson: Lesson, indent: int | None = None) -> str:
    """Encode a lesson as JSON."""
    return json.dumps(asdict(lesson), indent=indent, ensure_ascii=False)
