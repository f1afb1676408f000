"""DocumentParser - parses a whole present document.

Runs the header parser, then (unless only titles are wanted) the author
parser and the section parser over a single LineCursor.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Any

from slidemark.config import ConfigLoader
from slidemark.errors import InvalidEncodingError
from slidemark.models import Document
from slidemark.parser import CommandRegistry, ParseContext, ParseMode
from slidemark.parser.authors import DEFAULT_PROFILE_URL, parse_authors
from slidemark.parser.header import collect_title_notes, parse_header
from slidemark.parser.lines import LineCursor, read_lines
from slidemark.parser.sections import parse_sections

logger = logging.getLogger(__name__)


class DocumentParser:
    """
    Parses present documents into Document trees.

    A parser owns a ParseContext whose command registry is fixed when the
    parser is built. One parser may be used for many documents; every call
    gets its own cursor and Document.
    """

    def __init__(
        self,
        context: ParseContext | None = None,
        profile_url: str = DEFAULT_PROFILE_URL,
    ):
        """
        Initialize parser.

        Args:
            context: Context handed to command parse functions. Defaults to
                one with the built-in image and code commands registered.
            profile_url: Base URL for ``@name`` author lines
        """
        if context is None:
            from slidemark.elements import default_registry

            context = ParseContext(registry=default_registry())
        self.context = context
        self.profile_url = profile_url

    @classmethod
    def from_config(
        cls, config: dict[str, Any], registry: CommandRegistry | None = None
    ) -> DocumentParser:
        """Build a parser from a loaded configuration dict."""
        if registry is None:
            from slidemark.elements import default_registry

            registry = default_registry()
        settings = ConfigLoader.from_dict(config)
        context = ParseContext(
            registry=registry,
            play_enabled=bool(settings.get("parser.play_enabled", False)),
            config=config,
        )
        return cls(context, profile_url=settings.get("parser.profile_url", DEFAULT_PROFILE_URL))

    def parse(
        self,
        source: str | IO[str],
        name: str = "",
        mode: ParseMode = ParseMode.FULL,
    ) -> Document:
        """
        Parse a document.

        Args:
            source: Document text or a text stream
            name: Document name used in error messages and by commands
                that read files relative to the document
            mode: ParseMode.TITLES_ONLY stops after the header

        Returns:
            The parsed Document

        Raises:
            ParseError: On any fatal error; no partial document is returned
            InvalidEncodingError: If a stream yields bytes that are not UTF-8
        """
        try:
            text_lines = read_lines(source)
        except UnicodeDecodeError as e:
            raise InvalidEncodingError(f"not valid UTF-8: {e.reason}", name or None) from e
        lines = LineCursor(text_lines)

        doc = Document()
        doc.title_notes = collect_title_notes(text_lines)
        parse_header(doc, lines, name)

        if mode & ParseMode.TITLES_ONLY:
            return doc

        doc.authors = parse_authors(lines, name, self.profile_url)
        doc.sections = parse_sections(self.context, name, lines, [])
        logger.debug(
            "Parsed %s: %r, %d author(s), %d top-level section(s)",
            name or "<input>",
            doc.title,
            len(doc.authors),
            len(doc.sections),
        )
        return doc

    def parse_file(self, path: Path | str, mode: ParseMode = ParseMode.FULL) -> Document:
        """
        Parse a document file.

        Args:
            path: Path to the document (read as UTF-8)
            mode: Parse mode

        Returns:
            The parsed Document
        """
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            return self.parse(f, str(path), mode)


def parse(
    source: str | IO[str],
    name: str = "",
    mode: ParseMode = ParseMode.FULL,
) -> Document:
    """Parse a document with the default commands registered."""
    return DocumentParser().parse(source, name, mode)


def parse_file(path: Path | str, mode: ParseMode = ParseMode.FULL) -> Document:
    """Parse a document file with the default commands registered."""
    return DocumentParser().parse_file(path, mode)
