"""Author block parsing.

Authors follow the header and run up to the first section heading.
Each author is a paragraph; a blank line starts the next one. Lines are
classified, first match wins:

- ``@name``            social profile link
- contains ``:``       URL
- contains ``@``       email address (mailto link)
- anything else        plain text
"""

from __future__ import annotations

import logging
from urllib.parse import urlsplit

from slidemark.errors import MalformedURLError, UnexpectedEOFError
from slidemark.models import Author, Element, Link, Text
from slidemark.parser.lines import HEADING_MARKER, LineCursor, is_speaker_note

logger = logging.getLogger(__name__)

DEFAULT_PROFILE_URL = "http://twitter.com/"

_TOP_HEADING = HEADING_MARKER + " "


def parse_url(text: str) -> Link:
    """Parse ``text`` into a Link.

    Raises:
        MalformedURLError: If ``text`` is not a valid URL.
    """
    try:
        parts = urlsplit(text)
        # Accessing the port validates it.
        parts.port
    except ValueError as e:
        raise MalformedURLError(f"parse {text!r}: {e}") from e
    if not parts.scheme and ":" in parts.path.split("/", 1)[0]:
        raise MalformedURLError(f"parse {text!r}: first path segment in URL cannot contain colon")
    return Link(url=parts.geturl())


def classify_author_line(text: str, profile_url: str = DEFAULT_PROFILE_URL) -> Element:
    """Turn one author line into a Link or Text element."""
    if text.startswith("@"):
        candidate = profile_url + text[1:]
    elif ":" in text:
        candidate = text
    elif "@" in text:
        candidate = "mailto:" + text
    else:
        return Text(lines=[text])

    try:
        link = parse_url(candidate)
    except MalformedURLError as e:
        logger.warning("%s", e)
        return Text(lines=[text])
    link.label = text
    return link


def parse_authors(
    lines: LineCursor,
    name: str = "",
    profile_url: str = DEFAULT_PROFILE_URL,
) -> list[Author]:
    """Parse the author block.

    Args:
        lines: Cursor positioned after the header's blank line.
        name: Document name, for error messages.
        profile_url: Base URL for ``@name`` lines.

    Returns:
        Authors in order, including one left open by the heading.

    Raises:
        UnexpectedEOFError: If input ends before the first section heading.
    """
    if lines.next_non_empty() is None:
        raise UnexpectedEOFError("unexpected EOF; expected authors", name, lines.line_number)
    lines.back()

    authors: list[Author] = []
    current: Author | None = None
    while True:
        text = lines.next()
        if text is None:
            raise UnexpectedEOFError(
                "unexpected EOF; expected section heading", name, lines.line_number
            )
        if text.startswith(_TOP_HEADING):
            lines.back()
            break
        if is_speaker_note(text):
            continue
        if not text:
            if current is not None:
                authors.append(current)
                current = None
            continue

        if current is None:
            current = Author()
        current.elements.append(classify_author_line(text, profile_url))

    if current is not None:
        authors.append(current)
    logger.debug("Parsed %d author(s) in %s", len(authors), name)
    return authors
