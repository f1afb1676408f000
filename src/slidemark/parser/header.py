"""Header parsing - title, subtitle, time and tags.

The header is the run of lines from the title up to the first blank
line. Besides the title it may hold, in any order, a subtitle, a time,
``Tags:`` lines and speaker notes.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone

from slidemark.errors import MissingTitleError, UnexpectedEOFError, UnexpectedHeaderLineError
from slidemark.models import Document
from slidemark.parser.lines import (
    HEADING_MARKER,
    SPEAKER_NOTE_MARKER,
    LineCursor,
    is_speaker_note,
)

TAG_PREFIX = "Tags:"

# Month names are always English, whatever the process locale.
MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# "15:04 2 Jan 2006" or "2 Jan 2006"
TIME_PATTERN = re.compile(r"^(?:(\d{1,2}):(\d{2}) )?(\d{1,2}) ([A-Za-z]{3}) (\d{4})$")

# At 11:00 UTC it is the same calendar date in every timezone.
DATE_ONLY_HOUR = 11

_MONTH_NUMBERS = {name.lower(): number for number, name in enumerate(MONTHS, start=1)}


def parse_time(text: str) -> datetime | None:
    """Parse a header time line.

    Accepts ``15:04 2 Jan 2006`` or ``2 Jan 2006``. A date without a time
    is placed at 11:00 UTC.

    Returns:
        The timestamp in UTC, or None if ``text`` is neither form.
    """
    m = TIME_PATTERN.match(text)
    if m is None:
        return None
    hour, minute, day, month_name, year = m.groups()
    month = _MONTH_NUMBERS.get(month_name.lower())
    if month is None:
        return None
    if hour is None:
        hour, minute = DATE_ONLY_HOUR, 0
    try:
        return datetime(int(year), month, int(day), int(hour), int(minute), tzinfo=timezone.utc)
    except ValueError:
        return None


def format_time(when: datetime) -> str:
    """Format a timestamp the way a header time line is written."""
    return f"{when:%H:%M} {when.day:02d} {MONTHS[when.month - 1]} {when.year}"


def parse_tags(text: str) -> list[str]:
    """Split the value of a ``Tags:`` line on commas."""
    return [tag.strip() for tag in text[len(TAG_PREFIX) :].split(",")]


def collect_title_notes(lines: list[str]) -> list[str]:
    """Speaker notes found before the first heading line."""
    notes: list[str] = []
    for text in lines:
        if text.startswith(HEADING_MARKER):
            break
        if is_speaker_note(text):
            notes.append(text[len(SPEAKER_NOTE_MARKER) :])
    return notes


def parse_header(doc: Document, lines: LineCursor, name: str = "") -> None:
    """Fill in the header fields of ``doc``.

    Consumes the title line and every following line up to and including
    the first blank line.

    Args:
        doc: Document to populate.
        lines: Cursor positioned at the start of the document.
        name: Document name, for error messages.

    Raises:
        MissingTitleError: If the input has no non-empty line.
        UnexpectedEOFError: If input ends before the blank line.
        UnexpectedHeaderLineError: If a second unrecognised line appears.
    """
    title = lines.next_non_empty()
    if title is None:
        raise MissingTitleError("unexpected EOF; expected title", name, lines.line_number)
    doc.title = title

    while True:
        text = lines.next()
        if text is None:
            raise UnexpectedEOFError(
                "unexpected EOF; expected blank line after header", name, lines.line_number
            )
        if not text:
            break
        if is_speaker_note(text):
            continue

        if text.startswith(TAG_PREFIX):
            doc.tags.extend(parse_tags(text))
            continue

        when = parse_time(text)
        if when is not None:
            doc.time = when
        elif not doc.subtitle:
            doc.subtitle = text
        else:
            raise UnexpectedHeaderLineError(
                f"unexpected header line: {text!r}", name, lines.line_number
            )
