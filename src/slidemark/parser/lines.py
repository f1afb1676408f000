"""LineCursor - sequential reader over the lines of a document.

Also holds the line-level markers of the present format and the small
predicates built on them.
"""

from __future__ import annotations

import io
import re
from collections.abc import Iterable
from typing import IO

from slidemark.errors import CursorError

COMMENT_MARKER = "#"
HEADING_MARKER = "*"
SPEAKER_NOTE_MARKER = ": "
COMMAND_MARKER = "."
BULLET_MARKER = "- "

HEADING_PATTERN = re.compile(r"^\*+ ")


def is_speaker_note(text: str) -> bool:
    return text.startswith(SPEAKER_NOTE_MARKER)


def is_heading(text: str | None) -> bool:
    return text is not None and HEADING_PATTERN.match(text) is not None


def heading_prefix(depth: int) -> str:
    """Marker string for a heading at ``depth`` (1 = top level)."""
    return HEADING_MARKER * depth


def lesser_heading(text: str, prefix: str) -> bool:
    """True if ``text`` is a heading at the same depth as ``prefix`` or shallower."""
    return is_heading(text) and not text.startswith(prefix + HEADING_MARKER)


def read_lines(source: str | IO[str] | Iterable[str]) -> list[str]:
    """Split a document into lines without their line endings."""
    if isinstance(source, str):
        source = io.StringIO(source)
    return [line.rstrip("\r\n") for line in source]


class LineCursor:
    """Cursor over an immutable sequence of lines.

    ``next()`` skips full-line comments. ``back()`` undoes the most recent
    read; the cursor only ever needs one step of pushback, so a second
    ``back()`` without a read in between raises CursorError.
    """

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines = tuple(lines)
        self._pos = 0
        self._can_back = False

    @property
    def line_number(self) -> int:
        """1-based number of the line most recently returned by ``next()``."""
        return min(self._pos, len(self._lines))

    @property
    def at_end(self) -> bool:
        return self._pos >= len(self._lines)

    def next(self) -> str | None:
        """Return the next non-comment line, or None at end of input."""
        self._can_back = True
        while True:
            current = self._pos
            if current >= len(self._lines):
                # one past the end, so back() returns to the last line
                self._pos = len(self._lines) + 1
                return None
            self._pos += 1
            text = self._lines[current]
            if not text.startswith(COMMENT_MARKER):
                return text

    def back(self) -> None:
        """Push the most recently read line back."""
        if not self._can_back:
            raise CursorError("cannot back up more than one line")
        self._can_back = False
        self._pos -= 1

    def next_non_empty(self) -> str | None:
        """Return the next non-empty, non-comment line, or None at end of input."""
        while True:
            text = self.next()
            if text is None or text:
                return text

    def peek(self) -> str | None:
        """Return the next line without consuming it."""
        pos, can_back = self._pos, self._can_back
        text = self.next()
        self._pos, self._can_back = pos, can_back
        return text
