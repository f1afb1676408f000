"""The ``.code`` and ``.play`` commands.

    .code [-edit] [-numbers] FILE [ADDRESS] [HLtag]
    .play [-edit] [-numbers] FILE [ADDRESS] [HLtag]

FILE is resolved against the directory of the document. ADDRESS selects
lines: ``N``, ``N,M``, ``/regexp/`` or ``/start/,/end/``; without it the
whole file is used. Source lines ending in ``// HLtag`` are highlighted
when the command names the same tag; the marker is always removed.
"""

from __future__ import annotations

import logging
import os
import re

from slidemark.errors import CommandSyntaxError, ParseError
from slidemark.models import Code
from slidemark.parser import ParseContext

logger = logging.getLogger(__name__)

CODE_PATTERN = re.compile(r"^\.(code|play)\s+((?:(?:-edit|-numbers)\s+)*)(\S+)(?:\s+(.*))?$")
HIGHLIGHT_PATTERN = re.compile(r"\s+HL([a-zA-Z0-9_]+)?$")
HL_COMMENT_PATTERN = re.compile(r"(.+) // HL(.*)$")

_ADDRESS_ITEM = r"(?:\d+|/(?:[^/\\]|\\.)*/)"
ADDRESS_PATTERN = re.compile(rf"^({_ADDRESS_ITEM})(?:,({_ADDRESS_ITEM}))?$")


def _resolve_item(item: str, lines: list[str], start: int) -> int:
    """1-based line number addressed by ``item``, searching from ``start``."""
    if item.isdigit():
        number = int(item)
        if not 1 <= number <= len(lines):
            raise ValueError(f"line {number} out of range")
        return number
    pattern = re.compile(item[1:-1])
    for number in range(start, len(lines) + 1):
        if pattern.search(lines[number - 1]):
            return number
    raise ValueError(f"no match for {item}")


def select_lines(lines: list[str], address: str | None) -> tuple[int, int]:
    """Resolve an address to an inclusive 1-based (start, end) range.

    Raises:
        ValueError: If the address is malformed or matches nothing.
    """
    if not address:
        return 1, len(lines)
    m = ADDRESS_PATTERN.match(address)
    if m is None:
        raise ValueError(f"bad address {address!r}")
    start = _resolve_item(m.group(1), lines, 1)
    end = start if m.group(2) is None else _resolve_item(m.group(2), lines, start)
    if end < start:
        raise ValueError(f"address {address!r} ends before it starts")
    return start, end


def strip_highlights(
    lines: list[str], first_number: int, tag: str | None
) -> tuple[list[str], list[int]]:
    """Remove ``// HL`` markers, returning the lines and highlighted numbers."""
    cleaned: list[str] = []
    highlighted: list[int] = []
    for offset, line in enumerate(lines):
        m = HL_COMMENT_PATTERN.match(line)
        if m:
            line = m.group(1)
            if tag is not None and m.group(2) == tag:
                highlighted.append(first_number + offset)
        cleaned.append(line)
    return cleaned, highlighted


def parse_code(ctx: ParseContext, file_name: str, line_number: int, text: str) -> Code:
    """Parse a ``.code`` or ``.play`` line into a Code element."""
    tag = None
    hl = HIGHLIGHT_PATTERN.search(text)
    if hl:
        tag = hl.group(1) or ""
        text = text[: hl.start()]

    m = CODE_PATTERN.match(text)
    if m is None:
        raise CommandSyntaxError(f"syntax error in {text!r}", file_name, line_number)
    command, flags, source, address = m.groups()

    path = os.path.join(os.path.dirname(file_name), source)
    try:
        raw = ctx.read_file(path)
    except OSError as e:
        raise ParseError(f"read {path}: {e}", file_name, line_number) from e

    source_lines = raw.decode("utf-8", errors="replace").splitlines()
    try:
        start, end = select_lines(source_lines, address.strip() if address else None)
    except (ValueError, re.error) as e:
        raise CommandSyntaxError(f"{source}: {e}", file_name, line_number) from e

    selected, highlighted = strip_highlights(source_lines[start - 1 : end], start, tag)
    logger.debug("%s:%d: %s %s lines %d-%d", file_name, line_number, command, source, start, end)
    return Code(
        file_name=source,
        raw=raw,
        lines=selected,
        start_line=start,
        highlighted=highlighted,
        play=command == "play" and ctx.play_enabled,
        edit="-edit" in flags.split(),
        numbers="-numbers" in flags.split(),
    )
