"""Section parsing - the recursive core of the present format.

A section starts with a heading of ``*`` markers, one per nesting level,
followed by a space. Its body is a sequence of elements, each chosen by
the first rule that matches the line it starts on:

1. leading whitespace      preformatted block
2. ``- ``                  bullet list
3. ``: ``                  speaker note
4. one marker deeper       sub-sections (recursive)
5. ``.``                   command
6. anything else           paragraph

The body ends at a heading of the same depth or shallower, which is left
for the caller, or at end of input.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from slidemark.errors import CommandSyntaxError, UnknownCommandError
from slidemark.models import BulletList, Element, Section, Text
from slidemark.parser import ParseContext
from slidemark.parser.lines import (
    BULLET_MARKER,
    COMMAND_MARKER,
    HEADING_MARKER,
    SPEAKER_NOTE_MARKER,
    LineCursor,
    heading_prefix,
    is_heading,
    is_speaker_note,
    lesser_heading,
)

logger = logging.getLogger(__name__)

BACKGROUND_COMMAND = ".background"
ESCAPED_COMMAND = "\\" + COMMAND_MARKER

_LEADING_SPACE = re.compile(r"^\s+")


@dataclass
class _BodyState:
    """What a body rule needs besides the cursor."""

    ctx: ParseContext
    name: str
    section: Section


# A rule consumes lines starting at ``text`` and returns an element or None.
# The cursor is left after the last consumed line.
BodyRule = Callable[[str, LineCursor, _BodyState], "list[Element] | Element | None"]


def _preformatted(text: str, lines: LineCursor, state: _BodyState) -> Element | None:
    m = _LEADING_SPACE.match(text)
    if m is None or m.end() == len(text):
        # whitespace only
        return None
    indent = m.group(0)
    width = len(indent)

    block: list[str] = []
    current: str | None = text
    while current is not None and (current.startswith(indent) or current == ""):
        block.append(current[width:] if current else current)
        current = lines.next()
    lines.back()

    pre = [line.replace("\t", "    ").rstrip() for line in block]
    while pre and not pre[-1]:
        pre.pop()
    return Text(lines=pre, pre=True)


def _bullets(text: str, lines: LineCursor, state: _BodyState) -> Element:
    bullets: list[str] = []
    current: str | None = text
    while current is not None and current.startswith(BULLET_MARKER):
        bullets.append(current[len(BULLET_MARKER) :])
        current = lines.next()
    lines.back()
    return BulletList(bullets=bullets)


def _speaker_note(text: str, lines: LineCursor, state: _BodyState) -> None:
    state.section.notes.append(text[len(SPEAKER_NOTE_MARKER) :])


def _subsections(text: str, lines: LineCursor, state: _BodyState) -> list[Element]:
    lines.back()
    return list(parse_sections(state.ctx, state.name, lines, state.section.number))


def _command(text: str, lines: LineCursor, state: _BodyState) -> Element | None:
    args = text.split()
    if args[0] == BACKGROUND_COMMAND:
        if len(args) < 2:
            raise CommandSyntaxError(
                "background: missing image URL", state.name, lines.line_number
            )
        state.section.classes = ["background"]
        state.section.styles = [f"background-image: url('{args[1]}')"]
        return None

    parse_fn = state.ctx.registry.lookup(args[0])
    if parse_fn is None:
        raise UnknownCommandError(text, state.name, lines.line_number)
    logger.debug("%s:%d: dispatching %s", state.name, lines.line_number, args[0])
    return parse_fn(state.ctx, state.name, lines.line_number, text)


def _paragraph(text: str, lines: LineCursor, state: _BodyState) -> Element | None:
    paragraph: list[str] = []
    current: str | None = text
    while current is not None and current.strip():
        if current.startswith(COMMAND_MARKER):
            # A command ends the paragraph.
            lines.back()
            break
        if current.startswith(ESCAPED_COMMAND):
            current = current[1:]
        paragraph.append(current)
        current = lines.next()
    if not paragraph:
        return None
    return Text(lines=paragraph)


def _body_rules(prefix: str) -> list[tuple[Callable[[str], bool], BodyRule]]:
    """Body rules in priority order for a section whose heading is ``prefix``."""
    deeper = prefix + HEADING_MARKER + " "
    return [
        (lambda t: t[0].isspace(), _preformatted),
        (lambda t: t.startswith(BULLET_MARKER), _bullets),
        (is_speaker_note, _speaker_note),
        (lambda t: t.startswith(deeper), _subsections),
        (lambda t: t.startswith(COMMAND_MARKER), _command),
        (lambda t: True, _paragraph),
    ]


def parse_body(
    ctx: ParseContext,
    name: str,
    lines: LineCursor,
    section: Section,
) -> None:
    """Parse the body of ``section`` into its elements, notes and styles."""
    prefix = heading_prefix(section.depth)
    state = _BodyState(ctx=ctx, name=name, section=section)
    rules = _body_rules(prefix)

    text = lines.next_non_empty()
    while text is not None and not lesser_heading(text, prefix):
        for matches, rule in rules:
            if matches(text):
                result = rule(text, lines, state)
                break
        if isinstance(result, list):
            section.elements.extend(result)
        elif result is not None:
            section.elements.append(result)
        text = lines.next_non_empty()

    if is_heading(text):
        lines.back()


def parse_sections(
    ctx: ParseContext,
    name: str,
    lines: LineCursor,
    number: list[int],
) -> list[Section]:
    """Parse sibling sections one level below ``number``.

    Args:
        ctx: Parse context holding the command registry.
        name: Document name, for error messages.
        lines: Shared cursor; left before the first heading not consumed.
        number: Section number of the parent ([] for top level).

    Returns:
        The sections at this level, numbered 1, 2, ... after the parent.
    """
    prefix = heading_prefix(len(number) + 1) + " "
    sections: list[Section] = []
    index = 1
    while True:
        text = lines.next_non_empty()
        if text is None:
            break
        if not text.startswith(prefix):
            lines.back()
            break

        section = Section(number=[*number, index], title=text[len(prefix) :])
        parse_body(ctx, name, lines, section)
        sections.append(section)
        index += 1

    if sections:
        logger.debug(
            "Parsed %d section(s) at depth %d in %s", len(sections), len(number) + 1, name
        )
    return sections
