"""
slidemark.models - Document tree data models.

Provides dataclasses for the parsed document, its authors and sections,
and the content elements a section body is made of.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import ClassVar, Protocol, runtime_checkable


class ElementKind(Enum):
    """Kind tags of the built-in content elements."""

    TEXT = "text"
    LIST = "list"
    LINK = "link"
    SECTION = "section"
    IMAGE = "image"
    CODE = "code"


@runtime_checkable
class Element(Protocol):
    """Protocol for content elements.

    Renderers select a template by ``template_name``; the parser never
    looks inside an element produced by a registered command.
    """

    kind: ClassVar[ElementKind | str]

    @property
    def template_name(self) -> str:
        """Stable tag naming the template used to render this element."""
        ...


class _Tagged:
    kind: ClassVar[ElementKind | str]

    @property
    def template_name(self) -> str:
        kind = self.kind
        return kind.value if isinstance(kind, ElementKind) else kind


@dataclass
class Text(_Tagged):
    """
    A paragraph or a preformatted block.

    Attributes:
        lines: Raw lines of the block
        pre: True for indented blocks that must be rendered verbatim
    """

    kind: ClassVar[ElementKind] = ElementKind.TEXT

    lines: list[str] = field(default_factory=list)
    pre: bool = False


@dataclass
class BulletList(_Tagged):
    """A run of ``- `` bullet lines, markers removed."""

    kind: ClassVar[ElementKind] = ElementKind.LIST

    bullets: list[str] = field(default_factory=list)


@dataclass
class Link(_Tagged):
    """A URL with an optional display label."""

    kind: ClassVar[ElementKind] = ElementKind.LINK

    url: str
    label: str = ""


@dataclass
class Image(_Tagged):
    """
    An image reference produced by the ``.image`` command.

    A width or height of 0 means the renderer picks the size.
    """

    kind: ClassVar[ElementKind] = ElementKind.IMAGE

    url: str
    width: int = 0
    height: int = 0


@dataclass
class Code(_Tagged):
    """
    A code snippet produced by the ``.code`` and ``.play`` commands.

    Attributes:
        file_name: Source file the snippet was read from
        raw: Full contents of the source file
        lines: Selected lines with highlight markers removed
        start_line: 1-based number of the first selected line
        highlighted: 1-based numbers of highlighted lines
        play: Snippet can be run by a playground
        edit: Snippet is editable
        numbers: Line numbers are displayed
    """

    kind: ClassVar[ElementKind] = ElementKind.CODE

    file_name: str
    raw: bytes = b""
    lines: list[str] = field(default_factory=list)
    start_line: int = 1
    highlighted: list[int] = field(default_factory=list)
    play: bool = False
    edit: bool = False
    numbers: bool = False

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@dataclass
class Section(_Tagged):
    """
    A section of a document, such as a slide.

    Attributes:
        number: Path of sibling positions from the top level, e.g. [2, 1]
        title: Heading text without its markers
        elements: Body content, including nested sections
        notes: Speaker notes
        classes: CSS class names set by commands
        styles: Inline CSS declarations set by commands
    """

    kind: ClassVar[ElementKind] = ElementKind.SECTION

    number: list[int]
    title: str
    elements: list[Element] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    classes: list[str] = field(default_factory=list)
    styles: list[str] = field(default_factory=list)

    @property
    def depth(self) -> int:
        return len(self.number)

    @property
    def label(self) -> str:
        """Dotted section number, e.g. ``2.1``."""
        return ".".join(str(n) for n in self.number)

    def subsections(self) -> list[Section]:
        return [e for e in self.elements if isinstance(e, Section)]


@dataclass
class Author:
    """The person who wrote or presents the document."""

    elements: list[Element] = field(default_factory=list)


@dataclass
class Document:
    """
    A parsed present document.

    The parser builds a fresh Document for every call and never touches it
    again once returned; treat it as read-only.

    Attributes:
        title: First non-empty line of the document
        subtitle: Optional subtitle line ("" when absent)
        time: Optional timestamp (UTC)
        tags: Tags from ``Tags:`` header lines
        title_notes: Speaker notes that precede the first section
        authors: Author blocks following the header
        sections: Top-level sections
    """

    title: str = ""
    subtitle: str = ""
    time: datetime | None = None
    tags: list[str] = field(default_factory=list)
    title_notes: list[str] = field(default_factory=list)
    authors: list[Author] = field(default_factory=list)
    sections: list[Section] = field(default_factory=list)

    def iter_sections(self):
        """Yield every section, depth-first in document order."""
        stack = list(reversed(self.sections))
        while stack:
            section = stack.pop()
            yield section
            stack.extend(reversed(section.subsections()))
