"""Document Serialization - Export Document trees to other formats.

This module provides functions to serialize a Document and its elements
to JSON-compatible dicts, JSON text, and a heading outline.
"""

from __future__ import annotations

import base64
import dataclasses
import json
from typing import Any

from slidemark.models import Author, Document, Element, Section
from slidemark.parser.lines import heading_prefix


def serialize_element(element: Element) -> dict[str, Any]:
    """Serialize a content element to a JSON-compatible dict.

    Every dict carries a ``kind`` key naming the element's template.
    Dataclass elements are mapped field for field; anything else
    contributes only its kind.

    Args:
        element: The element to serialize.

    Returns:
        Dict suitable for JSON serialization.
    """
    if isinstance(element, Section):
        return serialize_section(element)

    result: dict[str, Any] = {"kind": element.template_name}
    if not dataclasses.is_dataclass(element):
        return result

    for f in dataclasses.fields(element):
        value = getattr(element, f.name)
        if isinstance(value, bytes):
            value = base64.b64encode(value).decode("ascii")
        result[f.name] = value
    return result


def serialize_section(section: Section) -> dict[str, Any]:
    """Serialize a Section and its nested elements.

    Args:
        section: The section to serialize.

    Returns:
        Dict suitable for JSON serialization.
    """
    result: dict[str, Any] = {
        "kind": section.template_name,
        "number": list(section.number),
        "title": section.title,
        "elements": [serialize_element(e) for e in section.elements],
    }

    if section.notes:
        result["notes"] = list(section.notes)
    if section.classes:
        result["classes"] = list(section.classes)
    if section.styles:
        result["styles"] = list(section.styles)

    return result


def serialize_author(author: Author) -> dict[str, Any]:
    return {"elements": [serialize_element(e) for e in author.elements]}


def serialize_document(doc: Document) -> dict[str, Any]:
    """Serialize a Document to a JSON-compatible dict.

    Args:
        doc: The document to serialize.

    Returns:
        Dict with title, subtitle, time (ISO 8601 or None), tags,
        title_notes, authors and sections.
    """
    return {
        "title": doc.title,
        "subtitle": doc.subtitle,
        "time": doc.time.isoformat() if doc.time else None,
        "tags": list(doc.tags),
        "title_notes": list(doc.title_notes),
        "authors": [serialize_author(a) for a in doc.authors],
        "sections": [serialize_section(s) for s in doc.sections],
    }


def document_to_json(doc: Document, indent: int | None = 2) -> str:
    """Serialize a Document to JSON text."""
    return json.dumps(serialize_document(doc), indent=indent, ensure_ascii=False)


def outline(doc: Document) -> str:
    """Render the section headings of a document, depth-first.

    Each heading is written with one marker per level, as in the source,
    so parsing the outline below a header gives back the same section
    titles and numbers.

    Args:
        doc: The document whose sections to list.

    Returns:
        One line per section.
    """
    return "\n".join(
        f"{heading_prefix(section.depth)} {section.title}"
        for section in doc.iter_sections()
    )
