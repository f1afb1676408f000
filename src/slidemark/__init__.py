"""
slidemark - Parser for the present slide and lesson format

slidemark reads plain-text present documents (a title header, author
blocks, and ``*``-marked nested sections holding paragraphs, bullet
lists, preformatted blocks and ``.command`` elements) into a document
tree that renderers and lesson servers can consume.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("slidemark")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from slidemark.errors import (
    ParseError,
    StructuralError,
    UnexpectedHeaderLineError,
    UnknownCommandError,
)
from slidemark.models import Author, BulletList, Code, Document, Image, Link, Section, Text
from slidemark.parser import CommandRegistry, ParseContext, ParseMode
from slidemark.parser.document import DocumentParser, parse, parse_file

__all__ = [
    "__version__",
    "Author",
    "BulletList",
    "Code",
    "CommandRegistry",
    "Document",
    "DocumentParser",
    "Image",
    "Link",
    "ParseContext",
    "ParseError",
    "ParseMode",
    "Section",
    "StructuralError",
    "Text",
    "UnexpectedHeaderLineError",
    "UnknownCommandError",
    "parse",
    "parse_file",
]
