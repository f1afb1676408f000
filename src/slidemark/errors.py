"""
slidemark.errors - Exceptions raised while parsing present documents.

Every fatal condition derives from ParseError and carries the name of the
document and, where known, the 1-based line number that triggered it.
"""

from __future__ import annotations


class ParseError(Exception):
    """Base class for fatal parse errors."""

    def __init__(
        self,
        message: str,
        file_name: str | None = None,
        line_number: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.file_name = file_name
        self.line_number = line_number

    def __str__(self) -> str:
        if self.file_name and self.line_number:
            return f"{self.file_name}:{self.line_number}: {self.message}"
        if self.file_name:
            return f"{self.file_name}: {self.message}"
        return self.message


class StructuralError(ParseError):
    """Input ended or was shaped wrongly where structure was expected."""


class MissingTitleError(StructuralError):
    """The document has no title line."""


class UnexpectedEOFError(StructuralError):
    """Input ended while the header or author block was still open."""


class InvalidEncodingError(StructuralError):
    """A document file is not valid UTF-8."""


class UnexpectedHeaderLineError(ParseError):
    """A header line matched no known form after the subtitle was set."""


class UnknownCommandError(ParseError):
    """A command line named a command with no registered handler."""

    def __init__(
        self,
        command: str,
        file_name: str | None = None,
        line_number: int | None = None,
    ) -> None:
        super().__init__(f"unknown command {command!r}", file_name, line_number)
        self.command = command


class CommandSyntaxError(ParseError):
    """A command line had arguments its handler cannot accept."""


class MalformedURLError(ValueError):
    """A link could not be parsed as a URL.

    Recovered locally by the author parser, which falls back to plain text.
    """


class RegistrationError(ValueError):
    """A command was registered under an invalid or reserved name."""


class CursorError(RuntimeError):
    """The line cursor was rewound more than one step."""


__all__ = [
    "CommandSyntaxError",
    "CursorError",
    "InvalidEncodingError",
    "MalformedURLError",
    "MissingTitleError",
    "ParseError",
    "RegistrationError",
    "StructuralError",
    "UnexpectedEOFError",
    "UnexpectedHeaderLineError",
    "UnknownCommandError",
]
