"""Parser infrastructure - command registry and parse context.

Section bodies are parsed by a fixed set of line rules. Lines starting
with ``.`` name a command; commands are looked up in a CommandRegistry so
new element kinds can be added without touching the section parser.

Exports:
- ParseFunc: Signature of a command parse function
- ParseContext: Context passed to command parse functions
- ParseMode: Flags selecting how much of a document to parse
- CommandRegistry: Maps command names to parse functions
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from slidemark.errors import RegistrationError

if TYPE_CHECKING:
    from slidemark.models import Element

# Names may not start with these; ";" is kept free for future use.
RESERVED_PREFIXES = (".", ";")

# Handled by the section parser itself.
RESERVED_NAMES = frozenset({"background"})


def _read_bytes(path: str) -> bytes:
    return Path(path).read_bytes()


class ParseMode(enum.IntFlag):
    """Flags controlling how much of a document is parsed."""

    FULL = 0
    # Parse only title, subtitle, time and tags.
    TITLES_ONLY = 1


@dataclass
class ParseContext:
    """Context passed to command parse functions.

    Attributes:
        registry: Commands available to the section parser.
        read_file: Loads a file referenced by a command (path -> bytes).
        play_enabled: Whether ``.play`` snippets are runnable.
        config: Free-form configuration for command parse functions.
    """

    registry: CommandRegistry = field(default_factory=lambda: CommandRegistry())
    read_file: Callable[[str], bytes] = _read_bytes
    play_enabled: bool = False
    config: dict[str, Any] = field(default_factory=dict)


# (context, file_name, line_number, raw_line) -> element or None
ParseFunc = Callable[[ParseContext, str, int, str], Optional["Element"]]


class CommandRegistry:
    """Registry mapping command names to parse functions.

    Names are registered without the leading period and looked up with
    it, so ``register("image", fn)`` handles ``.image`` lines. Populate a
    registry before parsing starts; it is not modified during a parse.
    """

    def __init__(self) -> None:
        self._parsers: dict[str, ParseFunc] = {}

    def register(self, name: str, parse_fn: ParseFunc) -> None:
        """Register a parse function for a command.

        Args:
            name: Command name without the leading period.
            parse_fn: Called with (context, file_name, line_number, line).

        Raises:
            RegistrationError: If the name is empty or reserved.
        """
        if not name or name.startswith(RESERVED_PREFIXES) or name in RESERVED_NAMES:
            raise RegistrationError(f"bad name in register: {name!r}")
        self._parsers["." + name] = parse_fn

    def lookup(self, command: str) -> ParseFunc | None:
        """Find the parse function for a command word such as ``.image``."""
        return self._parsers.get(command)

    def names(self) -> list[str]:
        """Registered names, without periods, sorted."""
        return sorted(key[1:] for key in self._parsers)

    def __contains__(self, command: object) -> bool:
        return command in self._parsers

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._parsers)


__all__ = [
    "CommandRegistry",
    "ParseContext",
    "ParseFunc",
    "ParseMode",
    "RESERVED_NAMES",
    "RESERVED_PREFIXES",
]
