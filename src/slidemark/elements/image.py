"""The ``.image`` command.

    .image URL
    .image URL HEIGHT WIDTH

Either dimension may be ``_`` to let the renderer choose it.
"""

from __future__ import annotations

from slidemark.errors import CommandSyntaxError
from slidemark.models import Image
from slidemark.parser import ParseContext

AUTO = "_"


def parse_dimension(value: str, file_name: str, line_number: int) -> int:
    if value == AUTO:
        return 0
    try:
        size = int(value)
    except ValueError:
        raise CommandSyntaxError(
            f"image: bad dimension {value!r}", file_name, line_number
        ) from None
    if size < 0:
        raise CommandSyntaxError(f"image: negative dimension {value!r}", file_name, line_number)
    return size


def parse_image(ctx: ParseContext, file_name: str, line_number: int, text: str) -> Image:
    """Parse an ``.image`` line into an Image element."""
    args = text.split()
    if len(args) not in (2, 4):
        raise CommandSyntaxError(f"incorrect image invocation: {text!r}", file_name, line_number)

    image = Image(url=args[1])
    if len(args) == 4:
        image.height = parse_dimension(args[2], file_name, line_number)
        image.width = parse_dimension(args[3], file_name, line_number)
    return image
