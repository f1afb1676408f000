"""Built-in command elements.

Exports:
- parse_image: ``.image`` command
- parse_code: ``.code`` and ``.play`` commands
- register_builtin_commands: Adds them to a registry
- default_registry: A new registry with them registered
"""

from __future__ import annotations

from slidemark.elements.code import parse_code
from slidemark.elements.image import parse_image
from slidemark.parser import CommandRegistry


def register_builtin_commands(registry: CommandRegistry) -> CommandRegistry:
    registry.register("image", parse_image)
    registry.register("code", parse_code)
    registry.register("play", parse_code)
    return registry


def default_registry() -> CommandRegistry:
    return register_builtin_commands(CommandRegistry())


__all__ = [
    "default_registry",
    "parse_code",
    "parse_image",
    "register_builtin_commands",
]
