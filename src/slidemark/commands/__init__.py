"""
slidemark.commands - CLI command implementations
"""

__all__ = [
    "completion",
    "lessons_cmd",
    "parse_cmd",
]
