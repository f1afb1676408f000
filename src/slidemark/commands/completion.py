"""
slidemark.commands.completion - Shell tab-completion setup.

Prints or installs the argcomplete activation line for the user's shell.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

SHELLS = ("bash", "zsh", "fish", "tcsh")

_MARKER = "# slidemark shell completion"

_ACTIVATION = {
    "bash": 'eval "$(register-python-argcomplete slidemark)"',
    "zsh": 'eval "$(register-python-argcomplete slidemark)"',
    "fish": "register-python-argcomplete --shell fish slidemark | source",
    "tcsh": "eval `register-python-argcomplete --shell tcsh slidemark`",
}

_RC_FILES = {
    "bash": Path(".bashrc"),
    "zsh": Path(".zshrc"),
    "fish": Path(".config") / "fish" / "config.fish",
    "tcsh": Path(".tcshrc"),
}


def argcomplete_available() -> bool:
    try:
        import argcomplete  # noqa: F401
    except ImportError:
        return False
    return True


def detect_shell() -> str:
    """Shell named by $SHELL, falling back to bash."""
    name = Path(os.environ.get("SHELL", "")).name
    return name if name in SHELLS else "bash"


def rc_file(shell: str, home: Path | None = None) -> Path:
    return (home or Path.home()) / _RC_FILES.get(shell, _RC_FILES["bash"])


def install(shell: str, home: Path | None = None) -> int:
    """Append the activation line to the shell's rc file once."""
    path = rc_file(shell, home)
    if path.exists() and _MARKER in path.read_text(encoding="utf-8"):
        print(f"Completion already installed in {path}")
        return 0
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as f:
            f.write(f"\n{_MARKER}\n{_ACTIVATION[shell]}\n")
    except OSError as e:
        print(f"Error writing to {path}: {e}", file=sys.stderr)
        return 1
    print(f"Installed completion in {path}")
    print(f"Restart your shell or run: source {path}")
    return 0


def run(args: argparse.Namespace) -> int:
    """Handle ``slidemark completion``."""
    if not argcomplete_available():
        print("Error: argcomplete is not installed.", file=sys.stderr)
        print("Install with: pip install slidemark[completion]", file=sys.stderr)
        return 1

    shell = getattr(args, "shell", None) or detect_shell()
    if getattr(args, "install", False):
        return install(shell)

    print(f"Shell completion for {shell}, add to {rc_file(shell)}:")
    print()
    print(f"  {_ACTIVATION[shell]}")
    print()
    print(f"Or auto-install with: slidemark completion --install --shell {shell}")
    return 0
