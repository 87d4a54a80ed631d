"""Text emphasis for terminal output."""

from __future__ import annotations

import os
import sys

_BLUE_BOLD = "34;1"
_YELLOW_BOLD = "33;1"
_RESET = "\x1b[0m"


def _sprint(args) -> str:
    """Join values, adding a space between two neighbours only if neither is a string."""
    parts: list[str] = []
    previous_is_str = True
    for index, arg in enumerate(args):
        is_str = isinstance(arg, str)
        if index > 0 and not is_str and not previous_is_str:
            parts.append(" ")
        parts.append(_format(arg))
        previous_is_str = is_str
    return "".join(parts)


def _format(value) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _color_enabled() -> bool:
    if sys.platform.startswith("win"):
        return False
    if "NO_COLOR" in os.environ:
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def _paint(code: str, args) -> str:
    text = _sprint(args)
    if not _color_enabled():
        return text
    return f"\x1b[{code}m{text}{_RESET}"


def emph(*args) -> str:
    """Return the values as text in bold blue when the terminal supports it."""
    return _paint(_BLUE_BOLD, args)


def warn(*args) -> str:
    """Return the values as text in bold yellow when the terminal supports it."""
    return _paint(_YELLOW_BOLD, args)