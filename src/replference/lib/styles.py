"""ANSI emphasis for terminal headers."""

from __future__ import annotations

import os
import sys
from typing import Literal, TextIO

ColorMode = Literal["auto", "always", "never"]

RESET = "\033[0m"

_STYLE_CODES: dict[str, str] = {
    "bold": "1",
    "dim": "2",
    "underline": "4",
    "reverse": "7",
    "red": "31",
    "green": "32",
    "yellow": "33",
    "blue": "34",
    "magenta": "35",
    "cyan": "36",
}


def supports_color(stream: TextIO | None = None) -> bool:
    """Check whether `stream` (stdout by default) should receive ANSI codes."""

    # FORCE_COLOR overrides all detection.
    if "FORCE_COLOR" in os.environ:
        return True
    if "NO_COLOR" in os.environ:
        return False

    target = sys.stdout if stream is None else stream
    isatty = getattr(target, "isatty", None)
    if isatty is None or not isatty():
        return False
    return os.environ.get("TERM", "") != "dumb"


def resolve_color(mode: ColorMode, stream: TextIO | None = None) -> bool:
    if mode == "always":
        return True
    if mode == "never":
        return False
    return supports_color(stream)


def emphasize(text: str, *styles: str, enabled: bool = True) -> str:
    """Wrap text in the ANSI codes for `styles` when enabled.

    >>> emphasize("Types", "bold", "yellow")
    '\\x1b[1;33mTypes\\x1b[0m'
    >>> emphasize("Types", "bold", enabled=False)
    'Types'
    """

    if not enabled or not styles:
        return text
    unknown = [style for style in styles if style not in _STYLE_CODES]
    if unknown:
        raise ValueError(f"Unknown text style: {', '.join(unknown)}.")
    codes = ";".join(_STYLE_CODES[style] for style in styles)
    return f"\033[{codes}m{text}{RESET}"
