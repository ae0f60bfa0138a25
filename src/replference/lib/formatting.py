"""Display context handed to every output's `format_text()`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from replference.lib.grid import COLUMN_GAP


@dataclass(frozen=True, slots=True)
class FormatContext:
    """How text output should be laid out.

    `width` is the display width grids must fit, `gap` the spacing between
    grid columns, and `color` turns on ANSI emphasis for titles. A positive
    `verbosity` asks listings for extra detail.
    """

    verbosity: int = 0
    width: int = 80
    color: bool = False
    gap: int = COLUMN_GAP


@runtime_checkable
class TextFormattable(Protocol):
    def format_text(self, ctx: FormatContext | None = None) -> str: ...
