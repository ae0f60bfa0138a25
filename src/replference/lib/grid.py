"""Column-major grid layout for printing label lists to a terminal.

Labels fill a column top to bottom before moving to the next column. The
layout probes rows-per-column from one upward and keeps the first arrangement
whose printed line fits the display width, so the grid always uses as many
columns as the width allows.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from collections.abc import Iterable

COLUMN_GAP = 4


class InvalidLayoutError(ValueError):
    """Labels or width cannot produce a grid."""


@dataclass(frozen=True, slots=True)
class Grid:
    """Labels arranged column-major; the last column is padded with empty cells."""

    columns: tuple[tuple[str, ...], ...]
    widths: tuple[int, ...]
    rows: int
    count: int
    gap: int = COLUMN_GAP

    @property
    def column_count(self) -> int:
        return len(self.columns)

    @property
    def line_width(self) -> int:
        """Printed width of the widest possible row."""
        return sum(self.widths) + self.gap * (len(self.widths) - 1)

    def labels(self) -> list[str]:
        """Return the real labels in column-major order, placeholders dropped."""
        flat = [label for column in self.columns for label in column]
        return flat[: self.count]


def _partition(labels: tuple[str, ...], rows: int) -> list[tuple[str, ...]]:
    return [labels[start : start + rows] for start in range(0, len(labels), rows)]


def _total_width(columns: list[tuple[str, ...]], gap: int) -> int:
    widths = sum(max(len(label) for label in column) for column in columns)
    return widths + gap * (len(columns) - 1)


def _validate(labels: tuple[str, ...], width: int, gap: int) -> None:
    if not labels:
        raise InvalidLayoutError("Cannot lay out an empty label sequence.")
    if isinstance(width, bool) or not isinstance(width, int) or width < 1:
        raise InvalidLayoutError(f"Display width must be a positive integer, got {width!r}.")
    if isinstance(gap, bool) or not isinstance(gap, int) or gap < 0:
        raise InvalidLayoutError(f"Column gap must be a non-negative integer, got {gap!r}.")


def layout(labels: Iterable[str], width: int, gap: int = COLUMN_GAP) -> Grid:
    """Arrange labels into the densest column-major grid that fits `width`.

    A single label wider than `width` still gets a one-column grid; nothing
    narrower than one column is possible.

    >>> layout(["a", "bb", "ccc"], 100).columns
    (('a',), ('bb',), ('ccc',))
    """

    items = tuple(labels)
    _validate(items, width, gap)

    columns = [items]
    for rows in range(1, len(items) + 1):
        candidate = _partition(items, rows)
        if _total_width(candidate, gap) <= width:
            columns = candidate
            break

    rows = len(columns[0])
    padded = tuple(column + ("",) * (rows - len(column)) for column in columns)
    widths = tuple(max(len(label) for label in column) for column in padded)
    return Grid(columns=padded, widths=widths, rows=rows, count=len(items), gap=gap)


def render(grid: Grid) -> list[str]:
    """Render grid rows as left-justified, gap-separated lines.

    Placeholder cells at the end of the final column are dropped and the last
    real cell of each row is not padded. Labels themselves are written as
    given, trailing spaces included.

    >>> render(layout(["a", "bb", "ccc"], 100))
    ['a    bb    ccc']
    """

    separator = " " * grid.gap
    lines: list[str] = []
    for row in range(grid.rows):
        cells = [
            column[row]
            for index, column in enumerate(grid.columns)
            if index * grid.rows + row < grid.count
        ]
        padded = [
            cell.ljust(grid.widths[index]) + separator
            for index, cell in enumerate(cells[:-1])
        ]
        lines.append("".join(padded) + cells[-1])
    return lines


def write_grid(
    labels: Iterable[str],
    width: int,
    stream: TextIO | None = None,
    gap: int = COLUMN_GAP,
) -> None:
    """Lay out labels and write the rendered rows to `stream` (stdout by default)."""

    out = sys.stdout if stream is None else stream
    for line in render(layout(labels, width, gap=gap)):
        out.write(line)
        out.write("\n")
