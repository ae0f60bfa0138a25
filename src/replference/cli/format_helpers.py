"""Shared text formatting primitives for CLI output.

Row-major tables and key-value blocks for format_text() implementations.
Column-major label grids live in `replference.lib.grid`.
"""

from __future__ import annotations

ELLIPSIS = "…"


def _clip(text: str, limit: int) -> str:
    if limit <= 0:
        return ""
    if len(text) <= limit:
        return text
    return text[: limit - 1] + ELLIPSIS


def tabular(rows: list[list[str]], sep: str = "  ", width: int | None = None) -> str:
    """Align columns by max width per column.

    When `width` is given the last column is clipped so no line exceeds it.

    >>> tabular([["sets", "Sets"], ["floats", "Floating-point numbers"]])
    'sets    Sets\\nfloats  Floating-point numbers'
    >>> tabular([["sets", "Unordered collections"]], width=12)
    'sets  Unord…'
    """
    if not rows:
        return ""
    col_count = max(len(row) for row in rows)
    padded = [row + [""] * (col_count - len(row)) for row in rows]
    col_widths = [max(len(row[col]) for row in padded) for col in range(col_count)]
    lead_width = sum(col_widths[:-1]) + len(sep) * (col_count - 1)

    lines: list[str] = []
    for row in padded:
        cells = [cell.ljust(col_widths[col]) for col, cell in enumerate(row[:-1])]
        tail = row[-1] if width is None else _clip(row[-1], width - lead_width)
        lines.append(sep.join([*cells, tail]).rstrip())
    return "\n".join(lines)


def kv_block(pairs: list[tuple[str, str | None]]) -> str:
    """Render `key: value` lines with aligned values, skipping None values.

    >>> kv_block([("path", "names.txt"), ("Types", "12"), ("Modules", None)])
    'path:  names.txt\\nTypes: 12'
    """
    shown = [(key, value) for key, value in pairs if value is not None]
    if not shown:
        return ""
    key_width = max(len(key) for key, _ in shown) + 1
    return "\n".join(f"{(key + ':').ljust(key_width)} {value}" for key, value in shown)
