"""Titled sections of labels rendered as column-major grids."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, TextIO

from replference.lib.formatting import FormatContext
from replference.lib.grid import layout, render
from replference.lib.styles import emphasize

if TYPE_CHECKING:
    from collections.abc import Iterable

RULE_CHAR = "≡"


@dataclass(frozen=True, slots=True)
class Subsection:
    title: str
    labels: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Section:
    """One named group of labels.

    A section holds either a flat label list or an ordered run of
    subsections, never both.
    """

    title: str
    labels: tuple[str, ...] = ()
    subsections: tuple[Subsection, ...] = ()

    def __post_init__(self) -> None:
        if self.labels and self.subsections:
            raise ValueError(
                f"Section '{self.title}' cannot hold both labels and subsections."
            )

    @property
    def is_nested(self) -> bool:
        return bool(self.subsections)

    def all_labels(self) -> tuple[str, ...]:
        if not self.subsections:
            return self.labels
        return tuple(label for sub in self.subsections for label in sub.labels)


def _grid_lines(labels: tuple[str, ...], ctx: FormatContext) -> list[str]:
    if not labels:
        return []
    return render(layout(labels, ctx.width, gap=ctx.gap))


def _section_lines(section: Section, ctx: FormatContext) -> list[str]:
    lines = [
        emphasize(section.title, "bold", "yellow", enabled=ctx.color),
        emphasize(RULE_CHAR * (len(section.title) + 2), "bold", "yellow", enabled=ctx.color),
    ]
    if not section.is_nested:
        lines.extend(_grid_lines(section.labels, ctx))
    else:
        for sub in section.subsections:
            if not sub.labels:
                continue
            lines.append("")
            lines.append(emphasize(sub.title, "bold", "underline", "reverse", enabled=ctx.color))
            lines.extend(_grid_lines(sub.labels, ctx))
    lines.append("")
    return lines


def render_sections(sections: Iterable[Section], ctx: FormatContext | None = None) -> str:
    """Render every non-empty section: styled title, rule, then its grids."""

    context = ctx or FormatContext()
    lines: list[str] = []
    for section in sections:
        if not section.all_labels():
            continue
        lines.extend(_section_lines(section, context))
    return "\n".join(lines).rstrip("\n")


def print_sections(
    sections: Iterable[Section],
    ctx: FormatContext | None = None,
    stream: TextIO | None = None,
) -> None:
    out = sys.stdout if stream is None else stream
    text = render_sections(sections, ctx)
    if text:
        out.write(text)
        out.write("\n")
