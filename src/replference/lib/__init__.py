"""Core replference library exports."""

from replference.lib.grid import COLUMN_GAP, Grid, InvalidLayoutError, layout, render, write_grid
from replference.lib.reference import fun, man, subtree
from replference.lib.sections import Section, Subsection, print_sections, render_sections

__all__ = [
    "COLUMN_GAP",
    "Grid",
    "InvalidLayoutError",
    "Section",
    "Subsection",
    "fun",
    "layout",
    "man",
    "print_sections",
    "render",
    "render_sections",
    "subtree",
    "write_grid",
]
