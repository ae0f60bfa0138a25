"""Interactive helpers: `man`, `fun` and `subtree` for use at a Python prompt.

    >>> from replference.lib import fun, man, subtree
    >>> man("regex")          # topic by name or alias
    >>> man(3.5)              # topic by the type of a value
    >>> fun({1, 2}, stdlib=True)
    >>> subtree(ArithmeticError)
"""

from __future__ import annotations

import shutil
import sys
from typing import TYPE_CHECKING, TextIO

from replference.lib.config.settings import load_config
from replference.lib.config.topics import Topic, resolve_topic, resolve_topic_for
from replference.lib.formatting import FormatContext
from replference.lib.hierarchy import subtype_tree
from replference.lib.sections import print_sections
from replference.lib.styles import emphasize, resolve_color

if TYPE_CHECKING:
    from pathlib import Path


def _topic(obj: object, home: Path | None) -> Topic:
    # A string is a topic query, the way a symbol would be; use fun(str) for strings.
    if isinstance(obj, str):
        return resolve_topic(obj, home=home)
    return resolve_topic_for(obj, home=home)


def terminal_context(
    stream: TextIO | None = None,
    home: Path | None = None,
    width: int | None = None,
) -> FormatContext:
    """Build a format context from config, falling back to the terminal size."""

    display = load_config(home).display
    resolved_width = width or display.width or shutil.get_terminal_size().columns
    return FormatContext(
        width=resolved_width,
        color=resolve_color(display.color, stream),
        gap=display.column_gap,
    )


def man(obj: object, stream: TextIO | None = None, home: Path | None = None) -> None:
    """Print the long-form manual of the topic `obj` names or belongs to."""

    out = sys.stdout if stream is None else stream
    topic = _topic(obj, home)
    color = resolve_color(load_config(home).display.color, out)
    out.write(f"{emphasize(topic.title.upper(), 'bold', enabled=color)}\n\n{topic.manual}\n")


def fun(
    obj: object,
    stdlib: bool | None = None,
    stream: TextIO | None = None,
    home: Path | None = None,
) -> None:
    """Print the categorized names of the topic `obj` names or belongs to."""

    out = sys.stdout if stream is None else stream
    topic = _topic(obj, home)
    if stdlib is None:
        stdlib = load_config(home).topics.stdlib
    sections = topic.names + topic.stdlib if stdlib else topic.names
    print_sections(sections, terminal_context(out, home), out)


def subtree(cls: type, max_depth: int = 1, stream: TextIO | None = None) -> None:
    """Print the loaded subclasses of `cls` as a tree."""

    out = sys.stdout if stream is None else stream
    for line in subtype_tree(cls, max_depth=max_depth):
        out.write(line)
        out.write("\n")
