"""Subclass trees for loaded Python types."""

from __future__ import annotations

import builtins
import importlib

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "


def qualified_name(cls: type) -> str:
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def resolve_type(dotted: str) -> type:
    """Resolve `Exception`, `numbers.Number` or `collections.abc.Set` to a type."""

    normalized = dotted.strip()
    if not normalized:
        raise ValueError("Type name must not be empty.")

    parts = normalized.split(".")
    target: object | None = None
    if len(parts) == 1:
        target = getattr(builtins, normalized, None)
    else:
        # Longest importable module prefix wins; the rest is an attribute path.
        for split in range(len(parts) - 1, 0, -1):
            try:
                target = importlib.import_module(".".join(parts[:split]))
            except ImportError:
                continue
            for attribute in parts[split:]:
                target = getattr(target, attribute, None)
                if target is None:
                    break
            break

    if target is None:
        raise KeyError(f"Unknown type '{dotted}'.")
    if not isinstance(target, type):
        raise ValueError(f"'{dotted}' is a {type(target).__name__}, not a type.")
    return target


def _subclasses(cls: type) -> list[type]:
    # type.__subclasses__ is unbound so metaclasses such as `type` work too.
    return sorted(type.__subclasses__(cls), key=qualified_name)


def subtype_tree(cls: type, max_depth: int = 1) -> list[str]:
    """Render the loaded subclasses of `cls` as tree lines.

    Classes reachable through several bases are listed at each position but
    expanded only once. `max_depth=0` expands without limit.
    """

    if max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}.")

    lines = [qualified_name(cls)]
    expanded: set[type] = {cls}

    def walk(parent: type, prefix: str, depth: int) -> None:
        children = _subclasses(parent)
        for index, child in enumerate(children):
            last = index == len(children) - 1
            lines.append(f"{prefix}{LAST_BRANCH if last else BRANCH}{qualified_name(child)}")
            if child in expanded or (max_depth and depth + 1 >= max_depth):
                continue
            # Marked only once actually walked; a shallower repeat may still expand it.
            expanded.add(child)
            walk(child, prefix + (SPACE if last else PIPE), depth + 1)

    walk(cls, "", 0)
    return lines
