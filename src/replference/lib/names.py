"""Standard-library name scanner behind the category name files.

Each module is first summarized as a varinfo-style text table, one binding
per row. The table is then parsed back row by row and every binding is
classified from its summary text into one of `CATEGORIES`.
"""

from __future__ import annotations

import importlib
import re
import sys
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING

import structlog

from replference.lib.config.topics import PRIVATE_MARKER

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = structlog.get_logger(__name__)

DEFAULT_MODULES: tuple[str, ...] = (
    "builtins",
    "math",
    "cmath",
    "re",
    "datetime",
    "random",
    "statistics",
    "string",
    "itertools",
    "functools",
    "collections",
    "operator",
)

CATEGORIES: tuple[str, ...] = ("Constants", "Functions", "Modules", "Operators", "Types")

# Injected by `site` for the interactive prompt, not part of the language.
_FORBIDDEN_NAMES: frozenset[tuple[str, str]] = frozenset(
    {
        ("builtins", "copyright"),
        ("builtins", "credits"),
        ("builtins", "exit"),
        ("builtins", "help"),
        ("builtins", "license"),
        ("builtins", "quit"),
    }
)

# Skips private names such as `_compile`; dunders like `__import__` stay.
_VISIBLE_NAME = re.compile(r"^(?!_.*[^_]$)")
_TABLE_ROW = re.compile(r"^\| (?P<name>\S+) +\| +(?P<size>\S+ \S+) \| (?P<summary>.*?) *\|$")
_SUMMARY_KIND = re.compile(r"^(?:(?P<module>module)|(?P<type>class)|(?P<callable>callable))\b")

BANNER_TEXT = "To generate this file run `replference catalog write` with the same modules"


def describe(value: object) -> str:
    """Summary text for one binding, as shown in the varinfo table."""

    if isinstance(value, ModuleType):
        return "module"
    if isinstance(value, type):
        return f"class ({type(value).__name__})"
    if callable(value):
        return f"callable ({type(value).__name__})"
    return type(value).__name__


def varinfo_table(module: ModuleType) -> str:
    """Summarize the visible bindings of `module` as a Markdown table."""

    rows: list[tuple[str, str, str]] = []
    for name in sorted(dir(module)):
        if not _VISIBLE_NAME.match(name):
            continue
        value = getattr(module, name)
        rows.append((name, f"{sys.getsizeof(value)} bytes", describe(value)))

    name_width = max([len("name"), *(len(row[0]) for row in rows)])
    size_width = max([len("size"), *(len(row[1]) for row in rows)])
    summary_width = max([len("summary"), *(len(row[2]) for row in rows)])
    lines = [
        f"| {'name'.ljust(name_width)} | {'size'.rjust(size_width)} | "
        f"{'summary'.ljust(summary_width)} |",
        f"|:{'-' * name_width} | {'-' * size_width}:|:{'-' * summary_width} |",
    ]
    lines.extend(
        f"| {name.ljust(name_width)} | {size.rjust(size_width)} | "
        f"{summary.ljust(summary_width)} |"
        for name, size, summary in rows
    )
    return "\n".join(lines)


def _has_docstring(value: object) -> bool:
    doc = getattr(value, "__doc__", None)
    return isinstance(doc, str) and bool(doc.strip())


def _is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def _is_public(module: ModuleType, name: str) -> bool:
    exported = getattr(module, "__all__", None)
    if exported is None:
        return True
    return name in exported


def classify(module_name: str, summary: str) -> str:
    """Map a varinfo summary to its category name."""

    kind = _SUMMARY_KIND.match(summary)
    if kind is None:
        return "Constants"
    if kind.group("module"):
        return "Modules"
    if kind.group("type"):
        return "Types"
    return "Operators" if module_name == "operator" else "Functions"


def _scan_module(module: ModuleType, names: dict[str, list[str]]) -> int:
    found = 0
    for line_no, line in enumerate(varinfo_table(module).splitlines(), start=1):
        if line_no <= 2:
            continue
        row = _TABLE_ROW.match(line)
        if row is None:
            logger.warning("catalog.unparsed_row", module=module.__name__, line=line)
            continue

        name = row.group("name")
        if (module.__name__, name) in _FORBIDDEN_NAMES:
            continue
        category = classify(module.__name__, row.group("summary"))
        if category == "Constants":
            # Module metadata such as __file__ or __spec__ is not reference material.
            if _is_dunder(name):
                continue
        elif not _has_docstring(getattr(module, name)):
            continue

        label = f"{module.__name__}.{name}"
        if not _is_public(module, name):
            label += PRIVATE_MARKER
        names[category].append(label)
        found += 1
    return found


def names_to_dict(modules: Iterable[str] = DEFAULT_MODULES) -> dict[str, list[str]]:
    """Scan `modules` and bucket their documented bindings by category."""

    names: dict[str, list[str]] = {category: [] for category in CATEGORIES}
    for module_name in modules:
        try:
            module = importlib.import_module(module_name)
        except ImportError as error:
            raise KeyError(f"Unknown module '{module_name}'.") from error
        found = _scan_module(module, names)
        logger.debug("catalog.module_scanned", module=module_name, bindings=found)

    for labels in names.values():
        labels.sort()
    return names


def write_names_file(names: dict[str, list[str]], dest: Path) -> Path:
    """Write `names` to `dest`: a framed banner, then one block per category."""

    rule = "=" * len(BANNER_TEXT)
    lines = [f"#{rule}", BANNER_TEXT, f"{rule}#", ""]
    for category, labels in names.items():
        lines.append(f"# {category}")
        lines.extend(sorted(labels))
        lines.append("")

    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.info("catalog.written", path=dest.as_posix(), categories=len(names))
    return dest

