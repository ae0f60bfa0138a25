"""Serialization helpers shared by the CLI and MCP surfaces."""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from pathlib import Path
from typing import Any, cast


def to_jsonable(value: Any) -> Any:
    """Convert output dataclasses, paths and containers to JSON payloads.

    Dataclasses are walked field by field rather than through `asdict()`
    so nested frozen dataclasses keep their declared field order.
    """

    if is_dataclass(value) and not isinstance(value, type):
        return {field.name: to_jsonable(getattr(value, field.name)) for field in fields(value)}
    if isinstance(value, type):
        return f"{value.__module__}.{value.__qualname__}"
    if isinstance(value, Path):
        return value.as_posix()
    if isinstance(value, dict):
        typed_dict = cast("dict[object, object]", value)
        return {str(key): to_jsonable(item) for key, item in typed_dict.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        typed_seq = cast("list[object] | tuple[object, ...] | set[object]", value)
        return [to_jsonable(item) for item in typed_seq]
    return value
