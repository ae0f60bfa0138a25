"""Turn MCP tool arguments into operation input dataclasses.

Tool clients send loosely typed JSON: booleans as strings, integers as
strings, arrays where the input declares a tuple. Each field is converted
according to its declared annotation before the dataclass is built.
"""

from __future__ import annotations

import inspect
import types
from collections.abc import Mapping
from dataclasses import MISSING, Field, fields, is_dataclass
from typing import Any, TypeVar, Union, cast, get_args, get_origin, get_type_hints

PayloadT = TypeVar("PayloadT")

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off", ""})


def normalize_optional(annotation: Any) -> tuple[Any, bool]:
    """Split `T | None` into `(T, True)`; anything else is `(annotation, False)`."""

    if get_origin(annotation) not in (types.UnionType, Union):
        return annotation, False
    members = [arg for arg in get_args(annotation) if arg is not type(None)]
    if len(members) == 1 and len(members) < len(get_args(annotation)):
        return members[0], True
    return annotation, False


def _to_bool(value: object, source: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise ValueError(f"Invalid value for '{source}': expected bool, got {value!r}.")
    return bool(value)


def _to_int(value: object, source: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid value for '{source}': expected int, got {value!r}.")
    try:
        return int(cast("Any", value))
    except (TypeError, ValueError) as error:
        raise ValueError(f"Invalid value for '{source}': expected int, got {value!r}.") from error


def coerce_scalar(annotation: Any, value: object, source: str = "value") -> object:
    """Convert one JSON scalar to the `str`, `int` or `bool` the field declares."""

    if value is None:
        return None
    target, _ = normalize_optional(annotation)
    if target is bool:
        return _to_bool(value, source)
    if target is int:
        return _to_int(value, source)
    if target is str:
        return str(value)
    return value


def _coerce_field(annotation: Any, value: object, source: str) -> object:
    target, _ = normalize_optional(annotation)
    if get_origin(target) is not tuple:
        return coerce_scalar(annotation, value, source)
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"Invalid value for '{source}': expected array, got {value!r}.")
    item_type = get_args(target)[0] if get_args(target) else str
    return tuple(
        coerce_scalar(item_type, item, f"{source}[{index}]")
        for index, item in enumerate(cast("list[object]", value))
    )


def _field_default(field: Field[Any]) -> object:
    if field.default is not MISSING:
        return field.default
    if field.default_factory is not MISSING:
        return field.default_factory()
    return inspect.Parameter.empty


def coerce_input_payload(payload_type: type[PayloadT], raw_input: object) -> PayloadT:
    """Build `payload_type` from a tool-argument mapping, filling field defaults."""

    if raw_input is None:
        arguments: Mapping[str, object] = {}
    elif isinstance(raw_input, Mapping):
        arguments = cast("Mapping[str, object]", raw_input)
    else:
        raise TypeError(f"Tool input must be an object, got {type(raw_input).__name__}")

    hints = get_type_hints(payload_type)
    kwargs: dict[str, object] = {}
    for field in fields(cast("Any", payload_type)):
        if field.name in arguments:
            annotation = hints.get(field.name, field.type)
            kwargs[field.name] = _coerce_field(annotation, arguments[field.name], field.name)
            continue
        default = _field_default(field)
        if default is inspect.Parameter.empty:
            raise TypeError(f"Missing required field '{field.name}'")
        kwargs[field.name] = default
    return payload_type(**kwargs)


def signature_from_dataclass(payload_type: type[object]) -> inspect.Signature:
    """Keyword-only signature mirroring an input dataclass, used for tool schemas."""

    if not is_dataclass(payload_type):
        return inspect.Signature()
    hints = get_type_hints(payload_type, include_extras=True)
    return inspect.Signature(
        [
            inspect.Parameter(
                field.name,
                inspect.Parameter.KEYWORD_ONLY,
                default=_field_default(field),
                annotation=hints.get(field.name, field.type),
            )
            for field in fields(payload_type)
        ]
    )
