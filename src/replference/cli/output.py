"""Write operation results to stdout as text, JSON or porcelain lines."""

from __future__ import annotations

import json
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Literal, TextIO, cast

from replference.lib.formatting import FormatContext, TextFormattable
from replference.lib.serialization import to_jsonable

OutputFormat = Literal["text", "json", "porcelain"]
OUTPUT_FORMATS: tuple[OutputFormat, ...] = ("text", "json", "porcelain")


@dataclass(frozen=True, slots=True)
class OutputConfig:
    format: OutputFormat
    context: FormatContext = field(default_factory=FormatContext)


def normalize_output_format(
    *,
    requested: str | None,
    json_mode: bool,
    porcelain_mode: bool,
) -> OutputFormat:
    """Pick the output format: `--json` beats `--porcelain` beats `--format`."""

    if json_mode:
        return "json"
    if porcelain_mode:
        return "porcelain"
    normalized = (requested or "text").strip().lower()
    if normalized not in OUTPUT_FORMATS:
        raise SystemExit(f"--format must be one of: {', '.join(OUTPUT_FORMATS)}")
    return cast("OutputFormat", normalized)


def _dumps(payload: object, *, indent: int | None = None) -> str:
    return json.dumps(payload, sort_keys=True, ensure_ascii=False, indent=indent)


def _porcelain_record(record: dict[str, Any]) -> str:
    """One `key=value` pair per field, tab separated; nested values stay JSON."""

    pairs: list[str] = []
    for key in sorted(record):
        value = record[key]
        text = _dumps(value) if isinstance(value, (dict, list)) else str(value)
        pairs.append(f"{key}={text}")
    return "\t".join(pairs)


def _write_json(value: Any, config: OutputConfig, stream: TextIO) -> None:
    print(_dumps(to_jsonable(value)), file=stream)


def _write_porcelain(value: Any, config: OutputConfig, stream: TextIO) -> None:
    payload = to_jsonable(value)
    records = payload if isinstance(payload, list) else [payload]
    for record in cast("list[object]", records):
        if isinstance(record, dict):
            print(_porcelain_record(cast("dict[str, Any]", record)), file=stream)
        else:
            print(record, file=stream)


def _write_text(value: Any, config: OutputConfig, stream: TextIO) -> None:
    if isinstance(value, TextFormattable):
        print(value.format_text(config.context), file=stream)
        return
    print(_dumps(to_jsonable(value), indent=2), file=stream)


_WRITERS: dict[OutputFormat, Callable[[Any, OutputConfig, TextIO], None]] = {
    "text": _write_text,
    "json": _write_json,
    "porcelain": _write_porcelain,
}


def emit(value: Any, config: OutputConfig, stream: TextIO | None = None) -> None:
    """Write one result to `stream` (stdout by default) in the configured format."""

    _WRITERS[config.format](value, config, sys.stdout if stream is None else stream)
