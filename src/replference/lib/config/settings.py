"""User-level display and topic configuration loader.

Settings come from `<home>/config.toml`, then `REPLFERENCE_*` environment
variables override the display table. Command-line options are layered on
top by the CLI.
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Callable
from dataclasses import dataclass, replace
from pathlib import Path
from typing import cast

from replference.lib.config._paths import config_path, resolve_home
from replference.lib.grid import COLUMN_GAP
from replference.lib.styles import ColorMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DisplayConfig:
    """Grid and emphasis settings for terminal output.

    `width` of None means "ask the terminal".
    """

    width: int | None = None
    column_gap: int = COLUMN_GAP
    color: ColorMode = "auto"


@dataclass(frozen=True, slots=True)
class TopicsConfig:
    stdlib: bool = False


@dataclass(frozen=True, slots=True)
class ReplferenceConfig:
    display: DisplayConfig = DisplayConfig()
    topics: TopicsConfig = TopicsConfig()


_COLOR_MODES = ("auto", "always", "never")


def _describe(value: object) -> str:
    return f"{type(value).__name__} {value!r}"


def _int_at_least(minimum: int) -> Callable[[object, str], int]:
    def parse(value: object, source: str) -> int:
        # bool is an int subclass; `width = true` is still a mistake.
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"'{source}' must be an integer, got {_describe(value)}.")
        if value < minimum:
            raise ValueError(f"'{source}': expected int >= {minimum}, got {value}.")
        return value

    return parse


def _color_mode(value: object, source: str) -> ColorMode:
    if not isinstance(value, str) or value.strip().lower() not in _COLOR_MODES:
        choices = ", ".join(_COLOR_MODES)
        raise ValueError(f"'{source}' must be one of {choices}; got {_describe(value)}.")
    return cast("ColorMode", value.strip().lower())


def _boolean(value: object, source: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"'{source}' must be true or false, got {_describe(value)}.")
    return value


# Recognised keys per TOML table, with the parser for each value.
_DISPLAY_FIELDS: dict[str, Callable[[object, str], object]] = {
    "width": _int_at_least(1),
    "column_gap": _int_at_least(0),
    "color": _color_mode,
}
_TOPICS_FIELDS: dict[str, Callable[[object, str], object]] = {
    "stdlib": _boolean,
}

_ENV_DISPLAY_FIELDS = {
    "REPLFERENCE_WIDTH": "width",
    "REPLFERENCE_COLUMN_GAP": "column_gap",
    "REPLFERENCE_COLOR": "color",
}


def _parse_table(
    table: str,
    raw: object,
    parsers: dict[str, Callable[[object, str], object]],
) -> dict[str, object]:
    if not isinstance(raw, dict):
        raise ValueError(f"'{table}' must be a TOML table, got {_describe(raw)}.")

    values: dict[str, object] = {}
    for key, value in cast("dict[str, object]", raw).items():
        parser = parsers.get(key)
        if parser is None:
            logger.warning("Ignoring unknown replference config key '%s.%s'.", table, key)
            continue
        values[key] = parser(value, f"{table}.{key}")
    return values


def _read_config_file(path: Path) -> tuple[dict[str, object], dict[str, object]]:
    """Return the parsed `[display]` and `[topics]` tables of one config file."""

    document = tomllib.loads(path.read_text(encoding="utf-8"))
    display: dict[str, object] = {}
    topics: dict[str, object] = {}
    for table, raw in document.items():
        if table == "display":
            display = _parse_table(table, raw, _DISPLAY_FIELDS)
        elif table == "topics":
            topics = _parse_table(table, raw, _TOPICS_FIELDS)
        else:
            logger.warning("Ignoring unknown replference config key '%s' in %s.", table, path)
    return display, topics


def _display_env_overrides() -> dict[str, object]:
    overrides: dict[str, object] = {}
    for env_name, field_name in _ENV_DISPLAY_FIELDS.items():
        raw = os.getenv(env_name, "").strip()
        if not raw:
            continue
        value: object = raw
        if field_name != "color":
            try:
                value = int(raw)
            except ValueError:
                raise ValueError(f"'{env_name}' must be an integer, got {raw!r}.") from None
        overrides[field_name] = _DISPLAY_FIELDS[field_name](value, env_name)
    return overrides


def load_config(home: Path | None = None) -> ReplferenceConfig:
    """Load `<home>/config.toml` and apply environment overrides.

    A missing file yields the defaults. Invalid values raise ValueError
    naming the offending key or environment variable; unknown keys only
    log a warning.
    """

    display: dict[str, object] = {}
    topics: dict[str, object] = {}
    path = config_path(resolve_home(home))
    if path.is_file():
        display, topics = _read_config_file(path)
    display.update(_display_env_overrides())

    defaults = ReplferenceConfig()
    return ReplferenceConfig(
        display=replace(defaults.display, **display),  # type: ignore[arg-type]
        topics=replace(defaults.topics, **topics),  # type: ignore[arg-type]
    )
