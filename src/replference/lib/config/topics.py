"""Built-in topic catalog and user overrides."""

from __future__ import annotations

import importlib
import logging
import re
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, cast

from replference.lib.config._paths import bundled_topics_root, resolve_home, user_topics_dir
from replference.lib.sections import Section, Subsection
from replference.lib.types import TopicId

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

# Suffix marking names outside a module's public API.
PRIVATE_MARKER = "ˣ"


@dataclass(frozen=True, slots=True)
class Topic:
    """One reference topic: manual text plus categorized names."""

    topic_id: TopicId
    title: str
    summary: str
    patterns: tuple[str, ...]
    python_types: tuple[str, ...]
    manual: str
    names: tuple[Section, ...] = ()
    stdlib: tuple[Section, ...] = ()

    def matches(self, query: str) -> bool:
        return any(re.match(pattern, query, re.IGNORECASE) for pattern in self.patterns)


def _string_list(raw: object, source: str) -> tuple[str, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ValueError(
            f"Invalid value for '{source}': expected array[str], got "
            f"{type(raw).__name__} ({raw!r})."
        )
    values: list[str] = []
    for item in cast("list[object]", raw):
        if not isinstance(item, str):
            raise ValueError(
                f"Invalid value for '{source}': expected array[str], got "
                f"{type(item).__name__} ({item!r})."
            )
        values.append(item)
    return tuple(values)


def _parse_section(raw: object, source: str) -> Section:
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid value for '{source}': expected table.")
    row = cast("dict[str, object]", raw)
    title = str(row.get("title") or "").strip()
    if not title:
        raise ValueError(f"Section in '{source}' is missing `title`.")

    groups = row.get("groups")
    if groups is None:
        return Section(title=title, labels=_string_list(row.get("labels"), f"{source}.labels"))
    if not isinstance(groups, dict):
        raise ValueError(f"Invalid value for '{source}.groups': expected table.")
    subsections = tuple(
        Subsection(title=str(key), labels=_string_list(value, f"{source}.groups.{key}"))
        for key, value in cast("dict[str, object]", groups).items()
    )
    return Section(title=title, subsections=subsections)


def _parse_sections(raw: object, source: str) -> tuple[Section, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ValueError(f"Invalid value for '{source}': expected array of tables.")
    return tuple(
        _parse_section(item, f"{source}[{index}]")
        for index, item in enumerate(cast("list[object]", raw))
    )


def _parse_patterns(raw: object, source: str, topic_id: str) -> tuple[str, ...]:
    patterns = _string_list(raw, source) or (f"^{re.escape(topic_id)}",)
    for pattern in patterns:
        try:
            re.compile(pattern)
        except re.error as error:
            raise ValueError(f"Invalid pattern {pattern!r} in '{source}': {error}.") from error
    return patterns


def parse_topic(payload: dict[str, object], source: str) -> Topic:
    """Build a topic from one decoded TOML document."""

    topic_id = str(payload.get("id") or "").strip()
    if not topic_id:
        raise ValueError(f"Topic file '{source}' is missing `id`.")
    manual = payload.get("manual")
    if not isinstance(manual, str) or not manual.strip():
        raise ValueError(f"Topic '{topic_id}' in '{source}' is missing `manual` text.")

    return Topic(
        topic_id=TopicId(topic_id),
        title=str(payload.get("title") or topic_id.title()).strip(),
        summary=str(payload.get("summary") or "").strip(),
        patterns=_parse_patterns(payload.get("patterns"), f"{source}.patterns", topic_id),
        python_types=_string_list(payload.get("python_types"), f"{source}.python_types"),
        manual=manual.strip("\n"),
        names=_parse_sections(payload.get("names"), f"{source}.names"),
        stdlib=_parse_sections(payload.get("stdlib"), f"{source}.stdlib"),
    )


def _parse_topic_text(text: str, source: str) -> Topic:
    try:
        payload_obj = tomllib.loads(text)
    except tomllib.TOMLDecodeError as error:
        raise ValueError(f"Invalid topic file '{source}': {error}.") from error
    return parse_topic(cast("dict[str, object]", payload_obj), source)


def builtin_topics() -> tuple[Topic, ...]:
    """Return built-in topics shipped with replference, in file-name order."""

    root = bundled_topics_root()
    entries = sorted(
        (entry for entry in root.iterdir() if entry.name.endswith(".toml")),
        key=lambda entry: entry.name,
    )
    return tuple(
        _parse_topic_text(entry.read_text(encoding="utf-8"), entry.name) for entry in entries
    )


def _load_overrides(directory: Path) -> tuple[Topic, ...]:
    if not directory.is_dir():
        return ()
    return tuple(
        _parse_topic_text(path.read_text(encoding="utf-8"), path.as_posix())
        for path in sorted(directory.glob("*.toml"))
    )


def load_topic_catalog(home: Path | None = None) -> list[Topic]:
    """Load built-in topics merged with `<home>/topics/*.toml` overrides.

    Overrides replace a built-in topic with the same id in place; new ids are
    appended after the built-ins.
    """

    merged: dict[str, Topic] = {str(topic.topic_id): topic for topic in builtin_topics()}
    for topic in _load_overrides(user_topics_dir(resolve_home(home))):
        key = str(topic.topic_id)
        if key in merged:
            logger.info("User topic '%s' overrides the built-in topic.", key)
        merged[key] = topic
    return list(merged.values())


def resolve_topic(query: str, home: Path | None = None) -> Topic:
    """Resolve a topic by id, then by the first topic whose pattern matches."""

    normalized = query.strip()
    if not normalized:
        raise ValueError("Topic name must not be empty.")

    catalog = load_topic_catalog(home=home)
    for topic in catalog:
        if str(topic.topic_id) == normalized.lower():
            return topic
    for topic in catalog:
        if topic.matches(normalized):
            return topic
    raise KeyError(f"Unknown topic '{query}'.")


def _import_dotted(dotted: str) -> object | None:
    module_name, _, attribute = dotted.rpartition(".")
    try:
        module = importlib.import_module(module_name or "builtins")
    except ImportError:
        logger.warning("Topic type '%s' names a module that cannot be imported.", dotted)
        return None
    return getattr(module, attribute, None)


def _dispatch_table(catalog: Iterable[Topic]) -> list[tuple[type, Topic]]:
    table: list[tuple[type, Topic]] = []
    for topic in catalog:
        for dotted in topic.python_types:
            resolved = _import_dotted(dotted)
            if not isinstance(resolved, type):
                logger.warning("Topic '%s' lists '%s', which is not a type.", topic.topic_id, dotted)
                continue
            table.append((resolved, topic))
    return table


def resolve_topic_for(obj: object, home: Path | None = None) -> Topic:
    """Dispatch a Python object to the topic covering its most specific type.

    Candidate types are ranked by their position in `type(obj).__mro__`, so a
    `bool` lands on the integer topic unless some topic claims `bool` itself.
    """

    mro = type(obj).__mro__
    best: tuple[int, Topic] | None = None
    for candidate, topic in _dispatch_table(load_topic_catalog(home=home)):
        if not isinstance(obj, candidate):
            continue
        rank = mro.index(candidate) if candidate in mro else len(mro)
        if best is None or rank < best[0]:
            best = (rank, topic)
    if best is None:
        raise KeyError(f"No topic covers objects of type '{type(obj).__qualname__}'.")
    return best[1]
