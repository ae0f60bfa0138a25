"""Topic catalog operations: listing, manuals and name grids."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from replference.lib.config.settings import load_config
from replference.lib.config.topics import load_topic_catalog, resolve_topic
from replference.lib.ops.registry import OperationSpec, operation
from replference.lib.sections import Section, render_sections
from replference.lib.styles import emphasize

if TYPE_CHECKING:
    from replference.lib.formatting import FormatContext

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class TopicsListInput:
    home: str | None = None


@dataclass(frozen=True, slots=True)
class TopicsManInput:
    topic: str = ""
    home: str | None = None


@dataclass(frozen=True, slots=True)
class TopicsNamesInput:
    topic: str = ""
    stdlib: bool | None = None
    home: str | None = None


@dataclass(frozen=True, slots=True)
class TopicSummary:
    topic_id: str
    title: str
    summary: str
    patterns: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class TopicsListOutput:
    topics: tuple[TopicSummary, ...]

    def format_text(self, ctx: FormatContext | None = None) -> str:
        """Aligned id/title/summary table; verbose output appends query patterns."""
        from replference.cli.format_helpers import tabular

        if not self.topics:
            return "(no topics)"
        verbose = ctx is not None and ctx.verbosity > 0
        rows = [
            [topic.topic_id, topic.title, topic.summary]
            + ([" ".join(topic.patterns)] if verbose else [])
            for topic in self.topics
        ]
        return tabular(rows, width=ctx.width if ctx is not None else None)


@dataclass(frozen=True, slots=True)
class TopicManualOutput:
    topic_id: str
    title: str
    manual: str

    def format_text(self, ctx: FormatContext | None = None) -> str:
        color = ctx.color if ctx is not None else False
        header = emphasize(self.title.upper(), "bold", enabled=color)
        return f"{header}\n\n{self.manual}"


@dataclass(frozen=True, slots=True)
class TopicNamesOutput:
    topic_id: str
    title: str
    sections: tuple[Section, ...]

    def format_text(self, ctx: FormatContext | None = None) -> str:
        """Every section as a column-major grid sized to the context width."""
        text = render_sections(self.sections, ctx)
        return text or f"(no names recorded for {self.topic_id})"


def _home(home: str | None) -> Path | None:
    if home is None:
        return None
    return Path(home).expanduser().resolve()


def topics_list(payload: TopicsListInput) -> TopicsListOutput:
    catalog = load_topic_catalog(home=_home(payload.home))
    return TopicsListOutput(
        topics=tuple(
            TopicSummary(
                topic_id=str(topic.topic_id),
                title=topic.title,
                summary=topic.summary,
                patterns=topic.patterns,
            )
            for topic in catalog
        )
    )


def topics_man(payload: TopicsManInput) -> TopicManualOutput:
    topic = resolve_topic(payload.topic, home=_home(payload.home))
    logger.debug("topics.resolved", query=payload.topic, topic=str(topic.topic_id))
    return TopicManualOutput(topic_id=str(topic.topic_id), title=topic.title, manual=topic.manual)


def topics_names(payload: TopicsNamesInput) -> TopicNamesOutput:
    home = _home(payload.home)
    topic = resolve_topic(payload.topic, home=home)
    stdlib = payload.stdlib
    if stdlib is None:
        stdlib = load_config(home).topics.stdlib
    sections = topic.names + topic.stdlib if stdlib else topic.names
    logger.debug(
        "topics.names",
        topic=str(topic.topic_id),
        sections=len(sections),
        stdlib=stdlib,
    )
    return TopicNamesOutput(topic_id=str(topic.topic_id), title=topic.title, sections=sections)


operation(
    OperationSpec[TopicsListInput, TopicsListOutput](
        name="topics.list",
        handler=topics_list,
        input_type=TopicsListInput,
        output_type=TopicsListOutput,
        description="List reference topics with a one-line summary each.",
    )
)

operation(
    OperationSpec[TopicsManInput, TopicManualOutput](
        name="topics.man",
        handler=topics_man,
        input_type=TopicsManInput,
        output_type=TopicManualOutput,
        description="Show the long-form manual for one topic.",
    )
)

operation(
    OperationSpec[TopicsNamesInput, TopicNamesOutput](
        name="topics.names",
        handler=topics_names,
        input_type=TopicsNamesInput,
        output_type=TopicNamesOutput,
        description="Show the categorized built-in names related to one topic.",
    )
)
