"""CLI command handlers for topics.* operations."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Annotated

from cyclopts import Parameter

from replference.cli.registration import Emitter, register_group
from replference.lib.ops.topics import (
    TopicsListInput,
    TopicsManInput,
    TopicsNamesInput,
    topics_list,
    topics_man,
    topics_names,
)

if TYPE_CHECKING:
    from cyclopts import App


def _topics_list(emit: Emitter) -> None:
    emit(topics_list(TopicsListInput()))


def _topics_man(emit: Emitter, topic: str) -> None:
    emit(topics_man(TopicsManInput(topic=topic)))


def _topics_names(
    emit: Emitter,
    topic: str,
    stdlib: Annotated[
        bool | None,
        Parameter(
            name="--stdlib",
            help="Also list related standard-library module names.",
        ),
    ] = None,
) -> None:
    emit(topics_names(TopicsNamesInput(topic=topic, stdlib=stdlib)))


def register_topics_commands(app: App, emit: Emitter) -> tuple[set[str], dict[str, str]]:
    return register_group(
        app,
        "topics",
        {
            "topics.list": lambda: partial(_topics_list, emit),
            "topics.man": lambda: partial(_topics_man, emit),
            "topics.names": lambda: partial(_topics_names, emit),
        },
    )
