"""CLI command handlers for types.* operations."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Annotated

from cyclopts import Parameter

from replference.cli.registration import Emitter, register_group
from replference.lib.ops.hierarchy import TypesSubtreeInput, types_subtree

if TYPE_CHECKING:
    from cyclopts import App


def _types_subtree(
    emit: Emitter,
    type_name: str,
    max_depth: Annotated[
        int,
        Parameter(name="--depth", help="Levels of subclasses to expand (0 = unlimited)."),
    ] = 1,
) -> None:
    emit(types_subtree(TypesSubtreeInput(type_name=type_name, max_depth=max_depth)))


def register_types_commands(app: App, emit: Emitter) -> tuple[set[str], dict[str, str]]:
    return register_group(
        app,
        "types",
        {"types.subtree": lambda: partial(_types_subtree, emit)},
    )
