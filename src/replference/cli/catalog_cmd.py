"""CLI command handlers for catalog.* operations."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Annotated

from cyclopts import Parameter

from replference.cli.registration import Emitter, register_group
from replference.lib.ops.catalog import (
    CatalogGenerateInput,
    CatalogWriteInput,
    catalog_generate,
    catalog_write,
)

if TYPE_CHECKING:
    from cyclopts import App

_ModulesOption = Annotated[
    tuple[str, ...],
    Parameter(
        name="--module",
        help="Module to scan (repeatable). Defaults to the built-in module set.",
        negative_iterable=(),
    ),
]


def _catalog_generate(emit: Emitter, modules: _ModulesOption = ()) -> None:
    emit(catalog_generate(CatalogGenerateInput(modules=modules)))


def _catalog_write(emit: Emitter, dest: str, modules: _ModulesOption = ()) -> None:
    emit(catalog_write(CatalogWriteInput(dest=dest, modules=modules)))


def register_catalog_commands(app: App, emit: Emitter) -> tuple[set[str], dict[str, str]]:
    return register_group(
        app,
        "catalog",
        {
            "catalog.generate": lambda: partial(_catalog_generate, emit),
            "catalog.write": lambda: partial(_catalog_write, emit),
        },
    )
