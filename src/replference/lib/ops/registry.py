"""Operation registry shared by the CLI and MCP surfaces.

Operations are named `<group>.<command>`; the CLI mounts them as
`replference <group> <command>` and the MCP server as `<group>_<command>`.
Operation modules register themselves with `operation(...)` at import
time, and the lookups below import them on first use.
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")

_OPERATION_MODULES = (
    "replference.lib.ops.catalog",
    "replference.lib.ops.hierarchy",
    "replference.lib.ops.topics",
)


@dataclass(frozen=True, slots=True)
class OperationSpec(Generic[InputT, OutputT]):
    """A handler plus the typed input/output contract both surfaces expose."""

    name: str
    handler: Callable[[InputT], OutputT]
    input_type: type[InputT]
    output_type: type[OutputT]
    description: str
    cli_only: bool = False

    @property
    def cli_group(self) -> str:
        return self.name.partition(".")[0]

    @property
    def cli_name(self) -> str:
        return self.name.partition(".")[2]

    @property
    def mcp_name(self) -> str:
        return self.name.replace(".", "_")


_OPERATIONS: dict[str, OperationSpec[Any, Any]] = {}
_loaded_modules: set[str] = set()


def operation(spec: OperationSpec[InputT, OutputT]) -> OperationSpec[InputT, OutputT]:
    """Add `spec` to the registry, rejecting malformed or repeated names."""

    group, _, command = spec.name.partition(".")
    if not (group and command):
        raise ValueError(f"Operation name '{spec.name}' must look like '<group>.<command>'")
    existing = _OPERATIONS.get(spec.name)
    if existing is not None:
        raise ValueError(
            f"Duplicate operation name '{spec.name}' (first registered by {existing.handler!r})"
        )
    _OPERATIONS[spec.name] = spec
    return spec


def _load_operation_modules() -> None:
    for module_name in _OPERATION_MODULES:
        if module_name in _loaded_modules:
            continue
        importlib.import_module(module_name)
        # Recorded only after a clean import, so a failing module is retried.
        _loaded_modules.add(module_name)


def get_all_operations() -> list[OperationSpec[Any, Any]]:
    """Every registered operation, ordered by name."""

    _load_operation_modules()
    return sorted(_OPERATIONS.values(), key=lambda spec: spec.name)


def get_group_operations(group: str) -> list[OperationSpec[Any, Any]]:
    """The operations mounted under one command group."""

    return [op for op in get_all_operations() if op.cli_group == group]


def get_operation(name: str) -> OperationSpec[Any, Any]:
    _load_operation_modules()
    return _OPERATIONS[name]
