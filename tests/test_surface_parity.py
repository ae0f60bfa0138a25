"""The CLI and the MCP server expose the same registry operations."""

from __future__ import annotations

from dataclasses import dataclass, fields

import pytest

from replference.cli.main import get_registered_cli_commands, get_registered_cli_descriptions
from replference.lib.ops.registry import (
    OperationSpec,
    get_all_operations,
    get_group_operations,
    get_operation,
    operation,
)
from replference.server.main import get_registered_mcp_descriptions, get_registered_mcp_tools


@dataclass(frozen=True, slots=True)
class _ScratchInput:
    pass


@dataclass(frozen=True, slots=True)
class _ScratchOutput:
    def format_text(self, ctx: object = None) -> str:
        return "scratch"


def _scratch_spec(name: str) -> OperationSpec:
    return OperationSpec(
        name=name,
        handler=lambda _: _ScratchOutput(),
        input_type=_ScratchInput,
        output_type=_ScratchOutput,
        description="scratch operation",
    )


_OPERATION_NAMES = {
    "catalog.generate",
    "catalog.write",
    "topics.list",
    "topics.man",
    "topics.names",
    "types.subtree",
}


def test_registry_loads_every_operation_module_in_name_order() -> None:
    names = [op.name for op in get_all_operations()]

    assert set(names) >= _OPERATION_NAMES
    assert names == sorted(names)


@pytest.mark.parametrize("name", sorted(_OPERATION_NAMES))
def test_operation_is_mounted_on_its_surfaces(name: str) -> None:
    op = get_operation(name)

    assert (op.mcp_name in get_registered_mcp_tools()) is not op.cli_only
    assert f"{op.cli_group}.{op.cli_name}" in get_registered_cli_commands()


def test_catalog_write_is_cli_only() -> None:
    assert get_operation("catalog.write").cli_only
    assert "catalog_write" not in get_registered_mcp_tools()


def test_both_surfaces_share_one_description() -> None:
    cli_help = get_registered_cli_descriptions()
    mcp_help = get_registered_mcp_descriptions()
    shared = [op for op in get_all_operations() if not op.cli_only]

    assert shared
    assert {op.name: cli_help[op.name] for op in shared} == {
        op.name: mcp_help[op.name] for op in shared
    }


def test_surface_names_follow_the_dotted_name() -> None:
    op = get_operation("topics.names")

    assert (op.cli_group, op.cli_name, op.mcp_name) == ("topics", "names", "topics_names")
    assert [item.name for item in get_group_operations("types")] == ["types.subtree"]


def test_registering_an_existing_name_fails() -> None:
    with pytest.raises(ValueError, match="Duplicate operation name 'topics.man'"):
        operation(_scratch_spec("topics.man"))


@pytest.mark.parametrize("name", ["topics", ".man", "topics."])
def test_name_needs_group_and_command(name: str) -> None:
    with pytest.raises(ValueError, match="<group>.<command>"):
        operation(_scratch_spec(name))


def test_every_operation_is_reachable_from_the_cli() -> None:
    commands = get_registered_cli_commands()

    assert "mcp_only" not in {field.name for field in fields(OperationSpec)}
    for op in get_all_operations():
        assert f"{op.cli_group}.{op.cli_name}" in commands
        assert op in get_group_operations(op.cli_group)
