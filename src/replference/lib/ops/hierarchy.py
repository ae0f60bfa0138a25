"""Type hierarchy operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from replference.lib.hierarchy import qualified_name, resolve_type, subtype_tree
from replference.lib.ops.registry import OperationSpec, operation

if TYPE_CHECKING:
    from replference.lib.formatting import FormatContext


@dataclass(frozen=True, slots=True)
class TypesSubtreeInput:
    type_name: str = ""
    max_depth: int = 1


@dataclass(frozen=True, slots=True)
class SubtreeOutput:
    root: str
    lines: tuple[str, ...]

    def format_text(self, ctx: FormatContext | None = None) -> str:
        return "\n".join(self.lines) if self.lines else self.root


def types_subtree(payload: TypesSubtreeInput) -> SubtreeOutput:
    cls = resolve_type(payload.type_name)
    lines = subtype_tree(cls, max_depth=payload.max_depth)
    return SubtreeOutput(root=qualified_name(cls), lines=tuple(lines))


operation(
    OperationSpec[TypesSubtreeInput, SubtreeOutput](
        name="types.subtree",
        handler=types_subtree,
        input_type=TypesSubtreeInput,
        output_type=SubtreeOutput,
        description="Print the loaded subclasses of a type as a tree.",
    )
)
