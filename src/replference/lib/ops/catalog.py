"""Standard-library name catalog operations."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from replference.lib.names import DEFAULT_MODULES, names_to_dict, write_names_file
from replference.lib.ops.registry import OperationSpec, operation
from replference.lib.sections import Section, render_sections

if TYPE_CHECKING:
    from replference.lib.formatting import FormatContext


@dataclass(frozen=True, slots=True)
class CatalogGenerateInput:
    modules: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class CatalogWriteInput:
    dest: str = ""
    modules: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class CatalogGenerateOutput:
    modules: tuple[str, ...]
    categories: dict[str, tuple[str, ...]]

    def format_text(self, ctx: FormatContext | None = None) -> str:
        """One grid per category, in category order."""
        sections = [Section(title=name, labels=labels) for name, labels in self.categories.items()]
        return render_sections(sections, ctx) or "(no documented names found)"


@dataclass(frozen=True, slots=True)
class CatalogWriteOutput:
    path: str
    counts: dict[str, int]

    def format_text(self, ctx: FormatContext | None = None) -> str:
        from replference.cli.format_helpers import kv_block

        pairs: list[tuple[str, str | None]] = [("path", self.path)]
        pairs.extend((category, str(count)) for category, count in self.counts.items())
        return kv_block(pairs)


def _modules(requested: tuple[str, ...]) -> tuple[str, ...]:
    cleaned = tuple(name.strip() for name in requested if name.strip())
    return cleaned or DEFAULT_MODULES


def catalog_generate(payload: CatalogGenerateInput) -> CatalogGenerateOutput:
    modules = _modules(payload.modules)
    names = names_to_dict(modules)
    return CatalogGenerateOutput(
        modules=modules,
        categories={category: tuple(labels) for category, labels in names.items()},
    )


def catalog_write(payload: CatalogWriteInput) -> CatalogWriteOutput:
    dest_text = payload.dest.strip()
    if not dest_text:
        raise ValueError("Destination path must not be empty.")
    names = names_to_dict(_modules(payload.modules))
    path = write_names_file(names, Path(dest_text).expanduser())
    return CatalogWriteOutput(
        path=path.as_posix(),
        counts={category: len(labels) for category, labels in names.items()},
    )


operation(
    OperationSpec[CatalogGenerateInput, CatalogGenerateOutput](
        name="catalog.generate",
        handler=catalog_generate,
        input_type=CatalogGenerateInput,
        output_type=CatalogGenerateOutput,
        description="Scan standard-library modules and group their names by category.",
    )
)

operation(
    OperationSpec[CatalogWriteInput, CatalogWriteOutput](
        name="catalog.write",
        handler=catalog_write,
        input_type=CatalogWriteInput,
        output_type=CatalogWriteOutput,
        description="Write the scanned name catalog to a text file.",
        cli_only=True,
    )
)
