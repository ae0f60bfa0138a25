"""Output format selection and emission."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

import pytest

from replference.cli.output import OutputConfig, emit, normalize_output_format
from replference.lib.formatting import FormatContext
from replference.lib.serialization import to_jsonable


@dataclass(frozen=True, slots=True)
class _Row:
    name: str
    path: Path


@dataclass(frozen=True, slots=True)
class _Formatted:
    value: str

    def format_text(self, ctx: FormatContext | None = None) -> str:
        width = ctx.width if ctx is not None else 0
        return f"{self.value}@{width}"


def test_normalize_output_format_flags_win() -> None:
    assert normalize_output_format(requested=None, json_mode=False, porcelain_mode=False) == "text"
    assert normalize_output_format(requested="text", json_mode=True, porcelain_mode=False) == "json"
    assert (
        normalize_output_format(requested=None, json_mode=False, porcelain_mode=True)
        == "porcelain"
    )
    assert normalize_output_format(requested=" JSON ", json_mode=False, porcelain_mode=False) == (
        "json"
    )


def test_normalize_output_format_rejects_unknown() -> None:
    with pytest.raises(SystemExit, match="--format must be one of"):
        normalize_output_format(requested="yaml", json_mode=False, porcelain_mode=False)


def test_to_jsonable_walks_dataclasses_in_field_order() -> None:
    payload = to_jsonable({"rows": (_Row(name="a", path=Path("x/y")),), "kind": int})

    assert payload == {"rows": [{"name": "a", "path": "x/y"}], "kind": "builtins.int"}
    assert list(payload["rows"][0]) == ["name", "path"]


def test_emit_text_uses_format_context(capsys: pytest.CaptureFixture[str]) -> None:
    emit(_Formatted(value="grid"), OutputConfig(format="text", context=FormatContext(width=33)))

    assert capsys.readouterr().out == "grid@33\n"


def test_emit_json_keeps_unicode(capsys: pytest.CaptureFixture[str]) -> None:
    emit({"rule": "≡≡≡", "labels": ("π",)}, OutputConfig(format="json"))

    out = capsys.readouterr().out
    assert "≡≡≡" in out
    assert json.loads(out) == {"labels": ["π"], "rule": "≡≡≡"}


def test_emit_porcelain_prints_sorted_key_values(capsys: pytest.CaptureFixture[str]) -> None:
    emit(_Row(name="a", path=Path("p")), OutputConfig(format="porcelain"))

    assert capsys.readouterr().out == "name=a\tpath=p\n"


def test_emit_text_falls_back_to_json_for_plain_values(
    capsys: pytest.CaptureFixture[str],
) -> None:
    emit({"b": 1, "a": 2}, OutputConfig(format="text"))

    assert json.loads(capsys.readouterr().out) == {"a": 2, "b": 1}
