"""Global options are lifted out of argv before cyclopts sees it."""

from __future__ import annotations

import pytest

from replference.cli.main import _extract_global_options, _RawGlobalOptions


def test_options_are_extracted_from_any_position() -> None:
    cleaned, raw = _extract_global_options(
        ["topics", "--json", "names", "--width=40", "sets", "-v"]
    )

    assert cleaned == ["topics", "names", "sets"]
    assert raw == _RawGlobalOptions(json_mode=True, width=40, verbosity=1)


def test_value_options_accept_a_separate_argument() -> None:
    cleaned, raw = _extract_global_options(["--format", "porcelain", "topics", "list"])

    assert cleaned == ["topics", "list"]
    assert raw.output_format == "porcelain"


def test_verbosity_accumulates() -> None:
    _, raw = _extract_global_options(["-v", "--verbose", "-vv"])

    assert raw.verbosity == 4


def test_later_switch_wins() -> None:
    _, raw = _extract_global_options(["--color", "--no-color"])

    assert raw.color is False


def test_arguments_after_double_dash_are_left_alone() -> None:
    cleaned, raw = _extract_global_options(["man", "--", "--json"])

    assert cleaned == ["man", "--", "--json"]
    assert raw.json_mode is False


def test_missing_value_exits() -> None:
    with pytest.raises(SystemExit, match="--width requires a value"):
        _extract_global_options(["topics", "--width"])


@pytest.mark.parametrize("value", ["wide", "0"])
def test_invalid_width_exits(value: str) -> None:
    with pytest.raises(SystemExit, match="--width"):
        _extract_global_options(["--width", value])
