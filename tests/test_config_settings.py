"""User config loading: TOML file, coercion and environment overrides."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

import pytest

from replference.lib.config._paths import resolve_home
from replference.lib.config.settings import (
    DisplayConfig,
    ReplferenceConfig,
    TopicsConfig,
    load_config,
)


def _install_config(home: Path, content: str) -> None:
    config_path = home / "config.toml"
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(content, encoding="utf-8")


def test_load_config_from_fixture_toml(fixtures_dir: Path, tmp_path: Path) -> None:
    home = tmp_path / "custom-home"
    home.mkdir()
    fixture_path = fixtures_dir / "config" / "config.toml"
    shutil.copyfile(fixture_path, home / "config.toml")

    loaded = load_config(home)

    assert loaded == ReplferenceConfig(
        display=DisplayConfig(width=60, column_gap=2, color="never"),
        topics=TopicsConfig(stdlib=True),
    )


def test_load_config_missing_file_returns_defaults(tmp_path: Path) -> None:
    loaded = load_config(tmp_path / "nowhere")

    assert loaded == ReplferenceConfig()
    assert loaded.display.column_gap == 4
    assert loaded.display.width is None


def test_load_config_uses_home_env_when_no_argument(replference_home: Path) -> None:
    _install_config(replference_home, "[display]\nwidth = 42\n")

    assert load_config().display.width == 42


def test_resolve_home_precedence(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    explicit = tmp_path / "explicit"
    monkeypatch.setenv("REPLFERENCE_HOME", str(tmp_path / "from-env"))

    assert resolve_home(explicit) == explicit.resolve()
    assert resolve_home() == (tmp_path / "from-env").resolve()

    monkeypatch.delenv("REPLFERENCE_HOME")
    assert resolve_home() == (Path.home() / ".replference").resolve()


def test_load_config_env_override(
    monkeypatch: pytest.MonkeyPatch,
    replference_home: Path,
) -> None:
    _install_config(
        replference_home,
        (
            "[display]\n"
            "width = 60\n"
            "column_gap = 2\n"
        ),
    )
    monkeypatch.setenv("REPLFERENCE_WIDTH", "120")
    monkeypatch.setenv("REPLFERENCE_COLOR", " Always ")

    loaded = load_config()

    assert loaded.display.width == 120
    assert loaded.display.color == "always"
    assert loaded.display.column_gap == 2


def test_blank_env_override_is_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REPLFERENCE_COLUMN_GAP", "  ")

    assert load_config().display.column_gap == 4


def test_invalid_env_override_names_the_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REPLFERENCE_WIDTH", "wide")

    with pytest.raises(ValueError, match="REPLFERENCE_WIDTH"):
        load_config()


def test_env_width_must_be_positive(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REPLFERENCE_WIDTH", "0")

    with pytest.raises(ValueError, match="expected int >= 1"):
        load_config()


def test_load_config_warns_on_unknown_keys(
    caplog: pytest.LogCaptureFixture,
    replference_home: Path,
) -> None:
    _install_config(
        replference_home,
        (
            "[display]\n"
            "width = 50\n"
            "font = 'mono'\n"
            "\n"
            "[mystery]\n"
            "value = 123\n"
        ),
    )
    caplog.set_level(logging.WARNING, logger="replference.lib.config.settings")

    loaded = load_config()

    assert loaded.display.width == 50
    messages = [record.getMessage() for record in caplog.records]
    assert any("display.font" in message for message in messages)
    assert any("mystery" in message for message in messages)


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        ("[display]\nwidth = 'wide'\n", "display.width"),
        ("[display]\nwidth = 0\n", "display.width"),
        ("[display]\ncolumn_gap = -1\n", "display.column_gap"),
        ("[display]\ncolor = 'sometimes'\n", "display.color"),
        ("[display]\nwidth = true\n", "display.width"),
        ("[topics]\nstdlib = 'yes'\n", "topics.stdlib"),
        ("display = 3\n", "'display'"),
    ],
)
def test_load_config_rejects_invalid_values(
    replference_home: Path,
    content: str,
    expected: str,
) -> None:
    _install_config(replference_home, content)

    with pytest.raises(ValueError, match=expected):
        load_config()


def test_malformed_toml_raises_value_error(replference_home: Path) -> None:
    _install_config(replference_home, "[display\nwidth = 3\n")

    with pytest.raises(ValueError):
        load_config()
