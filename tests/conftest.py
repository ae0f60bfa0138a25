"""Fixtures shared by unit tests and `python -m replference` subprocess checks."""

from __future__ import annotations

import os
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Callable

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
FIXTURES = PACKAGE_ROOT / "tests" / "fixtures"

# Display settings a developer shell may export; tests start from defaults.
_DISPLAY_ENV = (
    "REPLFERENCE_WIDTH",
    "REPLFERENCE_COLUMN_GAP",
    "REPLFERENCE_COLOR",
    "FORCE_COLOR",
    "NO_COLOR",
)


@dataclass(frozen=True, slots=True)
class CliResult:
    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @classmethod
    def from_completed(cls, completed: subprocess.CompletedProcess[str]) -> CliResult:
        return cls(
            args=tuple(completed.args[3:]),
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )


@pytest.fixture
def package_root() -> Path:
    return PACKAGE_ROOT


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture(autouse=True)
def replference_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty per-test home; a user's real config and topic overrides never apply."""

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("REPLFERENCE_HOME", str(home))
    for name in _DISPLAY_ENV:
        monkeypatch.delenv(name, raising=False)
    return home


@pytest.fixture
def cli_env(replference_home: Path) -> dict[str, str]:
    """Environment for child processes: source tree importable, 80-column terminal."""

    src = str(PACKAGE_ROOT / "src")
    pythonpath = os.pathsep.join(filter(None, (src, os.environ.get("PYTHONPATH"))))
    return {
        **os.environ,
        "PYTHONPATH": pythonpath,
        "REPLFERENCE_HOME": str(replference_home),
        "COLUMNS": "80",
    }


@pytest.fixture
def run_replference(cli_env: dict[str, str]) -> Callable[..., CliResult]:
    def _run(args: list[str], timeout: float = 15.0) -> CliResult:
        completed = subprocess.run(
            [sys.executable, "-m", "replference", *args],
            cwd=PACKAGE_ROOT,
            env=cli_env,
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout,
        )
        return CliResult.from_completed(completed)

    return _run
