"""Path resolution helpers for user-level config and topic files."""

from __future__ import annotations

import os
from importlib.resources import files
from importlib.resources.abc import Traversable
from pathlib import Path


def resolve_home(explicit: Path | None = None) -> Path:
    """Resolve the directory holding `config.toml` and user topic files.

    Precedence:
    1. Explicit function argument.
    2. `REPLFERENCE_HOME` environment variable.
    3. `~/.replference`.
    """

    if explicit is not None:
        return explicit.expanduser().resolve()

    env_home = os.getenv("REPLFERENCE_HOME", "").strip()
    if env_home:
        return Path(env_home).expanduser().resolve()

    return (Path.home() / ".replference").resolve()


def config_path(home: Path) -> Path:
    return home / "config.toml"


def user_topics_dir(home: Path) -> Path:
    return home / "topics"


def bundled_topics_root() -> Traversable:
    """Return the package resource directory holding built-in topic files."""

    return files("replference.resources") / "topics"
