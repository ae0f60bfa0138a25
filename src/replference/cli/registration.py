"""Mount registry operations onto cyclopts sub-apps."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from replference.lib.ops.registry import get_group_operations

if TYPE_CHECKING:
    from cyclopts import App

Emitter = Callable[[Any], None]
HandlerFactory = Callable[[], Callable[..., None]]
Registered = tuple[set[str], dict[str, str]]


def register_group(app: App, group: str, handlers: dict[str, HandlerFactory]) -> Registered:
    """Add one command to `app` for each CLI-visible operation in `group`.

    Returns the `<group>.<command>` names mounted and each operation's help
    text keyed by operation name. An operation with no entry in `handlers`
    fails at import time rather than silently missing from the CLI.
    """

    commands: set[str] = set()
    help_texts: dict[str, str] = {}
    for op in get_group_operations(group):
        try:
            make_handler = handlers[op.name]
        except KeyError:
            raise ValueError(f"Operation '{op.name}' has no CLI handler") from None
        command = make_handler()
        command.__name__ = f"{op.cli_group}_{op.cli_name}"
        app.command(command, name=op.cli_name, help=op.description)
        commands.add(f"{op.cli_group}.{op.cli_name}")
        help_texts[op.name] = op.description
    return commands, help_texts
