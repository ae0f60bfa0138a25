"""`replference` command line: topic manuals, name grids and type trees.

Global display options (`--json`, `--format`, `--porcelain`, `--width`,
`--color`, `-v`) may appear anywhere before `--`; they are lifted out of
argv before cyclopts parses the remaining command.
"""

from __future__ import annotations

import logging
import shutil
import sys
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated, Any, cast

from cyclopts import App, Parameter

from replference import __version__
from replference.cli.catalog_cmd import register_catalog_commands
from replference.cli.output import OutputConfig, normalize_output_format
from replference.cli.output import emit as write_result
from replference.cli.topics_cmd import register_topics_commands
from replference.cli.types_cmd import register_types_commands
from replference.lib.config.settings import load_config
from replference.lib.formatting import FormatContext
from replference.lib.logging import configure_logging
from replference.lib.ops.topics import (
    TopicsManInput,
    TopicsNamesInput,
    topics_man,
    topics_names,
)
from replference.lib.styles import resolve_color

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    output: OutputConfig


@dataclass(frozen=True, slots=True)
class _RawGlobalOptions:
    output_format: str | None = None
    json_mode: bool = False
    porcelain_mode: bool = False
    width: int | None = None
    color: bool | None = None
    verbosity: int = 0


_DEFAULT_OPTIONS = GlobalOptions(output=OutputConfig(format="text"))
_ACTIVE_OPTIONS: ContextVar[GlobalOptions] = ContextVar(
    "replference_options", default=_DEFAULT_OPTIONS
)


def get_global_options() -> GlobalOptions:
    return _ACTIVE_OPTIONS.get()


def emit(payload: object) -> None:
    """Print a command result with the display options of the running invocation."""

    write_result(payload, get_global_options().output)


def _parse_width(raw: str) -> int:
    try:
        width = int(raw)
    except ValueError:
        raise SystemExit(f"--width expects an integer, got {raw!r}") from None
    if width < 1:
        raise SystemExit(f"--width must be >= 1, got {width}")
    return width


# Switches that take no value: flag -> (field, value). Verbosity accumulates.
_GLOBAL_SWITCHES: dict[str, tuple[str, object]] = {
    "--json": ("json_mode", True),
    "--no-json": ("json_mode", False),
    "--porcelain": ("porcelain_mode", True),
    "--no-porcelain": ("porcelain_mode", False),
    "--color": ("color", True),
    "--no-color": ("color", False),
    "-v": ("verbosity", 1),
    "--verbose": ("verbosity", 1),
    "-vv": ("verbosity", 2),
}

# Options that take a value, as `--opt value` or `--opt=value`.
_GLOBAL_VALUES: dict[str, tuple[str, Callable[[str], object]]] = {
    "--format": ("output_format", str),
    "--width": ("width", _parse_width),
}


def _extract_global_options(argv: Sequence[str]) -> tuple[list[str], _RawGlobalOptions]:
    """Pull global options out of `argv` wherever they appear before `--`."""

    found: dict[str, object] = {}
    verbosity = 0
    remaining: list[str] = []
    args = iter(argv)
    for arg in args:
        if arg == "--":
            remaining.append(arg)
            remaining.extend(args)
            break
        if arg in _GLOBAL_SWITCHES:
            name, value = _GLOBAL_SWITCHES[arg]
            if name == "verbosity":
                verbosity += cast("int", value)
            else:
                found[name] = value
            continue
        flag, has_inline, inline = arg.partition("=")
        if flag not in _GLOBAL_VALUES:
            remaining.append(arg)
            continue
        name, parse = _GLOBAL_VALUES[flag]
        raw = inline if has_inline else next(args, None)
        if raw is None:
            raise SystemExit(f"{flag} requires a value")
        found[name] = parse(raw)

    return remaining, _RawGlobalOptions(verbosity=verbosity, **cast("dict[str, Any]", found))


def _resolve_global_options(raw: _RawGlobalOptions) -> GlobalOptions:
    """Layer command-line options over config, environment and terminal defaults."""

    display = load_config().display
    resolved_format = normalize_output_format(
        requested=raw.output_format,
        json_mode=raw.json_mode,
        porcelain_mode=raw.porcelain_mode,
    )
    width = raw.width or display.width or shutil.get_terminal_size().columns
    color = raw.color if raw.color is not None else resolve_color(display.color, sys.stdout)
    context = FormatContext(
        verbosity=raw.verbosity,
        width=width,
        color=color and resolved_format == "text",
        gap=display.column_gap,
    )
    logger.debug("Display width %d, column gap %d, color %s.", width, context.gap, context.color)
    return GlobalOptions(output=OutputConfig(format=resolved_format, context=context))


app = App(
    name="replference",
    help="Terminal reference for Python language topics.",
    version=__version__,
    help_formatter="plain",
)

topics_app = App(name="topics", help="Topic manuals and name grids", help_formatter="plain")
types_app = App(name="types", help="Type hierarchy commands", help_formatter="plain")
catalog_app = App(
    name="catalog", help="Standard-library name catalog commands", help_formatter="plain"
)

app.command(topics_app, name="topics")
app.command(types_app, name="types")
app.command(catalog_app, name="catalog")


@app.default
def root(
    json_mode: Annotated[
        bool,
        Parameter(name="--json", help="Print results as a single JSON document."),
    ] = False,
    output_format: Annotated[
        str | None,
        Parameter(name="--format", help="Output format: text, json or porcelain."),
    ] = None,
    porcelain: Annotated[
        bool,
        Parameter(name="--porcelain", help="Print tab-separated key=value records."),
    ] = False,
    width: Annotated[
        int | None,
        Parameter(name="--width", help="Display width for grids (defaults to the terminal)."),
    ] = None,
    color: Annotated[
        bool | None,
        Parameter(name="--color", help="Force or disable ANSI emphasis on headers."),
    ] = None,
) -> None:
    """Show help; the options here apply to every subcommand."""

    app.help_print()


@app.command(name="man")
def man_alias(topic: str) -> None:
    """Shorthand for `topics man`."""

    emit(topics_man(TopicsManInput(topic=topic)))


@app.command(name="fun")
def fun_alias(
    topic: str,
    stdlib: Annotated[
        bool | None,
        Parameter(name="--stdlib", help="Also list related standard-library module names."),
    ] = None,
) -> None:
    """Shorthand for `topics names`."""

    emit(topics_names(TopicsNamesInput(topic=topic, stdlib=stdlib)))


@app.command(name="serve")
def serve() -> None:
    """Serve every operation as an MCP tool over stdio."""

    from replference.server.main import run_server

    run_server()


_CLI_COMMANDS: set[str] = set()
_CLI_HELP: dict[str, str] = {}

for _commands, _help in (
    register_topics_commands(topics_app, emit),
    register_types_commands(types_app, emit),
    register_catalog_commands(catalog_app, emit),
):
    _CLI_COMMANDS |= _commands
    _CLI_HELP |= _help


def get_registered_cli_commands() -> set[str]:
    return set(_CLI_COMMANDS)


def get_registered_cli_descriptions() -> dict[str, str]:
    return dict(_CLI_HELP)


def _error_text(exc: Exception) -> str:
    # KeyError's str() wraps the message in quotes.
    if isinstance(exc, KeyError) and exc.args:
        return str(exc.args[0])
    return str(exc).strip() or type(exc).__name__


def _fail(exc: Exception) -> SystemExit:
    print(f"error: {_error_text(exc)}", file=sys.stderr)
    return SystemExit(1)


def main(argv: Sequence[str] | None = None) -> None:
    """Run one `replference` invocation; errors print to stderr and exit 1."""

    remaining, raw_options = _extract_global_options(
        sys.argv[1:] if argv is None else list(argv)
    )
    # Before config loading, so config warnings land on stderr in the right shape.
    configure_logging(
        json_mode=raw_options.json_mode or raw_options.output_format == "json",
        verbosity=raw_options.verbosity,
    )

    try:
        options = _resolve_global_options(raw_options)
    except ValueError as exc:
        raise _fail(exc) from None

    token = _ACTIVE_OPTIONS.set(options)
    try:
        app(remaining)
    except (KeyError, ValueError, OSError) as exc:
        raise _fail(exc) from None
    finally:
        _ACTIVE_OPTIONS.reset(token)
