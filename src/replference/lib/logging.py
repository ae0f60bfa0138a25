"""Structlog and stdlib logging setup shared by the CLI and the MCP server."""

from __future__ import annotations

import logging as std_logging
import sys

import structlog

# Index is the -v count; anything past the end is DEBUG.
_LEVELS = (std_logging.WARNING, std_logging.INFO, std_logging.DEBUG)


def level_for(verbosity: int) -> int:
    return _LEVELS[min(max(verbosity, 0), len(_LEVELS) - 1)]


def configure_logging(json_mode: bool = False, verbosity: int = 0) -> None:
    """Route stdlib and structlog records to stderr at the level `verbosity` selects.

    Stdout is reserved for grids, manuals and JSON payloads, and for the
    JSON-RPC stream when serving MCP over stdio.
    """

    level = level_for(verbosity)
    handler = std_logging.StreamHandler(sys.stderr)
    handler.setFormatter(std_logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    std_logging.basicConfig(level=level, handlers=[handler], force=True)

    processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if json_mode:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
