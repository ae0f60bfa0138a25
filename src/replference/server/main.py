"""FastMCP stdio server exposing every registry operation as a tool.

Each tool returns the operation result as structured JSON under `result`,
plus the same text a terminal would show under `text`, rendered at a fixed
80-column width without ANSI codes.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Any, cast

import structlog
from mcp.server.fastmcp import FastMCP

from replference.lib.formatting import FormatContext
from replference.lib.logging import configure_logging
from replference.lib.ops import get_all_operations
from replference.lib.ops.codec import coerce_input_payload, signature_from_dataclass
from replference.lib.ops.registry import OperationSpec
from replference.lib.serialization import to_jsonable

logger = structlog.get_logger(__name__)

TOOL_TEXT_CONTEXT = FormatContext(width=80, color=False)

_REGISTERED_MCP_TOOLS: set[str] = set()
_REGISTERED_MCP_DESCRIPTIONS: dict[str, str] = {}


@asynccontextmanager
async def lifespan(_: FastMCP[Any]):
    configure_logging(json_mode=True)
    logger.info("server.started", tools=len(_REGISTERED_MCP_TOOLS))
    yield {}


mcp = FastMCP("replference", lifespan=lifespan)


def tool_result(result: Any) -> dict[str, Any]:
    """Pair the structured payload with its terminal rendering."""

    return {"result": to_jsonable(result), "text": result.format_text(TOOL_TEXT_CONTEXT)}


def _make_tool(op: OperationSpec[Any, Any]) -> Any:
    async def _tool(**arguments: object) -> object:
        payload = coerce_input_payload(op.input_type, arguments)
        # Handlers read topic files and import modules; keep the event loop free.
        result = await asyncio.to_thread(op.handler, payload)
        return tool_result(result)

    _tool.__name__ = op.mcp_name
    _tool.__doc__ = op.description
    cast("Any", _tool).__signature__ = signature_from_dataclass(op.input_type)
    return _tool


def register_operations(server: FastMCP[Any]) -> None:
    """Add one tool per operation not marked `cli_only`."""

    for op in get_all_operations():
        if op.cli_only:
            continue
        server.tool(name=op.mcp_name, description=op.description)(_make_tool(op))
        _REGISTERED_MCP_TOOLS.add(op.mcp_name)
        _REGISTERED_MCP_DESCRIPTIONS[op.name] = op.description


def get_registered_mcp_tools() -> set[str]:
    return set(_REGISTERED_MCP_TOOLS)


def get_registered_mcp_descriptions() -> dict[str, str]:
    return dict(_REGISTERED_MCP_DESCRIPTIONS)


def run_server() -> None:
    """Serve MCP over stdio until the client closes the stream."""

    mcp.run(transport="stdio")


register_operations(mcp)


if __name__ == "__main__":
    run_server()
