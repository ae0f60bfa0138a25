"""End-to-end MCP checks: spawn `replference serve` and call tools over stdio."""

from __future__ import annotations

import json
import sys

import pytest
from mcp.client.session import ClientSession
from mcp.client.stdio import StdioServerParameters, stdio_client
from mcp.types import CallToolResult, TextContent


def _tool_payload(call: CallToolResult) -> dict[str, object]:
    """The `{"result", "text"}` object a tool returned, structured or as JSON text."""

    if isinstance(call.structuredContent, dict) and "result" in call.structuredContent:
        return call.structuredContent
    texts = [block.text for block in call.content if isinstance(block, TextContent)]
    for text in texts:
        try:
            decoded = json.loads(text)
        except json.JSONDecodeError:
            continue
        if isinstance(decoded, dict) and "result" in decoded:
            return decoded
    pytest.fail(f"tool call returned no payload object: {texts!r}")


@pytest.mark.asyncio
async def test_serve_exposes_operations_as_tools(package_root, cli_env) -> None:
    server = StdioServerParameters(
        command=sys.executable,
        args=["-m", "replference", "serve"],
        env=cli_env,
        cwd=package_root,
    )

    async with stdio_client(server) as streams, ClientSession(*streams) as session:
        await session.initialize()

        tools = {tool.name for tool in (await session.list_tools()).tools}
        assert tools >= {
            "topics_list",
            "topics_man",
            "topics_names",
            "types_subtree",
            "catalog_generate",
        }
        assert "catalog_write" not in tools

        grid = await session.call_tool("topics_names", {"topic": "sets", "stdlib": "true"})
        assert not grid.isError
        payload = _tool_payload(grid)
        result = payload["result"]
        assert isinstance(result, dict)
        assert result["topic_id"] == "sets"
        assert result["sections"][-1]["title"] == "Stdlib"
        text = payload["text"]
        assert isinstance(text, str)
        assert text.startswith("Functions\n")
        assert max(len(line) for line in text.splitlines()) <= 80

        tree = await session.call_tool(
            "types_subtree", {"type_name": "numbers.Number", "max_depth": 0}
        )
        assert not tree.isError
        tree_payload = _tool_payload(tree)
        assert tree_payload["result"]["root"] == "numbers.Number"  # type: ignore[index]
        assert "numbers.Integral" in str(tree_payload["text"])

        missing = await session.call_tool("topics_man", {"topic": "quaternions"})
        assert missing.isError
