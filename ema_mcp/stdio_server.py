#!/usr/bin/env python3
"""
EMA MCP Stdio Server

Serves the registered EMA tools over the Model Context Protocol on
stdin/stdout. Logging goes to stderr; stdout carries the protocol.
"""

import asyncio
import json
import logging
import os
import sys
from typing import Any, Dict

from dotenv import load_dotenv
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from .registry import execute_tool, get_all_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "ema-mcp-server"
ERROR_SOURCE = "EMA MCP Server"

server = Server(SERVER_NAME)


class ToolCallError(Exception):
    """Raised so the MCP SDK flags the tool result with isError."""


def format_error(message: str) -> str:
    return json.dumps({"error": message, "source": ERROR_SOURCE}, ensure_ascii=False, indent=2)


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List the registered EMA tools."""
    return [
        Tool(
            name=name,
            description=definition.description,
            inputSchema=definition.input_schema(),
        )
        for name, definition in get_all_tools().items()
    ]


@server.call_tool()
async def call_tool(name: str, arguments: Dict[str, Any]) -> list[TextContent]:
    """Run a tool and return its result as pretty-printed JSON text."""
    response = await execute_tool(name, **(arguments or {}))

    if not response["success"]:
        if response.get("error_type") == "not_found":
            message = f"Unknown tool: {name}"
        else:
            message = response.get("error", "Unknown error")
        raise ToolCallError(format_error(message))

    return [TextContent(
        type="text",
        text=json.dumps(response["result"], ensure_ascii=False, indent=2)
    )]


async def main():
    """Run the MCP server."""
    tools = get_all_tools()
    logger.info(f"EMA MCP server running on stdio with {len(tools)} tools")
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options()
        )


def run():
    """Console script entry point."""
    load_dotenv()
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    asyncio.run(main())


if __name__ == "__main__":
    run()
