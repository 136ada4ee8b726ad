# Copyright (c) 2026 Project Memory Contributors. All Rights Reserved.

"""
MCP Server Entry Point — Serves project memory prompts over stdio.

A pure prompt provider: every tool returns instructions for the calling
agent to execute. The server never writes project files.

Usage (MCP stdio, default):
    project-memory-mcp

Usage (HTTP API):
    project-memory-mcp --http [--port 8765]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Any, Dict, List, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from project_memory.core.config import settings
from project_memory.core.context import ServerContext, init_server_context
from project_memory.core.logging import setup_logging

logger = logging.getLogger("project_memory.server")

# No tool takes arguments
EMPTY_INPUT_SCHEMA: Dict[str, Any] = {"type": "object", "properties": {}}


class ToolInvocationError(Exception):
    """Carries an error envelope's text to the MCP layer as an isError result."""


def build_mcp_server(ctx: ServerContext) -> Server:
    """Create a low-level MCP server whose tools are the routing table."""
    server = Server(settings.SERVER_NAME, version=settings.SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [
            types.Tool(
                name=route.name,
                description=route.description,
                inputSchema=EMPTY_INPUT_SCHEMA,
            )
            for route in ctx.dispatcher.list_tools()
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> List[types.TextContent]:
        response = await ctx.dispatcher.handle(name)
        if response.is_error:
            # The MCP server turns handler exceptions into isError results
            raise ToolInvocationError(response.content)
        return [types.TextContent(type="text", text=response.content)]

    return server


async def run_stdio(ctx: ServerContext) -> None:
    server = build_mcp_server(ctx)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Project Memory MCP server running on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run_http(host: str, port: int) -> None:
    import uvicorn

    uvicorn.run("project_memory.main:app", host=host, port=port, log_config=None)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Project Memory prompt server")
    parser.add_argument("--http", action="store_true", help="Serve the HTTP API instead of MCP stdio")
    parser.add_argument("--host", default=settings.HTTP_HOST, help="HTTP bind host")
    parser.add_argument("--port", type=int, default=settings.HTTP_PORT, help="HTTP bind port")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL, help="Log level")
    args = parser.parse_args(argv)

    setup_logging(args.log_level, settings.LOG_FORMAT)

    if args.http:
        logger.info("Starting HTTP API on %s:%d", args.host, args.port)
        run_http(args.host, args.port)
        return

    ctx = init_server_context()
    asyncio.run(run_stdio(ctx))


if __name__ == "__main__":
    main()
