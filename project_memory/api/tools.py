# Copyright (c) 2026 Project Memory Contributors. All Rights Reserved.

"""
Tools API — List tools and invoke them over HTTP.

Invocations always answer 200 with the dispatcher envelope; failures are
reported through is_error, the same way the MCP transport reports them.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Request
from pydantic import BaseModel

from project_memory.api.middleware import get_trace_id
from project_memory.core.context import get_server_context
from project_memory.tools.dispatcher import ToolResponse

router = APIRouter(prefix="/tools", tags=["tools"])


class ToolInfo(BaseModel):
    name: str
    description: str = ""
    mode: str
    template: str


@router.get("", response_model=List[ToolInfo])
async def list_tools():
    """List every routed tool in table order."""
    ctx = get_server_context()
    return [ToolInfo(**route.get_info()) for route in ctx.dispatcher.list_tools()]


@router.post("/{tool_id}/call", response_model=ToolResponse)
async def call_tool(tool_id: str, request: Request):
    """Resolve a tool's prompt."""
    ctx = get_server_context()
    return await ctx.dispatcher.handle(tool_id, trace_id=get_trace_id(request))
