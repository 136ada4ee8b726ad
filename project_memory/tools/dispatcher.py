# Copyright (c) 2026 Project Memory Contributors. All Rights Reserved.

"""
Tool Dispatcher — Maps a tool id to prompt text in a uniform envelope.

This is the single error boundary of the server: whatever goes wrong while
resolving a prompt (unknown tool, unreadable override, missing template)
comes back as ToolResponse(is_error=True) instead of an exception.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel

from project_memory.core.errors import UnknownToolError
from project_memory.core.metrics import UNKNOWN_TOOL_KEY, Metrics, server_metrics
from project_memory.prompts.composer import PromptComposer
from project_memory.prompts.registry import TemplateRegistry
from project_memory.tools.routing import RouteMode, ToolRoute

logger = logging.getLogger("project_memory.tools.dispatcher")


class ToolResponse(BaseModel):
    content: str
    is_error: bool = False

    def to_mcp(self) -> Dict[str, Any]:
        """MCP CallToolResult shape."""
        return {
            "content": [{"type": "text", "text": self.content}],
            "isError": self.is_error,
        }


class ToolDispatcher:
    """Generic lookup-and-compose loop over the routing table."""

    def __init__(
        self,
        routes: List[ToolRoute],
        registry: TemplateRegistry,
        composer: PromptComposer,
        project_root: Path,
        metrics: Optional[Metrics] = None,
    ) -> None:
        self._routes: Dict[str, ToolRoute] = {r.name: r for r in routes}
        self._registry = registry
        self._composer = composer
        self.project_root = project_root
        self._metrics = metrics or server_metrics

    def list_tools(self) -> List[ToolRoute]:
        return list(self._routes.values())

    def get_route(self, tool_id: str) -> Optional[ToolRoute]:
        return self._routes.get(tool_id)

    def __contains__(self, tool_id: str) -> bool:
        return tool_id in self._routes

    async def handle(self, tool_id: str, trace_id: Optional[str] = None) -> ToolResponse:
        """Resolve a tool invocation. Never raises."""
        route = self._routes.get(tool_id)
        metric_id = tool_id if route is not None else UNKNOWN_TOOL_KEY
        start = time.time()
        try:
            if route is None:
                raise UnknownToolError(tool_id)
            content, source = await self._render(route)
        except Exception as e:
            self._metrics.record_tool_call(metric_id, _elapsed_ms(start), error=True)
            logger.error(
                "Tool '%s' failed: %s", tool_id, e,
                extra={"tool_id": tool_id, "trace_id": trace_id},
            )
            return ToolResponse(content=f"Error: {e}", is_error=True)

        self._metrics.record_tool_call(metric_id, _elapsed_ms(start), source=source)
        return ToolResponse(content=content)

    async def _render(self, route: ToolRoute) -> Tuple[str, Optional[str]]:
        """Return (content, prompt source); source is None outside compose mode."""
        builtin = self._registry.get_template(route.template)

        if route.mode is RouteMode.COMPOSE:
            result = await self._composer.resolve_prompt(
                self.project_root, route.template, builtin,
            )
            return result.content, result.source

        if route.mode is RouteMode.BUILTIN:
            return self._composer.render(builtin, route.name), None

        # Canonical text for diffing: no override, tokens left in place
        self._composer.governor.check(builtin, f"{route.template} template")
        return builtin, None


def _elapsed_ms(start: float) -> float:
    return (time.time() - start) * 1000
