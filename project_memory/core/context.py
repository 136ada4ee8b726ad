# Copyright (c) 2026 Project Memory Contributors. All Rights Reserved.

"""
Server Context — Singleton that wires the prompt engine together.

Initialized at startup by the MCP and HTTP entry points, then shared by
every request handler.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from project_memory.core.errors import RoutingConfigError
from project_memory.core.metrics import server_metrics
from project_memory.prompts.composer import PromptComposer
from project_memory.prompts.governor import LengthGovernor
from project_memory.prompts.placeholders import PlaceholderInjector, build_default_injector
from project_memory.prompts.registry import TemplateRegistry, load_builtin_registry
from project_memory.prompts.resolver import OverrideResolver
from project_memory.tools.dispatcher import ToolDispatcher
from project_memory.tools.routing import ToolRoute, load_routes_from_yaml, validate_routes

logger = logging.getLogger("project_memory.context")


class ServerContext:
    """
    Holds all runtime references for the server.
    Created once at startup, used by all tool handlers.
    """

    def __init__(
        self,
        project_root: Path,
        registry: TemplateRegistry,
        routes: List[ToolRoute],
        injector: Optional[PlaceholderInjector] = None,
    ) -> None:
        errors = validate_routes(routes, registry)
        if errors:
            raise RoutingConfigError(errors)

        self.project_root = project_root
        self.registry = registry
        self.routes = routes
        self.injector = injector or build_default_injector(registry)
        self.governor = LengthGovernor()
        self.composer = PromptComposer(OverrideResolver(), self.injector, self.governor)
        self.dispatcher = ToolDispatcher(routes, registry, self.composer, project_root)


# ── Global singleton ────────────────────────────────────────

_ctx: Optional[ServerContext] = None


def init_server_context(
    project_root: Optional[Union[str, Path]] = None,
    registry: Optional[TemplateRegistry] = None,
    routes: Optional[List[ToolRoute]] = None,
) -> ServerContext:
    """Build the context. project_root defaults to the working directory."""
    global _ctx
    root = Path(project_root) if project_root is not None else Path.cwd()
    _ctx = ServerContext(
        project_root=root,
        registry=registry if registry is not None else load_builtin_registry(),
        routes=routes if routes is not None else load_routes_from_yaml(),
    )
    server_metrics.set_gauge("tools_registered", len(_ctx.routes))
    server_metrics.set_gauge("templates_registered", len(_ctx.registry))
    logger.info(
        "Server context ready: %d tools, %d templates, project root %s",
        len(_ctx.routes), len(_ctx.registry), root,
    )
    return _ctx


def get_server_context() -> ServerContext:
    if _ctx is None:
        raise RuntimeError("ServerContext not initialized. Call init_server_context() first.")
    return _ctx
