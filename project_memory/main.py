# Copyright (c) 2026 Project Memory Contributors. All Rights Reserved.

"""
HTTP Application Entry Point.

FastAPI app exposing the same tools as the MCP server, for clients that
speak HTTP instead of MCP stdio.

Run: uvicorn project_memory.main:app  (or project-memory-mcp --http)
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from project_memory.api.middleware import TraceMiddleware
from project_memory.api.observability import router as observability_router
from project_memory.api.tools import router as tools_router
from project_memory.core.config import settings
from project_memory.core.context import init_server_context

logger = logging.getLogger("project_memory.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_server_context()
    logger.info("[project-memory] HTTP API ready")
    yield
    logger.info("[project-memory] Shutdown complete")


app = FastAPI(
    title="Project Memory",
    description="Prompt provider for project memory workflows",
    version=settings.SERVER_VERSION,
    lifespan=lifespan,
)

# ── Middleware ───────────────────────────────────────────────
app.add_middleware(TraceMiddleware)

# ── Routes ──────────────────────────────────────────────────
app.include_router(tools_router, prefix="/api")
app.include_router(observability_router)
