# Copyright (c) 2026 Project Memory Contributors. All Rights Reserved.

"""
Observability API — Health check and metrics.
"""

from __future__ import annotations

from fastapi import APIRouter

from project_memory.core.config import settings
from project_memory.core.context import get_server_context
from project_memory.core.metrics import server_metrics

router = APIRouter(tags=["observability"])


@router.get("/health")
async def health_check():
    ctx = get_server_context()
    return {
        "status": "ok",
        "version": settings.SERVER_VERSION,
        "project_root": str(ctx.project_root),
        "tools": len(ctx.routes),
        "templates": len(ctx.registry),
        "metrics": server_metrics.snapshot(),
    }


@router.get("/api/metrics")
async def get_metrics():
    """Return current server metrics."""
    return server_metrics.snapshot()
