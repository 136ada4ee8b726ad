# Copyright (c) 2026 Project Memory Contributors. All Rights Reserved.

"""
API Middleware — Request trace ids.

Every request gets a trace id, taken from the X-Trace-Id header when the
client sends a usable one. Route handlers read it from request.state and
hand it to the dispatcher, so tool failure logs can be matched to the
HTTP call that caused them.
"""

from __future__ import annotations

import logging
import re
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("project_memory.api")

TRACE_HEADER = "X-Trace-Id"
TRACE_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,128}$")


def resolve_trace_id(header_value: str | None) -> str:
    """Client-supplied id if well-formed, otherwise a fresh uuid4."""
    if header_value and TRACE_ID_PATTERN.match(header_value):
        return header_value
    return str(uuid.uuid4())


def get_trace_id(request: Request) -> str | None:
    return getattr(request.state, "trace_id", None)


class TraceMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next):
        trace_id = resolve_trace_id(request.headers.get(TRACE_HEADER))
        request.state.trace_id = trace_id

        start = time.time()
        response = await call_next(request)
        response.headers[TRACE_HEADER] = trace_id

        logger.info(
            "%s %s -> %d (%.0fms)",
            request.method, request.url.path, response.status_code,
            (time.time() - start) * 1000,
            extra={"trace_id": trace_id},
        )
        return response
