# Copyright (c) 2026 Project Memory Contributors. All Rights Reserved.

"""
Structured Logging — JSON lines on stderr.

stdout carries the MCP stdio protocol, so every handler installed here
writes to stderr.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Optional, TextIO


class StructuredFormatter(logging.Formatter):
    """JSON log formatter with tool/trace context."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "module": record.name,
            "message": record.getMessage(),
        }
        for key in ("trace_id", "tool_id", "template"):
            val = getattr(record, key, None)
            if val:
                log_entry[key] = val

        if record.exc_info and record.exc_info[0]:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False)


PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(
    level: str = "INFO",
    fmt: str = "json",
    stream: Optional[TextIO] = None,
) -> None:
    """Configure process logging. fmt is 'json' or 'plain'."""
    handler = logging.StreamHandler(stream or sys.stderr)
    if fmt == "plain":
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
    else:
        handler.setFormatter(StructuredFormatter())

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)
