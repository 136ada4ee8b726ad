# Copyright (c) 2026 Project Memory Contributors. All Rights Reserved.

"""
Length Governor — Advisory line-count check for final prompt text.

Prompts longer than MAX_PROMPT_LINES bloat the agent's context, so they
are reported. The content is never truncated and the call never fails.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from project_memory.core.metrics import Metrics, server_metrics

logger = logging.getLogger("project_memory.prompts.governor")

MAX_PROMPT_LINES = 400


@dataclass(frozen=True)
class LengthDiagnostic:
    label: str
    line_count: int
    limit: int

    @property
    def message(self) -> str:
        return (
            f"Warning: {self.label} has {self.line_count} lines, exceeding the "
            f"{self.limit} line limit. Consider removing content or splitting "
            f"this prompt to prevent context bloat."
        )


def count_lines(content: str) -> int:
    """Newline-separated segments; "" is one line, N newlines are N+1 lines."""
    return content.count("\n") + 1


class LengthGovernor:

    def __init__(
        self,
        limit: int = MAX_PROMPT_LINES,
        metrics: Optional[Metrics] = None,
    ) -> None:
        self.limit = limit
        self._metrics = metrics or server_metrics

    def check(self, content: str, label: str) -> Optional[LengthDiagnostic]:
        """Warn if content exceeds the line limit. Returns the diagnostic, if any."""
        line_count = count_lines(content)
        if line_count <= self.limit:
            return None

        diagnostic = LengthDiagnostic(label=label, line_count=line_count, limit=self.limit)
        logger.warning(diagnostic.message, extra={"template": label})
        self._metrics.record_length_warning()
        return diagnostic
