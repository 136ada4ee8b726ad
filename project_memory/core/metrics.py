# Copyright (c) 2026 Project Memory Contributors. All Rights Reserved.

"""
Metrics — Per-tool call accounting for the prompt server.

Key scheme (all counters unless noted):

  tool_calls:<tool>        every invocation
  tool_errors:<tool>       invocations answered with an error envelope
  prompt_source:<source>   fallback | override | composed, compose-mode tools only
  tool_latency:<tool>      histogram, milliseconds, success and error alike
  prompt_length_warnings   LengthGovernor reports

Ids that are not in the routing table are all counted under
UNKNOWN_TOOL_KEY so arbitrary client input cannot grow the key space.
"""

from __future__ import annotations

import time
from collections import defaultdict, deque
from typing import Any, Deque, Dict, Iterable, Optional

HISTOGRAM_WINDOW = 1000
UNKNOWN_TOOL_KEY = "<unknown>"


def _summarize(values: Iterable[float]) -> Optional[Dict[str, float]]:
    values = list(values)
    if not values:
        return None
    return {
        "count": len(values),
        "avg": round(sum(values) / len(values), 2),
        "max": round(max(values), 2),
        "min": round(min(values), 2),
    }


class Metrics:
    """In-memory collector shared by the dispatcher, governor and context."""

    def __init__(self):
        self._counters: Dict[str, int] = defaultdict(int)
        self._gauges: Dict[str, float] = {}
        self._histograms: Dict[str, Deque[float]] = defaultdict(
            lambda: deque(maxlen=HISTOGRAM_WINDOW)
        )
        self._start_time = time.time()

    def inc(self, name: str, amount: int = 1) -> None:
        self._counters[name] += amount

    def get_counter(self, name: str) -> int:
        return self._counters.get(name, 0)

    def set_gauge(self, name: str, value: float) -> None:
        self._gauges[name] = value

    def get_gauge(self, name: str) -> float:
        return self._gauges.get(name, 0.0)

    def observe(self, name: str, value: float) -> None:
        """Record a histogram sample; only the last HISTOGRAM_WINDOW are kept."""
        self._histograms[name].append(value)

    def record_tool_call(
        self,
        tool_id: str,
        elapsed_ms: float,
        source: Optional[str] = None,
        error: bool = False,
    ) -> None:
        """Account for one dispatcher invocation."""
        self.inc(f"tool_calls:{tool_id}")
        if error:
            self.inc(f"tool_errors:{tool_id}")
        if source:
            self.inc(f"prompt_source:{source}")
        self.observe(f"tool_latency:{tool_id}", elapsed_ms)

    def record_length_warning(self) -> None:
        self.inc("prompt_length_warnings")

    def tool_summary(self, tool_id: str) -> Dict[str, Any]:
        """Calls, errors and latency for a single tool."""
        return {
            "calls": self.get_counter(f"tool_calls:{tool_id}"),
            "errors": self.get_counter(f"tool_errors:{tool_id}"),
            "latency_ms": _summarize(self._histograms.get(f"tool_latency:{tool_id}", ())),
        }

    def snapshot(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "uptime_seconds": round(time.time() - self._start_time, 1),
            "counters": dict(self._counters),
            "gauges": dict(self._gauges),
        }
        for name, values in self._histograms.items():
            summary = _summarize(values)
            if summary:
                result[f"histogram_{name}"] = summary
        return result

    def reset(self) -> None:
        """Drop all recorded values (uptime keeps running)."""
        self._counters.clear()
        self._gauges.clear()
        self._histograms.clear()


server_metrics = Metrics()
