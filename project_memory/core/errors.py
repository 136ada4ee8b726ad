# Copyright (c) 2026 Project Memory Contributors. All Rights Reserved.

"""
Error Taxonomy — Structured errors raised while resolving a tool call.

Missing override files are not errors (the resolver returns None).
Everything here is caught once, at the ToolDispatcher boundary.
"""

from __future__ import annotations

from typing import List


class PromptServerError(Exception):
    """Base error with a stable machine-readable code."""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(message)


class UnknownToolError(PromptServerError):
    def __init__(self, tool_id: str):
        self.tool_id = tool_id
        super().__init__(
            code="UNKNOWN_TOOL",
            message=f"Unknown tool: {tool_id}",
        )


class TemplateNotFoundError(PromptServerError):
    def __init__(self, template_name: str):
        self.template_name = template_name
        super().__init__(
            code="TEMPLATE_NOT_FOUND",
            message=f"No built-in template named '{template_name}'",
        )


class RoutingConfigError(PromptServerError):
    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__(
            code="ROUTING_CONFIG_ERROR",
            message="Tool routing table has validation errors: " + "; ".join(self.errors),
        )
