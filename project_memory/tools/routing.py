# Copyright (c) 2026 Project Memory Contributors. All Rights Reserved.

"""
Tool Routing — Load and validate the declarative tool table (tools.yaml).

Each route names a tool, the template it serves and how it is served:

  compose   project override aware (base.md + specific, or fallback)
  builtin   built-in workflow prompt, never overridden
  template  canonical built-in text returned verbatim for diffing
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel

from project_memory.prompts.registry import TemplateRegistry

logger = logging.getLogger("project_memory.tools.routing")

ROUTES_FILE = Path(__file__).parent / "tools.yaml"


class RouteMode(str, Enum):
    COMPOSE = "compose"
    BUILTIN = "builtin"
    TEMPLATE = "template"


class ToolRoute(BaseModel):
    name: str
    template: str
    mode: RouteMode = RouteMode.COMPOSE
    description: str = ""

    @property
    def uses_override(self) -> bool:
        return self.mode is RouteMode.COMPOSE

    def get_info(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "mode": self.mode.value,
            "template": self.template,
        }


def _parse_routes(config: Optional[Dict[str, Any]]) -> List[ToolRoute]:
    entries = (config or {}).get("tools", [])
    return [ToolRoute(**entry) for entry in entries]


def load_routes_from_yaml(path: str | Path = ROUTES_FILE) -> List[ToolRoute]:
    """Load the routing table from a YAML file, in declaration order."""
    with open(path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f)
    return _parse_routes(config)


def load_routes_from_string(yaml_content: str) -> List[ToolRoute]:
    """Load the routing table from a YAML string."""
    return _parse_routes(yaml.safe_load(yaml_content))


def validate_routes(
    routes: List[ToolRoute],
    registry: Optional[TemplateRegistry] = None,
) -> List[str]:
    """
    Validate a routing table. Returns list of error messages (empty = valid).

    Checks:
      1. Tool names are non-empty and unique
      2. Every route names a template
      3. If registry provided, every template has a built-in entry
    """
    errors = []
    seen = set()

    for route in routes:
        if not route.name:
            errors.append(f"Route for template '{route.template}' has no tool name")
        elif route.name in seen:
            errors.append(f"Duplicate tool name: '{route.name}'")
        seen.add(route.name)

        if not route.template:
            errors.append(f"Tool '{route.name}' has no template")
        elif registry is not None and route.template not in registry:
            errors.append(
                f"Template '{route.template}' not registered (referenced by tool '{route.name}')"
            )

    return errors
