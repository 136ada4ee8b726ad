# Copyright (c) 2026 Project Memory Contributors. All Rights Reserved.

"""
Placeholder Injector — Substitutes [TOKEN] markers in prompt text.

Each known token is bound to exactly one canonical replacement. Bracketed
text that is not a known token is left alone, so markdown such as
"[file:line]" or "[TASK-ID]" passes through untouched.

Replacement values may not contain any known token. That keeps injection
idempotent: running it over already injected text changes nothing.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import List, Mapping

from project_memory.prompts.registry import TemplateRegistry

TOKEN_NAME_PATTERN = re.compile(r"^[A-Z][A-Z0-9_]*$")

TASK_SCHEMA_TOKEN = "TASK_SCHEMA"
TASK_SCHEMA_TEMPLATE = "task-schema.json"


def token_marker(name: str) -> str:
    return f"[{name}]"


class PlaceholderInjector:
    """Replaces every occurrence of every registered [TOKEN]."""

    def __init__(self, replacements: Mapping[str, str]) -> None:
        for name in replacements:
            if not TOKEN_NAME_PATTERN.match(name):
                raise ValueError(f"Invalid placeholder token name: '{name}'")

        for name, value in replacements.items():
            for other in replacements:
                if token_marker(other) in value:
                    raise ValueError(
                        f"Replacement for [{name}] contains placeholder [{other}]"
                    )

        self._replacements = MappingProxyType(dict(replacements))

    @property
    def tokens(self) -> List[str]:
        return sorted(self._replacements)

    def inject(self, text: str) -> str:
        for name, value in self._replacements.items():
            text = text.replace(token_marker(name), value)
        return text


def build_default_injector(registry: TemplateRegistry) -> PlaceholderInjector:
    """Injector for the built-in tokens, with values taken from the registry."""
    return PlaceholderInjector({
        TASK_SCHEMA_TOKEN: registry.get_template(TASK_SCHEMA_TEMPLATE),
    })
