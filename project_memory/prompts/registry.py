# Copyright (c) 2026 Project Memory Contributors. All Rights Reserved.

"""
Template Registry — Read-only table of built-in prompt templates.

Templates are loaded once from the packaged templates/ directory and keyed
by file name ("sync.md", "task-schema.json", ...). The registry is the
fallback source when a project has no override, and the canonical source
for the get-new-* template tools.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, List, Mapping

from project_memory.core.errors import TemplateNotFoundError

logger = logging.getLogger("project_memory.prompts.registry")

TEMPLATES_DIR = Path(__file__).parent / "templates"
TEMPLATE_SUFFIXES = {".md", ".json"}


class TemplateRegistry(Mapping[str, str]):
    """Immutable template name -> built-in text mapping."""

    def __init__(self, templates: Mapping[str, str]) -> None:
        self._templates = MappingProxyType(dict(templates))

    def __getitem__(self, name: str) -> str:
        return self._templates[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def get_template(self, name: str) -> str:
        """Return a template's text, raising TemplateNotFoundError if unknown."""
        try:
            return self._templates[name]
        except KeyError:
            raise TemplateNotFoundError(name) from None

    def list_names(self) -> List[str]:
        return sorted(self._templates)


def load_builtin_registry(templates_dir: Path = TEMPLATES_DIR) -> TemplateRegistry:
    """Load every .md/.json file in templates_dir into a TemplateRegistry."""
    templates = {}
    for path in sorted(templates_dir.iterdir()):
        if not path.is_file() or path.suffix not in TEMPLATE_SUFFIXES:
            continue
        templates[path.name] = path.read_text(encoding="utf-8").strip()
    logger.info("Loaded %d built-in templates from %s", len(templates), templates_dir)
    return TemplateRegistry(templates)
