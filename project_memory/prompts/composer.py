# Copyright (c) 2026 Project Memory Contributors. All Rights Reserved.

"""
Prompt Composer — Decides which text a workflow tool returns.

Resolution order for a template such as "review.md":

  base.md override + review.md override  ->  base, separator, review
  only one of them                       ->  that override alone
  neither                                ->  built-in fallback

Placeholders are injected on every path, then the result goes through
the LengthGovernor.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from project_memory.prompts.governor import LengthGovernor
from project_memory.prompts.placeholders import PlaceholderInjector
from project_memory.prompts.resolver import OverrideResolver

logger = logging.getLogger("project_memory.prompts.composer")

BASE_TEMPLATE = "base.md"
SEPARATOR = "\n\n---\n\n"

SOURCE_FALLBACK = "fallback"
SOURCE_OVERRIDE = "override"
SOURCE_COMPOSED = "composed"


@dataclass(frozen=True)
class ComposedPrompt:
    content: str
    source: str  # "fallback" | "override" | "composed"
    label: str


class PromptComposer:

    def __init__(
        self,
        resolver: OverrideResolver,
        injector: PlaceholderInjector,
        governor: LengthGovernor,
    ) -> None:
        self.resolver = resolver
        self.injector = injector
        self.governor = governor

    async def resolve_prompt(
        self,
        project_root: Union[str, Path],
        template_name: str,
        fallback: str,
    ) -> ComposedPrompt:
        """Resolve, compose, inject and govern the prompt for template_name."""
        # base.md is never composed with itself
        if template_name == BASE_TEMPLATE:
            base = None
        else:
            base = await self.resolver.resolve(project_root, BASE_TEMPLATE)
        specific = await self.resolver.resolve(project_root, template_name)

        # Empty override files count as absent
        if not base and not specific:
            return self._finish(fallback, SOURCE_FALLBACK, "fallback", template_name)

        if base and specific:
            return self._finish(
                base + SEPARATOR + specific,
                SOURCE_COMPOSED,
                f"{template_name} (composed)",
                template_name,
            )

        return self._finish(base or specific, SOURCE_OVERRIDE, template_name, template_name)

    async def compose(
        self,
        project_root: Union[str, Path],
        template_name: str,
        fallback: str,
    ) -> str:
        result = await self.resolve_prompt(project_root, template_name, fallback)
        return result.content

    def render(self, content: str, label: str) -> str:
        """Inject and govern text that has no project override."""
        content = self.injector.inject(content)
        self.governor.check(content, label)
        return content

    def _finish(self, content: str, source: str, label: str, template: str) -> ComposedPrompt:
        content = self.render(content, label)
        logger.debug(
            "Resolved %s from %s (%d chars)", label, source, len(content),
            extra={"template": template},
        )
        return ComposedPrompt(content=content, source=source, label=label)
