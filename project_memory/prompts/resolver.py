# Copyright (c) 2026 Project Memory Contributors. All Rights Reserved.

"""
Override Resolver — Reads project-local prompt overrides.

Overrides live at <project root>/.project-memory/prompts/<template>. A
missing file is the normal "not customized" state and yields None; any
other I/O failure propagates to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger("project_memory.prompts.resolver")

OVERRIDE_DIR = Path(".project-memory") / "prompts"


def override_path(project_root: Union[str, Path], filename: str) -> Path:
    """Location of the override file for a template."""
    return Path(project_root) / OVERRIDE_DIR / filename


def _read_exact(path: Path) -> str:
    # newline="" keeps CRLF and lone CR as written
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


class OverrideResolver:
    """Resolves override files fresh on every call (no caching)."""

    async def resolve(
        self,
        project_root: Union[str, Path],
        filename: str,
    ) -> Optional[str]:
        """Return the override content for filename, or None if absent."""
        if not filename:
            raise ValueError("Template filename must be non-empty")

        path = override_path(project_root, filename)
        try:
            content = await asyncio.to_thread(_read_exact, path)
        except FileNotFoundError:
            return None

        logger.debug("Using project override %s (%d chars)", path, len(content))
        return content
