# Copyright (c) 2026 Project Memory Contributors. All Rights Reserved.

"""
Shared test fixtures for all Project Memory tests.
"""

from pathlib import Path

import pytest

from project_memory.core.context import init_server_context
from project_memory.core.metrics import server_metrics
from project_memory.prompts.composer import PromptComposer
from project_memory.prompts.governor import LengthGovernor
from project_memory.prompts.placeholders import build_default_injector
from project_memory.prompts.registry import load_builtin_registry
from project_memory.prompts.resolver import OVERRIDE_DIR, OverrideResolver


@pytest.fixture(autouse=True)
def reset_metrics():
    """Metrics are a process-wide singleton; start every test clean."""
    server_metrics.reset()
    yield
    server_metrics.reset()


@pytest.fixture
def project_root(tmp_path) -> Path:
    """An empty project directory with no .project-memory/ at all."""
    return tmp_path


@pytest.fixture
def write_override(project_root):
    """Write .project-memory/prompts/<name> under the test project."""

    def _write(name: str, content: str) -> Path:
        path = project_root / OVERRIDE_DIR / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))
        return path

    return _write


@pytest.fixture(scope="session")
def registry():
    return load_builtin_registry()


@pytest.fixture
def composer(registry):
    return PromptComposer(
        OverrideResolver(),
        build_default_injector(registry),
        LengthGovernor(),
    )


@pytest.fixture
def server_context(project_root):
    """Initialize the global ServerContext against the test project."""
    return init_server_context(project_root)
