# Copyright (c) 2026 Project Memory Contributors. All Rights Reserved.
"""Unit tests for ToolDispatcher."""

import logging

import pytest

from project_memory.core.metrics import Metrics
from project_memory.prompts.composer import SEPARATOR
from project_memory.prompts.registry import TemplateRegistry
from project_memory.prompts.resolver import OVERRIDE_DIR
from project_memory.tools.dispatcher import ToolDispatcher, ToolResponse
from project_memory.tools.routing import load_routes_from_string

ROUTES_YAML = """
tools:
  - {name: review, mode: compose, template: review.md}
  - {name: init, mode: builtin, template: init.md}
  - {name: get-new-review-prompt, mode: template, template: review.md}
  - {name: broken, mode: compose, template: missing.md}
"""


@pytest.fixture
def metrics():
    return Metrics()


@pytest.fixture
def dispatcher(composer, project_root, metrics):
    reg = TemplateRegistry({
        "review.md": "BUILTIN REVIEW\n[TASK_SCHEMA]",
        "init.md": "BUILTIN INIT [TASK_SCHEMA]",
        "task-schema.json": "{}",
    })
    return ToolDispatcher(
        load_routes_from_string(ROUTES_YAML), reg, composer, project_root, metrics=metrics,
    )


class TestToolResponse:
    def test_to_mcp(self):
        resp = ToolResponse(content="hello")
        assert resp.to_mcp() == {
            "content": [{"type": "text", "text": "hello"}],
            "isError": False,
        }

    def test_error_flag(self):
        assert ToolResponse(content="Error: x", is_error=True).to_mcp()["isError"] is True


class TestToolDispatcher:
    @pytest.mark.asyncio
    async def test_compose_route_uses_fallback(self, dispatcher, registry):
        resp = await dispatcher.handle("review")
        assert resp.is_error is False
        assert resp.content == "BUILTIN REVIEW\n" + registry["task-schema.json"]

    @pytest.mark.asyncio
    async def test_compose_route_uses_overrides(self, dispatcher, write_override):
        write_override("base.md", "BASE")
        write_override("review.md", "REVIEW")
        resp = await dispatcher.handle("review")
        assert resp.content == "BASE" + SEPARATOR + "REVIEW"

    @pytest.mark.asyncio
    async def test_builtin_route_ignores_overrides_but_injects(self, dispatcher, write_override, registry):
        write_override("init.md", "CUSTOM INIT")
        resp = await dispatcher.handle("init")
        assert resp.content == "BUILTIN INIT " + registry["task-schema.json"]

    @pytest.mark.asyncio
    async def test_template_route_is_verbatim(self, dispatcher, write_override):
        write_override("base.md", "BASE")
        write_override("review.md", "CUSTOM REVIEW")
        resp = await dispatcher.handle("get-new-review-prompt")
        assert resp.is_error is False
        assert resp.content == "BUILTIN REVIEW\n[TASK_SCHEMA]"

    @pytest.mark.asyncio
    async def test_unknown_tool(self, dispatcher, metrics):
        resp = await dispatcher.handle("no-such-tool")
        assert resp.is_error is True
        assert resp.content == "Error: Unknown tool: no-such-tool"
        assert metrics.get_counter("tool_errors:<unknown>") == 1
        assert metrics.get_counter("tool_errors:no-such-tool") == 0

    @pytest.mark.asyncio
    async def test_missing_template_is_error_envelope(self, dispatcher):
        resp = await dispatcher.handle("broken")
        assert resp.is_error is True
        assert "missing.md" in resp.content

    @pytest.mark.asyncio
    async def test_unreadable_override_is_error_envelope(self, dispatcher, project_root):
        (project_root / OVERRIDE_DIR / "review.md").mkdir(parents=True)
        resp = await dispatcher.handle("review")
        assert resp.is_error is True
        assert resp.content.startswith("Error: ")

    @pytest.mark.asyncio
    async def test_permission_denied_is_error_envelope(self, dispatcher, monkeypatch):
        def deny(path):
            raise PermissionError(13, "Permission denied", str(path))

        monkeypatch.setattr("project_memory.prompts.resolver._read_exact", deny)
        resp = await dispatcher.handle("review")
        assert resp.is_error is True
        assert "Permission denied" in resp.content

    @pytest.mark.asyncio
    async def test_unreadable_override_does_not_affect_template_route(self, dispatcher, project_root):
        (project_root / OVERRIDE_DIR / "review.md").mkdir(parents=True)
        resp = await dispatcher.handle("get-new-review-prompt")
        assert resp.is_error is False

    @pytest.mark.asyncio
    async def test_metrics(self, dispatcher, metrics, write_override):
        await dispatcher.handle("review")
        write_override("review.md", "R")
        await dispatcher.handle("review")
        write_override("base.md", "B")
        await dispatcher.handle("review")

        assert metrics.get_counter("tool_calls:review") == 3
        assert metrics.get_counter("prompt_source:fallback") == 1
        assert metrics.get_counter("prompt_source:override") == 1
        assert metrics.get_counter("prompt_source:composed") == 1
        assert metrics.snapshot()["histogram_tool_latency:review"]["count"] == 3

    def test_list_tools_in_table_order(self, dispatcher):
        assert [r.name for r in dispatcher.list_tools()] == [
            "review", "init", "get-new-review-prompt", "broken",
        ]
        assert "review" in dispatcher
        assert dispatcher.get_route("nope") is None

    @pytest.mark.asyncio
    async def test_unknown_ids_share_one_counter_key(self, dispatcher, metrics):
        for i in range(50):
            await dispatcher.handle(f"junk-{i}")
        counters = metrics.snapshot()["counters"]
        assert counters == {"tool_calls:<unknown>": 50, "tool_errors:<unknown>": 50}

    @pytest.mark.asyncio
    async def test_error_path_records_latency(self, dispatcher, metrics):
        await dispatcher.handle("broken")
        summary = metrics.tool_summary("broken")
        assert summary["errors"] == 1
        assert summary["latency_ms"]["count"] == 1

    @pytest.mark.asyncio
    async def test_failure_log_carries_trace_id(self, dispatcher, caplog):
        caplog.set_level(logging.ERROR, logger="project_memory.tools.dispatcher")
        await dispatcher.handle("broken", trace_id="req-42")
        records = [r for r in caplog.records if r.name == "project_memory.tools.dispatcher"]
        assert len(records) == 1
        assert records[0].trace_id == "req-42"
        assert records[0].tool_id == "broken"
