# tests/test_commands.py

from __future__ import annotations

import json

from task_splitter.cli.commands import CommandRegistry, render_tree, short_id
from task_splitter.connectors.console_connector import handle_line
from task_splitter.providers.models import ProviderType


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b")

    notes: list[str] = []
    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/b y", emit=notes.append) == "h3"
    assert called == {"h2": 1, "h3": 1}
    assert notes == ["note"]


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")


def test_plain_line_adds_root_task(state) -> None:
    out = handle_line(state, "  Write report  ")
    assert [n.text for n in state.task_store.tasks] == ["Write report"]
    assert "Write report" in (out or "")
    assert handle_line(state, "   ") is None


def test_split_done_and_clear_flow(state) -> None:
    node = state.task_store.add("Write report")

    out = handle_line(state, f"/split {short_id(node)}")
    children = state.task_store.get(node.id).subtasks
    assert [c.text for c in children] == ["Open editor", "Write intro", "Review draft"]
    assert "  [ ] Open editor" in (out or "")

    handle_line(state, f"/done {short_id(children[0])}")
    assert state.task_store.get(children[0].id).is_completed is True

    assert handle_line(state, "/clear done") == "Removed 1 task(s)."
    assert [c.text for c in state.task_store.get(node.id).subtasks] == ["Write intro", "Review draft"]

    handle_line(state, f"/rm {short_id(node)}")
    assert state.task_store.count() == 0
    assert render_tree(state).startswith("No tasks yet")


def test_split_reports_empty_response(state, provider) -> None:
    node = state.task_store.add("Write report")
    provider.next_text = None
    assert "unchanged" in (handle_line(state, f"/split {short_id(node)}") or "")


def test_split_requires_configured_provider(state, provider) -> None:
    node = state.task_store.add("Write report")
    provider.is_configured = False
    assert "not configured" in (handle_line(state, f"/split {short_id(node)}") or "")
    assert provider.prompts == []


def test_unknown_task_id(state) -> None:
    assert "No single task" in (handle_line(state, "/done ffffffffffff") or "")
    assert "Missing task id" in (handle_line(state, "/rm") or "")


def test_provider_key_and_ollama_commands_persist(state) -> None:
    assert "Set its key" in (handle_line(state, "/provider anthropic") or "")
    handle_line(state, "/key anthropic sk-ant-123")
    handle_line(state, "/ollama model mistral")

    cfg = state.config_store.get()
    assert cfg.selected_provider is ProviderType.ANTHROPIC
    assert cfg.anthropic_key == "sk-ant-123"
    assert cfg.ollama_model == "mistral"

    saved = json.loads(state.config_store.path.read_text("utf-8"))
    assert saved["anthropicKey"] == "sk-ant-123"
    assert saved["ollamaModel"] == "mistral"

    assert "Unknown provider" in (handle_line(state, "/provider gemini") or "")
    assert "Only anthropic and openai" in (handle_line(state, "/key ollama x") or "")


def test_status_and_update_commands(state) -> None:
    status = handle_line(state, "/status") or ""
    assert "Ollama (Local)" in status
    assert "Configured: yes" in status
    assert handle_line(state, "/update") == "Update checks are disabled."
