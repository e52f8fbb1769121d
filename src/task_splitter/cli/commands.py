# src/task_splitter/cli/commands.py

from __future__ import annotations

import asyncio
import contextlib
import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..providers.models import ProviderType
from ..tasks.task_models import TaskNode

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

SHORT_ID_LEN = 8

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /split, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  Any other line adds a new task.")
        return "\n".join(lines)


registry = CommandRegistry()


def short_id(node: TaskNode) -> str:
    return node.id[:SHORT_ID_LEN]


def render_tree(state: AppState) -> str:
    nodes = list(state.task_store.walk())
    if not nodes:
        return "No tasks yet. Type a task to add it."
    lines = []
    for node in nodes:
        mark = "x" if node.is_completed else " "
        loading = " (splitting...)" if node.id == state.splitter.loading_task_id else ""
        lines.append(f"{'  ' * node.depth}[{mark}] {node.text}  <{short_id(node)}>{loading}")
    return "\n".join(lines)


def _resolve(state: AppState, args: list[str]) -> TaskNode | str:
    if not args:
        return "Missing task id. Use /list to see ids."
    node = state.task_store.resolve(args[0])
    if node is None:
        return f"No single task matches id '{args[0]}'."
    return node


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_tree(state)


def cmd_done(state: AppState, args: list[str]) -> str:
    node = _resolve(state, args)
    if isinstance(node, str):
        return node
    state.task_store.toggle_complete(node.id)
    return f"{'Completed' if node.is_completed else 'Reopened'}: {node.text}"


def cmd_rm(state: AppState, args: list[str]) -> str:
    node = _resolve(state, args)
    if isinstance(node, str):
        return node
    state.task_store.remove(node.id)
    return f"Removed: {node.text}"


def cmd_split(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /split <id>  -> replace the task's subtasks with AI-generated ones
    """
    node = _resolve(state, args)
    if isinstance(node, str):
        return node
    if not state.provider.is_configured:
        return "Provider is not configured. Use /provider and /key first."

    if emit:
        with contextlib.suppress(Exception):
            emit(f"Splitting with {state.provider.provider_name}...")

    children = asyncio.run(state.splitter.split(node.id))
    if not children:
        return "No subtasks returned. The task is unchanged."
    return render_tree(state)


def cmd_clear(state: AppState, args: list[str]) -> str:
    """
    /clear done  -> remove completed tasks (with their subtasks)
    /clear all   -> remove everything
    """
    sub = args[0].lower() if args else ""
    if sub in ("done", "completed"):
        n = state.task_store.clear_completed()
        return f"Removed {n} task(s)."
    if sub == "all":
        state.task_store.clear_all()
        return "All tasks removed."
    return "Usage: /clear done | /clear all."


def cmd_provider(state: AppState, args: list[str]) -> str:
    """
    /provider          -> list providers, mark the active one
    /provider <name>   -> switch (anthropic | openai | ollama)
    """
    config = state.config_store.get()
    if not args:
        lines = ["Providers:"]
        for p in ProviderType:
            active = "*" if p is config.selected_provider else " "
            lines.append(f" {active} {p.short_name:<10} {p.value} - {p.description}")
        return "\n".join(lines)

    provider = ProviderType.parse(args[0])
    if provider is None:
        return f"Unknown provider: {args[0]}. Use anthropic, openai or ollama."
    config.selected_provider = provider
    state.config_store.set(config)
    hint = "" if config.is_configured else f" Set its key with /key {provider.short_name} <key>."
    return f"Provider set to {provider.value}.{hint}"


def cmd_key(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        return "Usage: /key anthropic <key> | /key openai <key>."
    provider = ProviderType.parse(args[0])
    if provider is None or not provider.needs_api_key:
        return "Only anthropic and openai take an API key."
    config = state.config_store.get()
    if provider is ProviderType.ANTHROPIC:
        config.anthropic_key = args[1]
    else:
        config.openai_key = args[1]
    state.config_store.set(config)
    # Do NOT log the key itself.
    logger.debug("API key updated for provider=%s", provider.short_name)
    return f"API key saved for {provider.value}."


def cmd_ollama(state: AppState, args: list[str]) -> str:
    if len(args) < 2 or args[0].lower() not in ("model", "url"):
        return "Usage: /ollama model <name> | /ollama url <base url>."
    config = state.config_store.get()
    if args[0].lower() == "model":
        config.ollama_model = args[1]
    else:
        config.ollama_url = args[1]
    state.config_store.set(config)
    return f"Ollama {args[0].lower()} set to {args[1]}."


def cmd_status(state: AppState, args: list[str]) -> str:
    config = state.config_store.get()
    configured = "yes" if config.is_configured else "no (missing API key)"
    lines = [
        "Status:",
        f"  Provider: {config.selected_provider.value}",
        f"  Configured: {configured}",
    ]
    if config.selected_provider is ProviderType.OLLAMA:
        lines.append(f"  Ollama: {config.ollama_model} @ {config.ollama_url}")
    lines.append(f"  Tasks: {state.task_store.count()} ({state.task_store.path})")
    lines.append(f"  Version: {state.settings.current_version}")
    return "\n".join(lines)


def cmd_update(state: AppState, args: list[str]) -> str:
    checker = state.update_checker
    if checker is None:
        return "Update checks are disabled."
    info = asyncio.run(checker.check(force=True))
    if info is None:
        return f"No update found (current version {checker.current_version})."
    return f"Version {info.version} is available. Download: {info.download_url}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task tree with ids.", aliases=["ls"])
registry.register("done", cmd_done, help_text="Toggle completion: /done <id>.", aliases=["toggle"])
registry.register("rm", cmd_rm, help_text="Remove a task and its subtasks: /rm <id>.", aliases=["remove"])
registry.register("split", cmd_split, help_text="Split a task into AI subtasks: /split <id>.")
registry.register("clear", cmd_clear, help_text="Clear tasks: /clear done | /clear all.")
registry.register(
    "provider", cmd_provider, help_text="Show or switch provider: /provider [anthropic|openai|ollama]."
)
registry.register("key", cmd_key, help_text="Set an API key: /key anthropic|openai <key>.")
registry.register("ollama", cmd_ollama, help_text="Local backend: /ollama model <name> | /ollama url <url>.")
registry.register("status", cmd_status, help_text="Show provider and storage status.")
registry.register("update", cmd_update, help_text="Check for a newer release.")
