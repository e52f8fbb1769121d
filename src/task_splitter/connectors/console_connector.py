# src/task_splitter/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import render_tree
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def handle_line(state: AppState, line: str, emit=None) -> str | None:
    """
    One console turn: slash commands go to the registry, anything else adds a root task.
    Returns the text to show (None for nothing).
    """
    line = line.strip()
    if not line:
        return None

    cmd_response = command_registry.handle(state, line, emit=emit)
    if cmd_response is not None:
        return cmd_response

    node = state.task_store.add(line)
    logger.debug("Console added task id=%s", node.id)
    return render_tree(state)


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (provider=%s).", state.provider.provider_name)
    _print_ts("Type a task to add it. Use /help for commands. Use /exit to quit.\n")
    print(render_tree(state))

    def emit(text: str) -> None:
        # Immediate user-visible feedback for long operations (AI calls).
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        try:
            user_input = input("> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            response = handle_line(state, user_input, emit=emit)
        except Exception:
            logger.exception("Console handler crashed.")
            response = "Internal error while handling that line."

        if response is not None:
            print(response)

    logger.info("Console connector finished.")
