# src/task_splitter/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, runs the daily update check,
then hands over to the console REPL.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _maybe_announce_update(state) -> None:
    checker = state.update_checker
    if checker is None or not checker.is_due():
        return
    info = asyncio.run(checker.check())
    if info is not None:
        print(f"Version {info.version} is available. Download: {info.download_url}\n")


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level (the file log gets everything)
    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s %s...", settings.app_name, settings.current_version)

    state = create_initial_state(settings=settings)

    _maybe_announce_update(state)

    try:
        run_console_loop(state)
    finally:
        # Every mutation is already persisted; one last save covers a failed earlier write.
        state.task_store.save()
        logger.info("Bye.")


if __name__ == "__main__":
    main()
