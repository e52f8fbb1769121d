# src/task_splitter/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local data directory exists,
- wires concrete implementations into AppState (config/provider/tasks/splitter/updates).
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..providers.client import AIProvider
from ..providers.config_store import ProviderConfigStore
from ..tasks.splitter import TaskSplitter
from ..tasks.task_store import TaskTreeStore
from ..updates.checker import UpdateChecker

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.provider_config_path.parent.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, transport=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    `transport` (an httpx transport) is forwarded to every outbound HTTP client.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    config_store = ProviderConfigStore(settings.provider_config_path, settings.legacy_key_path)
    provider = AIProvider(config_store, transport=transport)
    task_store = TaskTreeStore(settings.tasks_path)

    update_checker = None
    if settings.check_updates:
        update_checker = UpdateChecker(
            current_version=settings.current_version,
            releases_url=settings.releases_url,
            state_path=settings.update_state_path,
            interval_seconds=settings.update_check_interval_seconds,
            transport=transport,
        )

    return AppState(
        settings=settings,
        config_store=config_store,
        provider=provider,
        task_store=task_store,
        splitter=TaskSplitter(task_store, provider),
        update_checker=update_checker,
    )
