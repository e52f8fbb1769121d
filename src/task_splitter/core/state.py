# src/task_splitter/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..providers.client import AIProvider
    from ..providers.config_store import ProviderConfigStore
    from ..tasks.splitter import TaskSplitter
    from ..tasks.task_store import TaskTreeStore
    from ..updates.checker import UpdateChecker


@dataclass
class AppState:
    # Store Settings on the state for easy access in command handlers.
    settings: Any

    config_store: ProviderConfigStore
    provider: AIProvider
    task_store: TaskTreeStore
    splitter: TaskSplitter
    update_checker: UpdateChecker | None = None
