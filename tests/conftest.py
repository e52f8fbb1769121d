# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from task_splitter.core.state import AppState
from task_splitter.providers.config_store import ProviderConfigStore
from task_splitter.tasks.splitter import TaskSplitter
from task_splitter.tasks.task_store import TaskTreeStore

from .fakes import FakeProvider


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the command handlers.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the user's environment.
    """
    return SimpleNamespace(
        app_name="task-splitter-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        provider_config_path=tmp_path / "provider.json",
        legacy_key_path=tmp_path / "api_key",
        tasks_path=tmp_path / "tasks.json",
        update_state_path=tmp_path / "update_check.json",
        check_updates=False,
        update_check_interval_seconds=86400,
        releases_url="https://example.test/releases/latest",
        current_version="1.3.0",
    )


@pytest.fixture()
def task_store(settings: SimpleNamespace) -> TaskTreeStore:
    return TaskTreeStore(settings.tasks_path)


@pytest.fixture()
def config_store(settings: SimpleNamespace) -> ProviderConfigStore:
    return ProviderConfigStore(settings.provider_config_path, settings.legacy_key_path)


@pytest.fixture()
def provider() -> FakeProvider:
    return FakeProvider("Open editor\nWrite intro\nReview draft")


@pytest.fixture()
def state(settings, config_store, task_store, provider) -> AppState:
    """
    AppState wired with a fake provider.

    NOTE: the JSON stores are real (in tmp_path) because their persistence is
    part of what we want to test.
    """
    return AppState(
        settings=settings,
        config_store=config_store,
        provider=provider,  # type: ignore[arg-type]
        task_store=task_store,
        splitter=TaskSplitter(task_store, provider),
        update_checker=None,
    )
