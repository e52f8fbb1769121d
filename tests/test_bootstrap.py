# tests/test_bootstrap.py

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import httpx
import pytest

from task_splitter.cli.bootstrap import create_initial_state
from task_splitter.config import Settings


def test_settings_from_env_derives_paths_from_data_dir(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("TASK_SPLITTER_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("TASK_SPLITTER_CHECK_UPDATES", "no")
    monkeypatch.setenv("TASK_SPLITTER_UPDATE_CHECK_INTERVAL_SECONDS", "not-a-number")

    s = Settings.from_env()

    assert s.provider_config_path == tmp_path / "data" / "provider.json"
    assert s.tasks_path == tmp_path / "data" / "tasks.json"
    assert s.legacy_key_path == tmp_path / "data" / "api_key"
    assert s.check_updates is False
    assert s.update_check_interval_seconds == 86400


@pytest.mark.asyncio
async def test_create_initial_state_wires_components(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("TASK_SPLITTER_DATA_DIR", str(tmp_path))
    settings = replace(Settings.from_env(), check_updates=True)

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/generate":
            return httpx.Response(200, json={"response": "Gather receipts\nFill form"})
        return httpx.Response(200, json={"tag_name": "v1.3.0", "assets": []})

    state = create_initial_state(settings=settings, transport=httpx.MockTransport(handler))

    assert state.provider.is_configured is True
    assert state.update_checker is not None
    assert await state.update_checker.check(force=True) is None

    node = state.task_store.add("File taxes")
    children = await state.splitter.split(node.id)

    assert [c.text for c in children or []] == ["Gather receipts", "Fill form"]
    assert (tmp_path / "tasks.json").exists()
