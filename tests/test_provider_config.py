# tests/test_provider_config.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from task_splitter.providers.config_store import ProviderConfigStore
from task_splitter.providers.models import ProviderConfig, ProviderType


def test_defaults_when_no_file(tmp_path: Path) -> None:
    store = ProviderConfigStore(tmp_path / "provider.json", tmp_path / "api_key")
    cfg = store.get()

    assert cfg.selected_provider is ProviderType.OLLAMA
    assert cfg.ollama_model == "llama3.2"
    assert cfg.ollama_url == "http://localhost:11434"
    assert cfg.anthropic_key == "" and cfg.openai_key == ""
    assert store.is_configured() is True
    # Nothing to migrate -> nothing written.
    assert not (tmp_path / "provider.json").exists()


def test_legacy_key_is_migrated_once(tmp_path: Path) -> None:
    (tmp_path / "api_key").write_text("  sk-ant-legacy\n", "utf-8")

    store = ProviderConfigStore(tmp_path / "provider.json", tmp_path / "api_key")
    cfg = store.get()

    assert cfg.selected_provider is ProviderType.ANTHROPIC
    assert cfg.anthropic_key == "sk-ant-legacy"
    saved = json.loads((tmp_path / "provider.json").read_text("utf-8"))
    assert saved["selectedProvider"] == "Anthropic (Claude)"
    assert saved["anthropicKey"] == "sk-ant-legacy"

    # Later changes win over the legacy file.
    cfg.selected_provider = ProviderType.OLLAMA
    store.set(cfg)
    again = ProviderConfigStore(tmp_path / "provider.json", tmp_path / "api_key")
    assert again.get().selected_provider is ProviderType.OLLAMA


def test_blank_legacy_key_is_ignored(tmp_path: Path) -> None:
    (tmp_path / "api_key").write_text("   \n", "utf-8")
    store = ProviderConfigStore(tmp_path / "provider.json", tmp_path / "api_key")
    assert store.get().selected_provider is ProviderType.OLLAMA
    assert not (tmp_path / "provider.json").exists()


def test_malformed_config_falls_back_and_migrates(tmp_path: Path) -> None:
    (tmp_path / "provider.json").write_text("[1, 2", "utf-8")
    (tmp_path / "api_key").write_text("sk-ant-x", "utf-8")

    store = ProviderConfigStore(tmp_path / "provider.json", tmp_path / "api_key")

    assert store.get().anthropic_key == "sk-ant-x"
    assert json.loads((tmp_path / "provider.json").read_text("utf-8"))["anthropicKey"] == "sk-ant-x"


def test_set_persists_wholesale(config_store: ProviderConfigStore) -> None:
    cfg = ProviderConfig(
        selected_provider=ProviderType.OPENAI,
        openai_key="sk-openai",
        ollama_model="mistral",
        ollama_url="http://gpu-box:11434",
    )
    config_store.set(cfg)

    reloaded = ProviderConfigStore(config_store.path)
    assert reloaded.get() == cfg
    assert json.loads(config_store.path.read_text("utf-8")) == {
        "selectedProvider": "OpenAI (GPT)",
        "anthropicKey": "",
        "openaiKey": "sk-openai",
        "ollamaModel": "mistral",
        "ollamaURL": "http://gpu-box:11434",
    }


def test_get_returns_a_copy(config_store: ProviderConfigStore) -> None:
    cfg = config_store.get()
    cfg.selected_provider = ProviderType.ANTHROPIC
    assert config_store.get().selected_provider is ProviderType.OLLAMA


@pytest.mark.parametrize(
    ("provider", "anthropic_key", "openai_key", "expected"),
    [
        (ProviderType.ANTHROPIC, "", "sk-o", False),
        (ProviderType.ANTHROPIC, "sk-a", "", True),
        (ProviderType.OPENAI, "sk-a", "", False),
        (ProviderType.OPENAI, "", "sk-o", True),
        (ProviderType.OLLAMA, "", "", True),
    ],
)
def test_is_configured(provider, anthropic_key, openai_key, expected) -> None:
    cfg = ProviderConfig(selected_provider=provider, anthropic_key=anthropic_key, openai_key=openai_key)
    assert cfg.is_configured is expected


def test_ollama_is_configured_even_with_empty_fields() -> None:
    cfg = ProviderConfig(selected_provider=ProviderType.OLLAMA, ollama_model="", ollama_url="")
    assert cfg.is_configured is True


def test_from_dict_accepts_short_names_and_fills_defaults() -> None:
    cfg = ProviderConfig.from_dict({"selectedProvider": "openai", "openaiKey": 42})
    assert cfg.selected_provider is ProviderType.OPENAI
    assert cfg.openai_key == ""
    assert cfg.ollama_url == "http://localhost:11434"

    with pytest.raises(ValueError):
        ProviderConfig.from_dict({"selectedProvider": "gemini"})


def test_save_failure_is_swallowed(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("", "utf-8")
    store = ProviderConfigStore(blocker / "provider.json")

    store.set(ProviderConfig(selected_provider=ProviderType.OPENAI, openai_key="k"))

    assert store.get().openai_key == "k"
