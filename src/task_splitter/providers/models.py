# src/task_splitter/providers/models.py

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import Any


class ProviderType(StrEnum):
    """
    AI backend selector.

    Values are the display names stored in provider.json; `parse` also
    accepts the short names used on the command line.
    """

    ANTHROPIC = "Anthropic (Claude)"
    OPENAI = "OpenAI (GPT)"
    OLLAMA = "Ollama (Local)"

    @property
    def short_name(self) -> str:
        return self.name.lower()

    @property
    def needs_api_key(self) -> bool:
        return self is not ProviderType.OLLAMA

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @classmethod
    def parse(cls, raw: str | None) -> ProviderType | None:
        if not raw:
            return None
        s = raw.strip()
        for member in cls:
            if s == member.value or s.lower() == member.short_name:
                return member
        return None


_DESCRIPTIONS = {
    ProviderType.ANTHROPIC: "Claude Sonnet, fast and smart",
    ProviderType.OPENAI: "GPT-4o mini, general purpose",
    ProviderType.OLLAMA: "Free, runs on your machine",
}

DEFAULT_OLLAMA_MODEL = "llama3.2"
DEFAULT_OLLAMA_URL = "http://localhost:11434"


@dataclass(slots=True)
class ProviderConfig:
    selected_provider: ProviderType = ProviderType.OLLAMA
    anthropic_key: str = ""
    openai_key: str = ""
    ollama_model: str = DEFAULT_OLLAMA_MODEL
    ollama_url: str = DEFAULT_OLLAMA_URL

    @property
    def is_configured(self) -> bool:
        # Hosted backends need a credential; the local one is always usable.
        if self.selected_provider is ProviderType.OLLAMA:
            return True
        return bool(self.api_key_for(self.selected_provider))

    def api_key_for(self, provider: ProviderType) -> str:
        if provider is ProviderType.ANTHROPIC:
            return self.anthropic_key
        if provider is ProviderType.OPENAI:
            return self.openai_key
        return ""

    def copy(self) -> ProviderConfig:
        return ProviderConfig(**asdict(self))

    def to_dict(self) -> dict[str, Any]:
        return {
            "selectedProvider": self.selected_provider.value,
            "anthropicKey": self.anthropic_key,
            "openaiKey": self.openai_key,
            "ollamaModel": self.ollama_model,
            "ollamaURL": self.ollama_url,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProviderConfig:
        """
        Build a config from the persisted JSON object.

        Raises ValueError if the object names no known provider: that file is
        treated as unreadable by the store (defaults + legacy migration).
        Other fields fall back to their defaults one by one.
        """
        provider = ProviderType.parse(data.get("selectedProvider"))
        if provider is None:
            raise ValueError(f"unknown selectedProvider: {data.get('selectedProvider')!r}")

        def _str(key: str, default: str) -> str:
            v = data.get(key)
            return v if isinstance(v, str) else default

        return cls(
            selected_provider=provider,
            anthropic_key=_str("anthropicKey", ""),
            openai_key=_str("openaiKey", ""),
            ollama_model=_str("ollamaModel", DEFAULT_OLLAMA_MODEL),
            ollama_url=_str("ollamaURL", DEFAULT_OLLAMA_URL),
        )
