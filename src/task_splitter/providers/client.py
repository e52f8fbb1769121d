# src/task_splitter/providers/client.py

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx
import openai
from openai import AsyncOpenAI

from .config_store import ProviderConfigStore
from .models import ProviderConfig, ProviderType

logger = logging.getLogger(__name__)

MAX_OUTPUT_TOKENS = 500

ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
ANTHROPIC_MODEL = "claude-sonnet-4-20250514"

OPENAI_BASE_URL = "https://api.openai.com/v1"
OPENAI_MODEL = "gpt-4o-mini"

OLLAMA_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True, slots=True)
class ProviderRequest:
    url: str
    headers: dict[str, str]
    body: dict[str, Any]
    # None: no timeout (hosted backends).
    timeout: float | None = None


def _first(items: Any) -> Any:
    if isinstance(items, list) and items:
        return items[0]
    return None


def _non_empty(text: Any) -> str | None:
    if isinstance(text, str) and text:
        return text
    return None


class _JSONBackend(ABC):
    """Plain JSON-over-HTTP backend: one request builder, one response extractor."""

    @abstractmethod
    def build_request(self, config: ProviderConfig, prompt: str) -> ProviderRequest:
        raise NotImplementedError

    @abstractmethod
    def extract_text(self, data: Any) -> str | None:
        raise NotImplementedError

    async def complete(self, http: httpx.AsyncClient, config: ProviderConfig, prompt: str) -> str | None:
        req = self.build_request(config, prompt)
        resp = await http.post(req.url, headers=req.headers, json=req.body, timeout=req.timeout)
        resp.raise_for_status()
        return self.extract_text(resp.json())


class AnthropicBackend(_JSONBackend):
    def build_request(self, config: ProviderConfig, prompt: str) -> ProviderRequest:
        return ProviderRequest(
            url=ANTHROPIC_URL,
            headers={
                "content-type": "application/json",
                "x-api-key": config.anthropic_key,
                "anthropic-version": ANTHROPIC_VERSION,
            },
            body={
                "model": ANTHROPIC_MODEL,
                "max_tokens": MAX_OUTPUT_TOKENS,
                "messages": [{"role": "user", "content": prompt}],
            },
        )

    def extract_text(self, data: Any) -> str | None:
        if not isinstance(data, dict):
            return None
        block = _first(data.get("content"))
        if not isinstance(block, dict):
            return None
        return _non_empty(block.get("text"))


class OllamaBackend(_JSONBackend):
    def build_request(self, config: ProviderConfig, prompt: str) -> ProviderRequest:
        return ProviderRequest(
            url=f"{config.ollama_url.rstrip('/')}/api/generate",
            headers={"content-type": "application/json"},
            body={
                "model": config.ollama_model,
                "prompt": prompt,
                "stream": False,
            },
            timeout=OLLAMA_TIMEOUT_SECONDS,
        )

    def extract_text(self, data: Any) -> str | None:
        if not isinstance(data, dict):
            return None
        return _non_empty(data.get("response"))


class OpenAIBackend:
    """Chat completions through the OpenAI SDK, sharing the adapter's HTTP client."""

    async def complete(self, http: httpx.AsyncClient, config: ProviderConfig, prompt: str) -> str | None:
        # Retries disabled: a single attempt per call.
        client = AsyncOpenAI(
            api_key=config.openai_key,
            base_url=OPENAI_BASE_URL,
            max_retries=0,
            timeout=None,
            http_client=http,
        )
        completion = await client.chat.completions.create(
            model=OPENAI_MODEL,
            max_tokens=MAX_OUTPUT_TOKENS,
            messages=[{"role": "user", "content": prompt}],
        )
        return self.extract_text(completion)

    def extract_text(self, completion: Any) -> str | None:
        choices = getattr(completion, "choices", None)
        if not choices:
            return None
        message = getattr(choices[0], "message", None)
        return _non_empty(getattr(message, "content", None))


_BACKENDS: dict[ProviderType, Any] = {
    ProviderType.ANTHROPIC: AnthropicBackend(),
    ProviderType.OPENAI: OpenAIBackend(),
    ProviderType.OLLAMA: OllamaBackend(),
}


class AIProvider:
    """
    Provider adapter: prompt in, plain text out.

    generate() fails soft. Transport errors, non-2xx statuses, malformed JSON,
    missing fields and empty text all come back as None; nothing is raised.
    """

    def __init__(
        self,
        config_store: ProviderConfigStore,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config_store = config_store
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return self._config_store.is_configured()

    @property
    def provider_name(self) -> str:
        return self._config_store.get().selected_provider.value

    def _make_http_client(self) -> httpx.AsyncClient:
        # A fresh client per call: the console drives each split with its own event loop.
        return httpx.AsyncClient(transport=self._transport, timeout=None)

    async def generate(self, prompt: str) -> str | None:
        config = self._config_store.get()
        if not config.is_configured:
            logger.info("Provider %s is not configured, skipping request", config.selected_provider.short_name)
            return None

        backend = _BACKENDS[config.selected_provider]
        name = config.selected_provider.short_name
        logger.info("Provider %s: sending prompt (%d chars)", name, len(prompt))

        try:
            async with self._make_http_client() as http:
                text = await backend.complete(http, config, prompt)
        except httpx.HTTPStatusError as e:
            logger.info("Provider %s: HTTP %s", name, e.response.status_code)
            return None
        except (httpx.HTTPError, httpx.InvalidURL, openai.OpenAIError) as e:
            logger.info("Provider %s: request failed (%s)", name, e.__class__.__name__)
            return None
        except (ValueError, KeyError, IndexError, TypeError, AttributeError):
            logger.info("Provider %s: malformed response", name, exc_info=True)
            return None

        if text is None:
            logger.info("Provider %s: no text in response", name)
            return None
        logger.debug("Provider %s: received %d chars", name, len(text))
        return text
