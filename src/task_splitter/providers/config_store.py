# src/task_splitter/providers/config_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Callable
from pathlib import Path

from ..core.events import Subscribers
from .models import ProviderConfig, ProviderType

logger = logging.getLogger(__name__)


class ProviderConfigStore:
    """
    JSON-backed provider configuration.

    - load(): read provider.json; on absence/parse failure fall back to defaults
      and migrate a legacy plain-text key file (one-time, then persisted).
    - set(): wholesale replace + immediate save.
    - Persistence failures are logged, never raised: callers must not assume durability.
    """

    def __init__(self, path: str | Path, legacy_key_path: str | Path | None = None) -> None:
        self._path = Path(path)
        self._legacy_key_path = Path(legacy_key_path) if legacy_key_path else None
        self._config = ProviderConfig()
        self._subscribers = Subscribers()
        with contextlib.suppress(OSError):
            self._path.parent.mkdir(parents=True, exist_ok=True)
        self.load()

    @property
    def path(self) -> Path:
        return self._path

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        return self._subscribers.subscribe(listener)

    # ---- public API ----

    def load(self) -> ProviderConfig:
        loaded = self._read()
        if loaded is not None:
            self._config = loaded
            logger.info(
                "Provider config loaded from %s (provider=%s)",
                self._path,
                loaded.selected_provider.short_name,
            )
            return self._config

        self._config = ProviderConfig()
        self._migrate_legacy_key()
        return self._config

    def get(self) -> ProviderConfig:
        return self._config.copy()

    def set(self, config: ProviderConfig) -> None:
        self._config = config.copy()
        self.save()
        self._subscribers.notify()

    def is_configured(self) -> bool:
        return self._config.is_configured

    def save(self) -> None:
        try:
            tmp = self._path.with_suffix(".tmp")
            tmp.write_text(json.dumps(self._config.to_dict(), ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, self._path)
            with contextlib.suppress(OSError):
                # Best-effort: the file holds API keys, keep it private on disk.
                os.chmod(self._path, 0o600)
            logger.debug("Provider config saved to %s", self._path)
        except (OSError, TypeError, ValueError):
            logger.exception("Failed to save provider config to %s", self._path)

    # ---- helpers ----

    def _read(self) -> ProviderConfig | None:
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text("utf-8"))
            if not isinstance(data, dict):
                raise ValueError("provider config is not a JSON object")
            return ProviderConfig.from_dict(data)
        except (OSError, ValueError):
            logger.warning("Unreadable provider config at %s, using defaults", self._path, exc_info=True)
            return None

    def _migrate_legacy_key(self) -> None:
        if self._legacy_key_path is None or not self._legacy_key_path.exists():
            return
        try:
            key = self._legacy_key_path.read_text("utf-8").strip()
        except (OSError, UnicodeDecodeError):
            logger.warning("Failed to read legacy key file %s", self._legacy_key_path, exc_info=True)
            return
        if not key:
            return

        self._config.anthropic_key = key
        self._config.selected_provider = ProviderType.ANTHROPIC
        logger.info("Migrated legacy API key from %s", self._legacy_key_path)
        self.save()
