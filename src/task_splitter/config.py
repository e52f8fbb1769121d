# src/task_splitter/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets here: provider credentials live in provider.json, edited at runtime.
- Every local file lives under one data directory unless overridden.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TASK_SPLITTER"

APP_VERSION = "1.3.0"
DEFAULT_RELEASES_URL = "https://api.github.com/repos/Real-Pixeldrop/task-splitter/releases/latest"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env from the working directory (never overrides the real environment)."""
    from dotenv import load_dotenv

    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths ----
    data_dir: Path
    provider_config_path: Path
    legacy_key_path: Path
    tasks_path: Path
    update_state_path: Path

    # ---- Update checker ----
    check_updates: bool
    update_check_interval_seconds: int
    releases_url: str
    current_version: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "task-splitter") or "task-splitter"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")

        data_dir = _env_path(_k("DATA_DIR"), Path.home() / ".local" / "share" / "task-splitter")
        provider_config_path = _env_path(_k("PROVIDER_CONFIG_PATH"), data_dir / "provider.json")
        legacy_key_path = _env_path(_k("LEGACY_KEY_PATH"), data_dir / "api_key")
        tasks_path = _env_path(_k("TASKS_PATH"), data_dir / "tasks.json")
        update_state_path = _env_path(_k("UPDATE_STATE_PATH"), data_dir / "update_check.json")

        check_updates = _env_bool(_k("CHECK_UPDATES"), True)
        # Once a day by default; the checker itself never goes below this cadence unless forced.
        update_check_interval_seconds = _env_int(_k("UPDATE_CHECK_INTERVAL_SECONDS"), 86400)
        releases_url = _env(_k("RELEASES_URL"), DEFAULT_RELEASES_URL) or DEFAULT_RELEASES_URL

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            provider_config_path=provider_config_path,
            legacy_key_path=legacy_key_path,
            tasks_path=tasks_path,
            update_state_path=update_state_path,
            check_updates=check_updates,
            update_check_interval_seconds=update_check_interval_seconds,
            releases_url=releases_url,
            current_version=APP_VERSION,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
