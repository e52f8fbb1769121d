# config.example.py

"""
Documentation-only module (safe to commit).

Settings are loaded from environment variables (optionally via a local .env file).
Provider credentials are NOT environment settings: they are entered at runtime
(/provider, /key, /ollama) and stored in provider.json inside the data directory.
"""

ENV_VARS = {
    # App / logging
    "TASK_SPLITTER_APP_NAME": "App display name (default: task-splitter).",
    "TASK_SPLITTER_LOG_LEVEL": "Console logging level (default: WARNING; the log file gets DEBUG).",
    # Paths
    "TASK_SPLITTER_DATA_DIR": "Local data directory (default: ~/.local/share/task-splitter).",
    "TASK_SPLITTER_PROVIDER_CONFIG_PATH": "Provider config JSON (default: <data_dir>/provider.json).",
    "TASK_SPLITTER_LEGACY_KEY_PATH": "Legacy plain-text API key, migrated once (default: <data_dir>/api_key).",
    "TASK_SPLITTER_TASKS_PATH": "Task forest JSON (default: <data_dir>/tasks.json).",
    "TASK_SPLITTER_UPDATE_STATE_PATH": "Last update check time (default: <data_dir>/update_check.json).",
    # Update checker
    "TASK_SPLITTER_CHECK_UPDATES": "Look for a newer release at startup (true/false, default: true).",
    "TASK_SPLITTER_UPDATE_CHECK_INTERVAL_SECONDS": "Minimum delay between checks (default: 86400).",
    "TASK_SPLITTER_RELEASES_URL": "Latest-release JSON endpoint.",
}
