"""task-splitter: break a task into actionable subtasks with an AI backend."""

from .config import APP_VERSION as __version__

__all__ = ["__version__"]
