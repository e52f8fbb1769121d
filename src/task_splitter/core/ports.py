# src/task_splitter/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the orchestration layer.

The splitter depends on Protocols instead of concrete implementations.
This keeps the AI backend and storage swappable and makes testing easier.
"""

from collections.abc import Iterator
from typing import Any, Protocol


class TextGenerator(Protocol):
    """One-shot text completion. Never raises: any failure is reported as None."""

    @property
    def is_configured(self) -> bool: ...

    async def generate(self, prompt: str) -> str | None: ...


class TaskRepo(Protocol):
    """Task forest API used by the split workflow and the console."""

    def find_by_id(self, task_id: str) -> tuple[str, int] | None: ...
    def replace_children(self, task_id: str, children: list[Any]) -> bool: ...

    def add(self, text: str) -> Any: ...
    def remove(self, task_id: str) -> bool: ...
    def toggle_complete(self, task_id: str) -> bool: ...
    def clear_completed(self) -> int: ...
    def clear_all(self) -> None: ...

    def walk(self) -> Iterator[Any]: ...
