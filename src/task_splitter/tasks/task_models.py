# src/task_splitter/tasks/task_models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class TaskNode:
    """
    One entry of the task forest.

    Notes:
    - `depth` is fixed at creation (parent depth + 1) and never recomputed.
    - Nodes hold no parent reference; the store finds them by recursive scan.
    """

    id: str
    text: str
    depth: int = 0
    is_completed: bool = False
    subtasks: list[TaskNode] = field(default_factory=list)

    @classmethod
    def new(cls, text: str, depth: int = 0) -> TaskNode:
        return cls(id=str(uuid.uuid4()), text=text, depth=depth)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "subtasks": [child.to_dict() for child in self.subtasks],
            "isCompleted": self.is_completed,
            "depth": self.depth,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TaskNode:
        """Raises KeyError/TypeError/ValueError on a malformed node."""
        raw_children = data.get("subtasks") or []
        if not isinstance(raw_children, list):
            raise TypeError("subtasks must be a list")
        return cls(
            id=str(data["id"]),
            text=str(data["text"]),
            depth=int(data.get("depth", 0)),
            is_completed=bool(data.get("isCompleted", False)),
            subtasks=[cls.from_dict(child) for child in raw_children],
        )
