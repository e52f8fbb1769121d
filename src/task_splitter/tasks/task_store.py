# src/task_splitter/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path

from ..core.events import Subscribers
from .task_models import TaskNode

logger = logging.getLogger(__name__)


class TaskTreeStore:
    """
    JSON-backed task forest.

    Every mutation saves the whole forest right away. Nodes are located by id
    with a depth-first scan (roots in order, then into children). Ids are
    unique, so single-node edits stop at the first match.

    Persistence is best-effort: a failed load leaves an empty forest, a failed
    save is logged and lost.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._tasks: list[TaskNode] = []
        self._subscribers = Subscribers()
        with contextlib.suppress(OSError):
            self._path.parent.mkdir(parents=True, exist_ok=True)
        self.load()
        logger.info("TaskTreeStore ready path=%s total=%s", self._path, self.count())

    @property
    def path(self) -> Path:
        return self._path

    @property
    def tasks(self) -> list[TaskNode]:
        """Root nodes in display order (shallow copy of the root list)."""
        return list(self._tasks)

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        return self._subscribers.subscribe(listener)

    # ---- reads ----

    def walk(self) -> Iterator[TaskNode]:
        """Depth-first pre-order over the whole forest."""

        def _walk(nodes: list[TaskNode]) -> Iterator[TaskNode]:
            for node in nodes:
                yield node
                yield from _walk(node.subtasks)

        return _walk(self._tasks)

    def count(self) -> int:
        return sum(1 for _ in self.walk())

    def get(self, task_id: str) -> TaskNode | None:
        for node in self.walk():
            if node.id == task_id:
                return node
        return None

    def find_by_id(self, task_id: str) -> tuple[str, int] | None:
        node = self.get(task_id)
        if node is None:
            return None
        return node.text, node.depth

    def resolve(self, prefix: str) -> TaskNode | None:
        """Find the single node whose id starts with `prefix` (None if zero or several)."""
        prefix = prefix.strip().lower()
        if not prefix:
            return None
        matches = [n for n in self.walk() if n.id.lower().startswith(prefix)]
        return matches[0] if len(matches) == 1 else None

    # ---- mutations ----

    def add(self, text: str) -> TaskNode:
        if not text or not text.strip():
            raise ValueError("task text is required")
        node = TaskNode.new(text.strip(), depth=0)
        self._tasks.insert(0, node)
        self._changed()
        logger.debug("Task added id=%s", node.id)
        return node

    def remove(self, task_id: str) -> bool:
        removed = self._remove_in(self._tasks, task_id)
        if removed:
            self._changed()
            logger.debug("Task removed id=%s", task_id)
        return removed

    def _remove_in(self, nodes: list[TaskNode], task_id: str) -> bool:
        for i, node in enumerate(nodes):
            if node.id == task_id:
                del nodes[i]
                return True
            if self._remove_in(node.subtasks, task_id):
                return True
        return False

    def toggle_complete(self, task_id: str) -> bool:
        node = self.get(task_id)
        if node is None:
            return False
        node.is_completed = not node.is_completed
        self._changed()
        return True

    def replace_children(self, task_id: str, children: list[TaskNode]) -> bool:
        node = self.get(task_id)
        if node is None:
            return False
        node.subtasks = list(children)
        self._changed()
        logger.debug("Task children replaced id=%s n=%d", task_id, len(children))
        return True

    def clear_completed(self) -> int:
        """Drop completed nodes (with their whole subtree) at every level. Returns the number of nodes removed."""
        before = self.count()
        self._clear_completed_in(self._tasks)
        removed = before - self.count()
        self._changed()
        return removed

    def _clear_completed_in(self, nodes: list[TaskNode]) -> None:
        nodes[:] = [n for n in nodes if not n.is_completed]
        for node in nodes:
            self._clear_completed_in(node.subtasks)

    def clear_all(self) -> None:
        self._tasks.clear()
        self._changed()

    def _changed(self) -> None:
        self.save()
        self._subscribers.notify()

    # ---- persistence ----

    def save(self) -> None:
        try:
            tmp = self._path.with_suffix(".tmp")
            payload = [node.to_dict() for node in self._tasks]
            tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, self._path)
        except (OSError, TypeError, ValueError):
            logger.exception("Failed to save tasks to %s", self._path)

    def load(self) -> None:
        self._tasks = []
        if not self._path.exists():
            return
        try:
            data = json.loads(self._path.read_text("utf-8"))
            if not isinstance(data, list):
                raise ValueError("tasks file is not a JSON array")
            self._tasks = [TaskNode.from_dict(item) for item in data]
        except (OSError, ValueError, KeyError, TypeError, AttributeError):
            self._tasks = []
            logger.warning("Failed to load tasks from %s, starting empty", self._path, exc_info=True)
