# src/task_splitter/tasks/splitter.py

"""
Split workflow: expand one task into AI-generated subtasks.

Flow per call:
- guard: provider must be configured (else silent no-op)
- mark loading, look the node up, build the prompt
- await the provider (the caller's event loop stays free)
- parse non-blank lines into children at depth + 1 and REPLACE the node's children
- clear the loading marker whatever happened
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.events import Subscribers
from ..core.ports import TaskRepo, TextGenerator
from .task_models import TaskNode

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = (
    "Break this task down into 3 to 5 concrete, actionable subtasks of 15 minutes or less each.\n"
    'The task: "{text}"\n'
    "Reply ONLY with the subtasks, one per line, with no numbering, no dashes or bullets, "
    "and no explanation.\n"
    "Each subtask must start with an action verb."
)


def build_prompt(text: str) -> str:
    return PROMPT_TEMPLATE.format(text=text)


def parse_subtasks(raw: str | None, depth: int) -> list[TaskNode]:
    if not raw:
        return []
    lines = (line.strip() for line in raw.split("\n"))
    return [TaskNode.new(line, depth=depth) for line in lines if line]


class TaskSplitter:
    """
    Orchestrates splits and exposes the loading indicator.

    Only one loading marker is tracked. Overlapping splits on different nodes
    both apply to their own node; the marker shows whichever started last and
    is cleared by whichever finishes last.
    """

    def __init__(self, task_store: TaskRepo, provider: TextGenerator) -> None:
        self._store = task_store
        self._provider = provider
        self._subscribers = Subscribers()
        self.is_loading = False
        self.loading_task_id: str | None = None

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        return self._subscribers.subscribe(listener)

    def _set_loading(self, task_id: str | None) -> None:
        self.is_loading = task_id is not None
        self.loading_task_id = task_id
        self._subscribers.notify()

    async def split(self, task_id: str) -> list[TaskNode] | None:
        """
        Replace the children of `task_id` with AI-generated subtasks.

        Returns the new children, or None when the tree was left unchanged
        (provider not configured, unknown id, no text, no usable lines).
        """
        if not self._provider.is_configured:
            logger.info("Split skipped: provider not configured")
            return None

        self._set_loading(task_id)

        found = self._store.find_by_id(task_id)
        if found is None:
            logger.info("Split skipped: task %s not found", task_id)
            self._set_loading(None)
            return None
        text, depth = found

        try:
            raw = await self._provider.generate(build_prompt(text))
            # No await between here and the reset: the mutation and the reset land together.
            children = parse_subtasks(raw, depth + 1)
            # The node may have been removed while the request was in flight.
            applied = bool(children) and self._store.replace_children(task_id, children)
        finally:
            self._set_loading(None)

        if not applied:
            logger.info("Split of %s applied no subtasks", task_id)
            return None
        logger.info("Split of %s produced %d subtasks", task_id, len(children))
        return children
