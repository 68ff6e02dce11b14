"""In-memory task store."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator

from .models import Task, TaskPriority, utc_now

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Process-local mapping from task id to ``Task``.

    Ids come from a single counter that starts at 1 and is never rewound,
    so an id is never reused even after its task is deleted. Contents are
    lost when the process exits.
    """

    def __init__(self) -> None:
        self._tasks: dict[int, Task] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks

    def __iter__(self) -> Iterator[Task]:
        return iter(self.list())

    def list(self) -> list[Task]:
        """Return all tasks in insertion order."""
        return list(self._tasks.values())

    def ids(self) -> list[int]:
        return list(self._tasks)

    def get(self, task_id: int) -> Task | None:
        return self._tasks.get(task_id)

    def add(
        self,
        *,
        title: str,
        description: str = "",
        completed: bool = False,
        priority: TaskPriority | None = None,
        tags: list[str] | None = None,
    ) -> Task:
        """Assign the next id, stamp ``created_at`` and store a new task."""
        with self._lock:
            task = Task(
                id=self._next_id,
                title=title,
                description=description,
                completed=completed,
                priority=priority,
                tags=list(tags) if tags is not None else None,
                created_at=utc_now(),
            )
            self._tasks[task.id] = task
            self._next_id += 1
        logger.debug("Stored task %s (total=%s)", task.id, len(self._tasks))
        return task

    def delete(self, task_id: int) -> bool:
        """Remove a task. Returns ``False`` when no such task exists."""
        with self._lock:
            return self._tasks.pop(task_id, None) is not None

    def clear(self) -> None:
        """Drop every task. The id counter keeps counting."""
        with self._lock:
            self._tasks.clear()
