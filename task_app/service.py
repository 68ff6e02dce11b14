"""
Task resource operations.

``TaskService`` is transport-agnostic: it takes raw ids and decoded payloads,
raises ``TaskServiceError`` subclasses on failure, and returns ``Task``
objects. The Flask blueprint in ``routes.api`` translates both into HTTP.

For the flag-gated fields the flag check always comes before the value
check, so a user without the flag is told the feature is disabled even when
the value they sent is malformed too.
"""

from __future__ import annotations

import logging
from typing import Any

from .errors import FeatureDisabled, NotFound
from .flags import FeatureFlag, FlagGateway
from .models import Task, TaskPriority, UserContext
from .store import TaskStore
from .validation import (
    MISSING,
    check_priority,
    check_tags,
    parse_task_id,
    validate_create,
    validate_update,
)

logger = logging.getLogger(__name__)


class TaskService:
    """Validation, flag gating and store mutation for the task endpoints."""

    def __init__(self, store: TaskStore, flags: FlagGateway) -> None:
        self.store = store
        self.flags = flags

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve(self, raw_id: Any) -> Task:
        task_id = parse_task_id(raw_id)
        task = self.store.get(task_id)
        if task is None:
            logger.warning("Task %s not found", task_id)
            raise NotFound()
        return task

    def _gated_priority(self, value: Any, user_context: UserContext) -> TaskPriority:
        if not self.flags.evaluate(FeatureFlag.TASK_PRIORITIES, user_context):
            raise FeatureDisabled("priority")
        return check_priority(value)

    def _gated_tags(self, value: Any, user_context: UserContext) -> list[str]:
        if not self.flags.evaluate(FeatureFlag.ADVANCED_FILTERING, user_context):
            raise FeatureDisabled("tags")
        return check_tags(value)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def list_tasks(self) -> list[Task]:
        return self.store.list()

    def get_task(self, raw_id: Any) -> Task:
        return self._resolve(raw_id)

    def create_task(self, payload: dict[str, Any], user_context: UserContext) -> Task:
        """
        Create a task.

        Raises:
            ValidationError: on any invalid field, or ``FeatureDisabled`` when
                a gated field is sent without its flag.
        """
        data = validate_create(payload)

        priority = None
        if data.priority is not MISSING:
            priority = self._gated_priority(data.priority, user_context)

        tags = None
        if data.tags is not MISSING:
            tags = self._gated_tags(data.tags, user_context)

        task = self.store.add(
            title=data.title,
            description=data.description,
            completed=data.completed,
            priority=priority,
            tags=tags,
        )
        logger.info("Created task with ID: %s for user=%s", task.id, user_context.key)
        return task

    def update_task(self, raw_id: Any, payload: dict[str, Any], user_context: UserContext) -> Task:
        """
        Apply a partial update.

        Every supplied field is checked before any is written, so a rejected
        update leaves the task as it was.
        """
        task = self._resolve(raw_id)
        update = validate_update(payload)

        changes = dict(update.changes)
        if update.priority is not MISSING:
            changes["priority"] = self._gated_priority(update.priority, user_context)
        if update.tags is not MISSING:
            changes["tags"] = self._gated_tags(update.tags, user_context)

        for name, value in changes.items():
            setattr(task, name, value)

        logger.info("Updated task %s fields=%s", task.id, sorted(changes))
        return task

    def delete_task(self, raw_id: Any) -> None:
        task = self._resolve(raw_id)
        self.store.delete(task.id)
        logger.info("Deleted task %s", task.id)

    def feature_flags(self, user_context: UserContext) -> dict[str, Any]:
        """Body for ``GET /feature-flags``."""
        return {
            "user": user_context.to_dict(),
            "features": self.flags.evaluate_all(user_context),
        }
