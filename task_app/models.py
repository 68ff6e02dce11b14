"""
Data models for the Task Service.

Tasks live only in memory (see ``task_app.store``), so the models are plain
dataclasses rather than ORM rows. ``to_dict`` produces the JSON shape
returned by the REST API.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

ANONYMOUS_USER_KEY = "anonymous"


class TaskPriority(str, Enum):
    """Enumeration of possible task priorities."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def values(cls) -> list[str]:
        return [priority.value for priority in cls]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Task:
    """
    Task record representing a to-do item.

    Attributes:
        id: Unique identifier assigned by the store.
        title: Short, non-empty title.
        description: Free-form description, empty by default.
        completed: Whether the task is done.
        priority: Optional priority; only set while the priorities flag is on.
        tags: Optional ordered tags; only set while advanced filtering is on.
        created_at: Timestamp when the task was created.
    """

    id: int
    title: str
    description: str = ""
    completed: bool = False
    priority: TaskPriority | None = None
    tags: list[str] | None = None
    created_at: datetime = field(default_factory=utc_now)

    @staticmethod
    def _to_utc_iso(value: datetime) -> str:
        """
        Convert a datetime to an ISO-8601 UTC string with millisecond
        precision and a trailing ``Z`` (e.g. ``2024-01-01T09:30:00.000Z``).
        """
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        else:
            value = value.astimezone(timezone.utc)
        return value.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the task to its API representation.

        ``priority`` and ``tags`` are omitted entirely when unset.
        """
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
        }
        if self.priority is not None:
            data["priority"] = self.priority.value
        if self.tags is not None:
            data["tags"] = list(self.tags)
        data["createdAt"] = self._to_utc_iso(self.created_at)
        return data

    def __repr__(self) -> str:
        return f"<Task {self.id}: {self.title}>"


@dataclass(frozen=True)
class UserContext:
    """
    Identity bundle used to parametrise feature-flag evaluation.

    It carries no authorisation meaning.
    """

    key: str = ANONYMOUS_USER_KEY
    name: str | None = None
    email: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"key": self.key}
        if self.name is not None:
            data["name"] = self.name
        if self.email is not None:
            data["email"] = self.email
        if self.attributes:
            data["attributes"] = dict(self.attributes)
        return data
