"""
Validation helpers for task payloads.

Pure functions: nothing here touches the store or the flag provider. The
flag-gated fields (``priority`` and ``tags``) are passed through raw so the
service can check the user's flags before judging the values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import (
    EmptyUpdate,
    InvalidCompleted,
    InvalidDescription,
    InvalidId,
    InvalidPayload,
    InvalidPriority,
    InvalidTags,
    InvalidTitle,
)
from .models import TaskPriority

UPDATABLE_FIELDS = ("title", "description", "completed", "priority", "tags")


class _Missing:
    """Marker for a field that was not present in the payload."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


@dataclass
class CreateData:
    title: str
    description: str
    completed: bool
    priority: Any = MISSING
    tags: Any = MISSING


@dataclass
class UpdateData:
    """
    Normalised partial update.

    ``changes`` holds only the plain fields that were present; ``priority``
    and ``tags`` are still raw and ``MISSING`` when absent.
    """

    changes: dict[str, Any] = field(default_factory=dict)
    priority: Any = MISSING
    tags: Any = MISSING


def ensure_payload(body: Any) -> dict[str, Any]:
    """
    Coerce a decoded JSON body into a payload dictionary.

    A missing body counts as an empty object; any other non-object body is
    rejected.
    """
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise InvalidPayload()
    return body


def parse_task_id(raw_id: Any) -> int:
    """
    Parse a task id taken from the URL path.

    Raises:
        InvalidId: unless ``raw_id`` is a positive decimal integer.
    """
    if isinstance(raw_id, int) and not isinstance(raw_id, bool):
        task_id = raw_id
    elif isinstance(raw_id, str) and raw_id.isascii() and raw_id.isdigit():
        task_id = int(raw_id)
    else:
        raise InvalidId()
    if task_id <= 0:
        raise InvalidId()
    return task_id


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def validate_create(payload: dict[str, Any]) -> CreateData:
    """
    Validate a create payload and apply defaults.

    Raises:
        InvalidTitle: ``title`` missing, not a string, or blank.
        InvalidDescription: ``description`` present but not a string.
        InvalidCompleted: ``completed`` present but not a boolean.
    """
    title = payload.get("title")
    if not _is_non_empty_string(title):
        raise InvalidTitle()

    description = payload.get("description", MISSING)
    if description is not MISSING and not isinstance(description, str):
        raise InvalidDescription()

    completed = payload.get("completed", MISSING)
    if completed is not MISSING and not isinstance(completed, bool):
        raise InvalidCompleted()

    return CreateData(
        title=title.strip(),
        description=description.strip() if isinstance(description, str) else "",
        completed=completed if isinstance(completed, bool) else False,
        priority=payload.get("priority", MISSING),
        tags=payload.get("tags", MISSING),
    )


def validate_update(payload: dict[str, Any]) -> UpdateData:
    """
    Validate a partial update payload.

    Absent fields are left out of the result. Fields are checked in the order
    title, description, completed, so the first failing one is reported.

    Raises:
        EmptyUpdate: none of the updatable fields is present.
        InvalidTitle, InvalidDescription, InvalidCompleted: as for create.
    """
    if not any(name in payload for name in UPDATABLE_FIELDS):
        raise EmptyUpdate()

    update = UpdateData(
        priority=payload.get("priority", MISSING),
        tags=payload.get("tags", MISSING),
    )

    if "title" in payload:
        title = payload["title"]
        if not _is_non_empty_string(title):
            raise InvalidTitle("Task title must be a non-empty string.")
        update.changes["title"] = title.strip()

    if "description" in payload:
        description = payload["description"]
        if not isinstance(description, str):
            raise InvalidDescription("Task description must be a string.")
        update.changes["description"] = description.strip()

    if "completed" in payload:
        completed = payload["completed"]
        if not isinstance(completed, bool):
            raise InvalidCompleted("Task completed flag must be boolean.")
        update.changes["completed"] = completed

    return update


def check_priority(value: Any) -> TaskPriority:
    """Return the matching ``TaskPriority`` or raise ``InvalidPriority``."""
    if not isinstance(value, str) or value not in TaskPriority.values():
        raise InvalidPriority()
    return TaskPriority(value)


def check_tags(value: Any) -> list[str]:
    """Return a copy of ``value`` if it is a list of strings, else raise ``InvalidTags``."""
    if not isinstance(value, list) or not all(isinstance(tag, str) for tag in value):
        raise InvalidTags()
    return list(value)
