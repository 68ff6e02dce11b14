"""Small assertion helpers shared by the test suites."""

from __future__ import annotations

from typing import Any


def without_created_at(task_json: dict[str, Any]) -> dict[str, Any]:
    """Drop the non-deterministic ``createdAt`` member from a task body."""
    return {key: value for key, value in task_json.items() if key != "createdAt"}
