"""
Shared pytest fixtures for task-service tests.

Provides the Flask application, test client, an injectable fake flag
provider, the task store and reusable data factories used by the unit and
integration suites.

Key SDET Concepts Demonstrated:
- Function-scoped app fixtures: each test gets its own store, so ids and
  contents never leak between tests
- Dependency injection of the flag provider instead of patching globals
- Factory pattern (task_factory) for flexible test-data creation
"""

from __future__ import annotations

import os

import pytest
from faker import Faker

os.environ["FLASK_ENV"] = "testing"

from task_app import create_app
from task_app.flags import FeatureFlag, FlagGateway
from task_app.models import Task, TaskPriority
from task_app.store import TaskStore
from tests.fakes import FakeFlagEvaluator

fake = Faker()


@pytest.fixture
def flag_evaluator() -> FakeFlagEvaluator:
    """Flag provider with every flag off; tests enable what they need."""
    return FakeFlagEvaluator()


@pytest.fixture
def flag_gateway(flag_evaluator) -> FlagGateway:
    return FlagGateway(flag_evaluator)


@pytest.fixture
def store() -> TaskStore:
    """A fresh, empty task store."""
    return TaskStore()


@pytest.fixture
def app(store, flag_evaluator):
    """
    Provide a Flask application wired to this test's store and flags.

    Created per test so that the id counter always starts at 1.
    """
    application = create_app("testing", store=store, flag_evaluator=flag_evaluator)
    yield application


@pytest.fixture
def client(app):
    """Provide a Flask test client scoped to a single test function."""
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def priorities_enabled(flag_evaluator) -> FakeFlagEvaluator:
    flag_evaluator.enable(FeatureFlag.TASK_PRIORITIES.value)
    return flag_evaluator


@pytest.fixture
def filtering_enabled(flag_evaluator) -> FakeFlagEvaluator:
    flag_evaluator.enable(FeatureFlag.ADVANCED_FILTERING.value)
    return flag_evaluator


@pytest.fixture
def task_factory(store):
    """
    Factory fixture that puts tasks straight into the store.

    Returns a callable ``_create_task(**kwargs)`` with Faker-generated
    defaults, bypassing HTTP and flag checks.
    """

    def _create_task(
        *,
        title: str | None = None,
        description: str | None = None,
        completed: bool = False,
        priority: TaskPriority | None = None,
        tags: list[str] | None = None,
    ) -> Task:
        return store.add(
            title=title or fake.sentence(nb_words=4),
            description=description if description is not None else fake.paragraph(),
            completed=completed,
            priority=priority,
            tags=tags,
        )

    return _create_task


@pytest.fixture
def sample_task(task_factory) -> Task:
    """A single task with known, predictable values."""
    return task_factory(title="Sample Task", description="Before")


@pytest.fixture
def multiple_tasks(task_factory) -> list[Task]:
    """Three tasks in a known creation order."""
    return [
        task_factory(title="First"),
        task_factory(title="Second", completed=True),
        task_factory(title="Third", priority=TaskPriority.HIGH, tags=["home"]),
    ]


@pytest.fixture
def minimal_task_data() -> dict[str, str]:
    """The smallest valid task payload (title only)."""
    return {"title": "Minimal Task"}


@pytest.fixture
def user_headers() -> dict[str, str]:
    """Headers identifying a named user for flag evaluation."""
    return {
        "X-User-Id": "user-123",
        "X-User-Name": "Test User",
        "X-User-Email": "test@example.com",
    }
