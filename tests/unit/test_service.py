"""
Unit tests for ``TaskService`` without the HTTP layer.

Key SDET Concepts Demonstrated:
- Testing orchestration logic with injected fakes
- Verifying rule precedence (flag check before value check)
- Asserting that rejected updates leave state untouched
"""

from __future__ import annotations

import pytest

from task_app.errors import (
    FeatureDisabled,
    InvalidId,
    InvalidPriority,
    InvalidTags,
    InvalidTitle,
    NotFound,
)
from task_app.flags import FeatureFlag, FlagGateway
from task_app.models import TaskPriority, UserContext
from task_app.service import TaskService
from task_app.store import TaskStore
from tests.fakes import FakeFlagEvaluator, RaisingFlagEvaluator

pytestmark = pytest.mark.unit

USER = UserContext(key="user-1")


@pytest.fixture
def service(store, flag_gateway) -> TaskService:
    return TaskService(store=store, flags=flag_gateway)


class TestCreate:
    def test_create_assigns_increasing_ids(self, service):
        ids = [service.create_task({"title": f"task {n}"}, USER).id for n in range(5)]

        assert ids == sorted(ids)
        assert len(set(ids)) == 5
        assert ids[0] == 1

    def test_create_does_not_consult_flags_without_gated_fields(self, service, flag_evaluator):
        service.create_task({"title": "plain"}, USER)

        assert flag_evaluator.calls == []

    def test_priority_requires_flag(self, service, store):
        with pytest.raises(FeatureDisabled) as exc_info:
            service.create_task({"title": "t", "priority": "high"}, USER)

        assert exc_info.value.field == "priority"
        assert len(store) == 0

    def test_flag_check_precedes_value_check(self, service):
        with pytest.raises(FeatureDisabled):
            service.create_task({"title": "t", "priority": "bogus"}, USER)
        with pytest.raises(FeatureDisabled):
            service.create_task({"title": "t", "tags": "bogus"}, USER)

    def test_invalid_priority_with_flag_enabled(self, service, priorities_enabled):
        with pytest.raises(InvalidPriority):
            service.create_task({"title": "t", "priority": "urgent"}, USER)

    def test_priority_and_tags_stored_when_enabled(
        self, service, priorities_enabled, filtering_enabled
    ):
        task = service.create_task(
            {"title": "t", "priority": "medium", "tags": ["b", "a"]}, USER
        )

        assert task.priority is TaskPriority.MEDIUM
        assert task.tags == ["b", "a"]

    def test_flags_evaluated_for_acting_user(self, service, flag_evaluator):
        flag_evaluator.enable(FeatureFlag.ADVANCED_FILTERING.value, user="beta-user")

        task = service.create_task({"title": "t", "tags": ["x"]}, UserContext(key="beta-user"))
        with pytest.raises(FeatureDisabled):
            service.create_task({"title": "t", "tags": ["x"]}, UserContext(key="someone-else"))

        assert task.tags == ["x"]

    def test_invalid_tags_with_flag_enabled(self, service, filtering_enabled):
        with pytest.raises(InvalidTags):
            service.create_task({"title": "t", "tags": ["ok", 3]}, USER)

    def test_validation_runs_before_flags(self, service, flag_evaluator):
        with pytest.raises(InvalidTitle):
            service.create_task({"title": "", "priority": "high"}, USER)

        assert flag_evaluator.calls == []

    def test_provider_failure_disables_gated_fields(self, store):
        service = TaskService(store=store, flags=FlagGateway(RaisingFlagEvaluator()))

        with pytest.raises(FeatureDisabled):
            service.create_task({"title": "t", "priority": "low"}, USER)
        assert service.create_task({"title": "t"}, USER).id == 1


class TestGetAndDelete:
    @pytest.mark.parametrize("raw_id", ["abc", "0", "-3"])
    def test_invalid_ids(self, service, raw_id):
        with pytest.raises(InvalidId):
            service.get_task(raw_id)
        with pytest.raises(InvalidId):
            service.delete_task(raw_id)

    def test_missing_task(self, service):
        with pytest.raises(NotFound):
            service.get_task("999")

    def test_delete_then_get(self, service, sample_task):
        service.delete_task(str(sample_task.id))

        with pytest.raises(NotFound):
            service.get_task(str(sample_task.id))
        with pytest.raises(NotFound):
            service.delete_task(str(sample_task.id))


class TestUpdate:
    def test_partial_update_keeps_other_fields(self, service, sample_task):
        task = service.update_task(str(sample_task.id), {"title": "Updated", "completed": True}, USER)

        assert task.title == "Updated"
        assert task.completed is True
        assert task.description == "Before"

    def test_rejected_update_leaves_task_untouched(self, service, sample_task):
        with pytest.raises(FeatureDisabled):
            service.update_task(str(sample_task.id), {"title": "Changed", "priority": "high"}, USER)

        assert sample_task.title == "Sample Task"
        assert sample_task.priority is None

    def test_not_found_reported_before_payload_errors(self, service):
        with pytest.raises(NotFound):
            service.update_task("5", {}, USER)

    def test_existing_gated_values_survive_flag_flip(self, service, flag_evaluator):
        flag_evaluator.enable(FeatureFlag.TASK_PRIORITIES.value)
        task = service.create_task({"title": "t", "priority": "low"}, USER)
        flag_evaluator.disable(FeatureFlag.TASK_PRIORITIES.value)

        updated = service.update_task(str(task.id), {"description": "still low"}, USER)

        assert updated.priority is TaskPriority.LOW

    def test_update_tags_when_enabled(self, service, sample_task, filtering_enabled):
        task = service.update_task(str(sample_task.id), {"tags": ["new"]}, USER)

        assert task.tags == ["new"]


def test_feature_flags_body(service, flag_evaluator):
    flag_evaluator.enable(FeatureFlag.TASK_ANALYTICS.value)

    body = service.feature_flags(UserContext(key="u", name="N"))

    assert body["user"] == {"key": "u", "name": "N"}
    assert body["features"]["task-analytics"] is True
    assert len(body["features"]) == len(FeatureFlag)


def test_list_tasks_in_insertion_order(service, multiple_tasks):
    assert [task.title for task in service.list_tasks()] == ["First", "Second", "Third"]


def test_independent_services_do_not_share_state():
    first = TaskService(TaskStore(), FlagGateway(FakeFlagEvaluator()))
    second = TaskService(TaskStore(), FlagGateway(FakeFlagEvaluator()))

    first.create_task({"title": "a"}, USER)

    assert second.list_tasks() == []
