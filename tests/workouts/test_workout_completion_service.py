from __future__ import annotations

from datetime import datetime
from typing import Optional

import pytest

from src.gymflow.gymflow.core.exceptions import ValidationError
from src.gymflow.gymflow.workouts import completion_service
from src.gymflow.gymflow.workouts.completion_model import WorkoutCompletion
from src.gymflow.gymflow.workouts.completion_service import WorkoutCompletionService
from src.gymflow.gymflow.workouts.model import WorkoutPlan

NOW = datetime(2025, 7, 1, 18, 30, 0)


class InMemoryCompletions:
    def __init__(self):
        self._items: dict[tuple[int, int], WorkoutCompletion] = {}

    def get(self, workout_plan_id: int, member_id: int) -> Optional[WorkoutCompletion]:
        return self._items.get((workout_plan_id, member_id))

    def list_for_member(self, member_id: int):
        return [c for c in self._items.values() if c.member_id == member_id]

    def list_for_plan(self, workout_plan_id: int):
        return [c for c in self._items.values() if c.workout_plan_id == workout_plan_id]

    def create(self, completion: WorkoutCompletion) -> int:
        completion_id = len(self._items) + 1
        self._items[(completion.workout_plan_id, completion.member_id)] = completion.with_id(completion_id)
        return completion_id

    def delete(self, workout_plan_id: int, member_id: int) -> bool:
        return self._items.pop((workout_plan_id, member_id), None) is not None


class InMemoryPlans:
    def get_by_id(self, plan_id: int) -> Optional[WorkoutPlan]:
        return WorkoutPlan(plan_id, 4, 2, "Plan") if plan_id in (1, 2) else None


@pytest.fixture()
def svc(monkeypatch) -> WorkoutCompletionService:
    monkeypatch.setattr(completion_service, "now_local", lambda: NOW)
    return WorkoutCompletionService(InMemoryCompletions(), InMemoryPlans())


def test_mark_completed_is_idempotent(svc):
    first = svc.mark_completed(1, 4, notes="  felt good ")
    again = svc.mark_completed(1, 4, notes="second try")

    assert (first.completion_id, first.completed_at, first.notes) == (1, NOW, "felt good")
    assert again == first
    assert svc.is_completed(1, 4)
    assert not svc.is_completed(2, 4)


def test_mark_completed_validation(svc):
    with pytest.raises(ValidationError):
        svc.mark_completed(99, 4)
    with pytest.raises(ValidationError):
        svc.mark_completed(1, 0)
    with pytest.raises(ValidationError):
        svc.mark_completed(1, 4, class_session_id=-1)


def test_lists_and_unmark(svc):
    svc.mark_completed(1, 4, class_session_id=7)
    svc.mark_completed(2, 4)
    svc.mark_completed(1, 5)

    assert [c.workout_plan_id for c in svc.completions_for_member(4)] == [1, 2]
    assert [c.member_id for c in svc.completions_for_plan(1)] == [4, 5]

    svc.unmark_completed(1, 4)
    assert not svc.is_completed(1, 4)
    with pytest.raises(ValidationError):
        svc.unmark_completed(1, 4)
