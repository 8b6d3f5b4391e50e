from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

import pytest

from src.gymflow.gymflow.core.constants import WORKOUT_CSV_HEADER
from src.gymflow.gymflow.core.exceptions import DataAccessError, ValidationError
from src.gymflow.gymflow.workouts.model import WorkoutPlan
from src.gymflow.gymflow.workouts.service import WorkoutPlanService


class InMemoryWorkoutPlans:
    def __init__(self):
        self._plans: dict[int, WorkoutPlan] = {}
        self._id = 0

    def get_by_id(self, plan_id: int) -> Optional[WorkoutPlan]:
        return self._plans.get(plan_id)

    def list_for_member(self, member_id: int):
        return [p for p in self._plans.values() if p.member_id == member_id]

    def list_for_trainer(self, trainer_id: int):
        return [p for p in self._plans.values() if p.trainer_id == trainer_id]

    def list_all(self):
        return list(self._plans.values())

    def create(self, plan: WorkoutPlan) -> int:
        self._id += 1
        self._plans[self._id] = plan.with_id(self._id)
        return self._id

    def update(self, plan: WorkoutPlan) -> bool:
        if plan.plan_id not in self._plans:
            return False
        self._plans[plan.plan_id] = plan
        return True

    def delete(self, plan_id: int) -> bool:
        return self._plans.pop(plan_id, None) is not None


def _new_plan(**overrides) -> WorkoutPlan:
    values = dict(plan_id=0, member_id=1, trainer_id=2, title="  Core blast ", created_at=datetime(2025, 2, 2, 8, 0, 0))
    values.update(overrides)
    return WorkoutPlan(**values)


def test_create_plan_assigns_id_and_trims_text():
    repo = InMemoryWorkoutPlans()
    svc = WorkoutPlanService(repo)

    plan = svc.create_plan(_new_plan(description="   ", difficulty=" Easy "))

    assert plan.plan_id == 1
    assert plan.title == "Core blast"
    assert plan.description is None
    assert plan.difficulty == "Easy"
    assert repo.get_by_id(1) == plan


def test_create_plan_defaults_created_at():
    plan = WorkoutPlanService(InMemoryWorkoutPlans()).create_plan(_new_plan(created_at=None))

    assert isinstance(plan.created_at, datetime)


@pytest.mark.parametrize(
    "overrides",
    [{"title": " "}, {"member_id": 0}, {"trainer_id": -1}, {"target_sets": -3}, {"rest_seconds": -1}],
)
def test_create_plan_validation(overrides):
    with pytest.raises(ValidationError):
        WorkoutPlanService(InMemoryWorkoutPlans()).create_plan(_new_plan(**overrides))


def test_update_and_delete_plan():
    svc = WorkoutPlanService(InMemoryWorkoutPlans())
    created = svc.create_plan(_new_plan())

    updated = svc.update_plan(created.plan_id, title="Core v2", target_reps=12)
    assert (updated.title, updated.target_reps, updated.created_at) == ("Core v2", 12, created.created_at)

    with pytest.raises(ValidationError):
        svc.update_plan(created.plan_id, plan_id=99)

    svc.delete_plan(created.plan_id)
    with pytest.raises(ValidationError):
        svc.get_plan(created.plan_id)
    with pytest.raises(ValidationError):
        svc.delete_plan(created.plan_id)


def test_lists_by_member_and_trainer():
    svc = WorkoutPlanService(InMemoryWorkoutPlans())
    svc.create_plan(_new_plan(member_id=1, trainer_id=2))
    svc.create_plan(_new_plan(member_id=3, trainer_id=2))
    svc.create_plan(_new_plan(member_id=3, trainer_id=4))

    assert len(svc.plans_for_member(3)) == 2
    assert len(svc.plans_for_trainer(2)) == 2
    assert len(svc.all_plans()) == 3
    with pytest.raises(ValidationError):
        svc.plans_for_member(0)


def test_export_then_import_persists_new_plans(tmp_path):
    source = WorkoutPlanService(InMemoryWorkoutPlans())
    source.create_plan(_new_plan(title="Mine", trainer_id=2))
    source.create_plan(_new_plan(title="Other trainer", trainer_id=5))

    path = source.export_templates(tmp_path / "plans.csv", trainer_id=2)

    target_repo = InMemoryWorkoutPlans()
    imported = WorkoutPlanService(target_repo).import_templates(path)

    assert [(p.plan_id, p.title, p.trainer_id) for p in imported] == [(1, "Mine", 2)]
    assert target_repo.list_all() == imported


def test_import_dry_run_does_not_store(tmp_path):
    path = tmp_path / "plans.csv"
    path.write_text(f"{WORKOUT_CSV_HEADER}\nA,,,,,,,,,,1,2,2025-01-01 00:00:00\n", encoding="utf-8")
    repo = InMemoryWorkoutPlans()

    decoded = WorkoutPlanService(repo).import_templates(path, persist=False)

    assert [p.plan_id for p in decoded] == [0]
    assert repo.list_all() == []


def test_import_skips_plans_failing_service_rules(tmp_path):
    path = tmp_path / "plans.csv"
    path.write_text(
        f"{WORKOUT_CSV_HEADER}\nNeg,,,,,,,-1,,,1,2,2025-01-01 00:00:00\nOk,,,,,,,3,,,1,2,2025-01-01 00:00:00\n",
        encoding="utf-8",
    )

    saved = WorkoutPlanService(InMemoryWorkoutPlans()).import_templates(path)

    assert [p.title for p in saved] == ["Ok"]
    assert replace(saved[0], plan_id=0).target_sets == 3


class RejectingWorkoutPlans(InMemoryWorkoutPlans):
    """Fails the insert of the given titles like a foreign-key violation would."""

    def __init__(self, *rejected_titles: str):
        super().__init__()
        self._rejected = set(rejected_titles)

    def create(self, plan: WorkoutPlan) -> int:
        if plan.title in self._rejected:
            raise DataAccessError("Cannot add or update a child row: a foreign key constraint fails")
        return super().create(plan)


def test_import_continues_past_database_failures(tmp_path, caplog):
    caplog.set_level(logging.WARNING)
    path = tmp_path / "plans.csv"
    path.write_text(
        f"{WORKOUT_CSV_HEADER}\n"
        "First,,,,,,,,,,1,2,2025-01-01 00:00:00\n"
        "Orphan,,,,,,,,,,99,2,2025-01-01 00:00:00\n"
        "Third,,,,,,,,,,1,2,2025-01-01 00:00:00\n",
        encoding="utf-8",
    )
    repo = RejectingWorkoutPlans("Orphan")

    saved = WorkoutPlanService(repo).import_templates(path)

    assert [(p.plan_id, p.title) for p in saved] == [(1, "First"), (2, "Third")]
    assert [p.title for p in repo.list_all()] == ["First", "Third"]
    assert "Skipping imported plan 'Orphan'" in caplog.text
