from __future__ import annotations

import logging
from dataclasses import fields, replace
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty, require_non_negative, require_positive_id
from ..core.constants import UNASSIGNED_ID
from ..core.exceptions import DataAccessError, ValidationError
from ..transfer.service import FileImportExportService
from .model import WorkoutPlan
from .repository import WorkoutPlanRepository

logger = logging.getLogger(__name__)

_EDITABLE = {f.name for f in fields(WorkoutPlan)} - {"plan_id", "created_at"}
_COUNTS = ("duration_minutes", "target_sets", "target_reps", "rest_seconds")


def _clean_text(value: Optional[str]) -> Optional[str]:
    value = value.strip() if value else None
    return value or None


class WorkoutPlanService:
    def __init__(self, plans: WorkoutPlanRepository, files: Optional[FileImportExportService] = None):
        self._plans = plans
        self._files = files or FileImportExportService()

    @staticmethod
    def _validated(plan: WorkoutPlan) -> WorkoutPlan:
        changes = {
            "title": require_non_empty(plan.title, "Title"),
            "member_id": require_positive_id(plan.member_id, "Member ID"),
            "trainer_id": require_positive_id(plan.trainer_id, "Trainer ID"),
        }
        for name in ("description", "difficulty", "muscle_group", "workout_type", "equipment_needed"):
            changes[name] = _clean_text(getattr(plan, name))
        for name in _COUNTS:
            changes[name] = require_non_negative(getattr(plan, name), name)
        return replace(plan, **changes)

    def create_plan(self, plan: WorkoutPlan) -> WorkoutPlan:
        plan = self._validated(plan)
        if plan.created_at is None:
            plan = replace(plan, created_at=now_local())
        plan_id = self._plans.create(plan)
        logger.info("Created workout plan %d for member %d", plan_id, plan.member_id)
        return plan.with_id(plan_id)

    def update_plan(self, plan_id: int, **changes) -> WorkoutPlan:
        unknown = set(changes) - _EDITABLE
        if unknown:
            raise ValidationError(f"Unknown workout plan field(s): {', '.join(sorted(unknown))}")

        current = self.get_plan(plan_id)
        updated = self._validated(replace(current, **changes))
        self._plans.update(updated)
        return updated

    def delete_plan(self, plan_id: int) -> None:
        plan_id = require_positive_id(plan_id, "Plan ID")
        if not self._plans.delete(plan_id):
            raise ValidationError("Workout plan not found")

    def get_plan(self, plan_id: int) -> WorkoutPlan:
        plan = self._plans.get_by_id(require_positive_id(plan_id, "Plan ID"))
        if not plan:
            raise ValidationError("Workout plan not found")
        return plan

    def plans_for_member(self, member_id: int) -> Sequence[WorkoutPlan]:
        return self._plans.list_for_member(require_positive_id(member_id, "Member ID"))

    def plans_for_trainer(self, trainer_id: int) -> Sequence[WorkoutPlan]:
        return self._plans.list_for_trainer(require_positive_id(trainer_id, "Trainer ID"))

    def all_plans(self) -> Sequence[WorkoutPlan]:
        return self._plans.list_all()

    def export_templates(self, path: Union[str, Path], *, trainer_id: Optional[int] = None) -> Path:
        plans = self.plans_for_trainer(trainer_id) if trainer_id is not None else self.all_plans()
        return self._files.export_workout_templates(list(plans), path)

    def import_templates(self, path: Union[str, Path], *, persist: bool = True) -> List[WorkoutPlan]:
        """Decode a template file; with persist=True each plan is stored and returned with its new id.

        Plans failing validation or rejected by the database are logged and skipped.
        """
        plans = self._files.import_workout_templates(path)
        if not persist:
            return plans

        saved: List[WorkoutPlan] = []
        for plan in plans:
            try:
                saved.append(self.create_plan(replace(plan, plan_id=UNASSIGNED_ID)))
            except (ValidationError, DataAccessError) as e:
                logger.warning("Skipping imported plan %r: %s", plan.title, e)
        return saved
