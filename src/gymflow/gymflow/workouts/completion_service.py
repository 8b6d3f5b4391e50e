from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_positive_id
from ..core.constants import UNASSIGNED_ID
from ..core.exceptions import ValidationError
from .completion_model import WorkoutCompletion
from .completion_repository import WorkoutCompletionRepository
from .repository import WorkoutPlanRepository

logger = logging.getLogger(__name__)


class WorkoutCompletionService:
    """Use case: members mark workout plans as done."""

    def __init__(self, completions: WorkoutCompletionRepository, plans: WorkoutPlanRepository):
        self._completions = completions
        self._plans = plans

    def mark_completed(
        self,
        workout_plan_id: int,
        member_id: int,
        *,
        class_session_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> WorkoutCompletion:
        """Record a completion; marking the same plan twice returns the first record."""
        workout_plan_id = require_positive_id(workout_plan_id, "Workout plan ID")
        member_id = require_positive_id(member_id, "Member ID")
        if class_session_id is not None:
            class_session_id = require_positive_id(class_session_id, "Session ID")

        if not self._plans.get_by_id(workout_plan_id):
            raise ValidationError("Workout plan not found")

        existing = self._completions.get(workout_plan_id, member_id)
        if existing:
            return existing

        completion = WorkoutCompletion(
            completion_id=UNASSIGNED_ID,
            workout_plan_id=workout_plan_id,
            member_id=member_id,
            completed_at=now_local(),
            class_session_id=class_session_id,
            notes=(notes or "").strip() or None,
        )
        completion_id = self._completions.create(completion)
        logger.info("Member %d completed workout plan %d", member_id, workout_plan_id)
        return completion.with_id(completion_id)

    def is_completed(self, workout_plan_id: int, member_id: int) -> bool:
        return self._completions.get(
            require_positive_id(workout_plan_id, "Workout plan ID"),
            require_positive_id(member_id, "Member ID"),
        ) is not None

    def completions_for_member(self, member_id: int) -> Sequence[WorkoutCompletion]:
        return self._completions.list_for_member(require_positive_id(member_id, "Member ID"))

    def completions_for_plan(self, workout_plan_id: int) -> Sequence[WorkoutCompletion]:
        return self._completions.list_for_plan(require_positive_id(workout_plan_id, "Workout plan ID"))

    def unmark_completed(self, workout_plan_id: int, member_id: int) -> None:
        removed = self._completions.delete(
            require_positive_id(workout_plan_id, "Workout plan ID"),
            require_positive_id(member_id, "Member ID"),
        )
        if not removed:
            raise ValidationError("Workout completion not found")
