from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..core.constants import UNASSIGNED_ID


@dataclass(frozen=True)
class WorkoutPlan:
    """Domain entity: a workout plan a trainer assigns to a member.

    Note: plain data object, no DB access code here.
    """

    plan_id: int
    member_id: int
    trainer_id: int
    title: str
    description: Optional[str] = None
    difficulty: Optional[str] = None
    muscle_group: Optional[str] = None
    workout_type: Optional[str] = None
    duration_minutes: Optional[int] = None
    equipment_needed: Optional[str] = None
    target_sets: Optional[int] = None
    target_reps: Optional[int] = None
    rest_seconds: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def is_assigned(self) -> bool:
        return self.plan_id != UNASSIGNED_ID

    def with_id(self, plan_id: int) -> "WorkoutPlan":
        return replace(self, plan_id=int(plan_id))
