from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class WorkoutCompletion:
    """A member finishing a workout plan, optionally as part of a class session."""

    completion_id: int
    workout_plan_id: int
    member_id: int
    completed_at: datetime
    class_session_id: Optional[int] = None
    notes: Optional[str] = None

    def with_id(self, completion_id: int) -> "WorkoutCompletion":
        return replace(self, completion_id=int(completion_id))
