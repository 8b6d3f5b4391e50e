from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .completion_model import WorkoutCompletion


class WorkoutCompletionRepository(Protocol):
    def get(self, workout_plan_id: int, member_id: int) -> Optional[WorkoutCompletion]:
        raise NotImplementedError

    def list_for_member(self, member_id: int) -> Sequence[WorkoutCompletion]:
        raise NotImplementedError

    def list_for_plan(self, workout_plan_id: int) -> Sequence[WorkoutCompletion]:
        raise NotImplementedError

    def create(self, completion: WorkoutCompletion) -> int:
        raise NotImplementedError

    def delete(self, workout_plan_id: int, member_id: int) -> bool:
        raise NotImplementedError
