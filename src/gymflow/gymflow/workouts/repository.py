from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import WorkoutPlan


class WorkoutPlanRepository(Protocol):
    def get_by_id(self, plan_id: int) -> Optional[WorkoutPlan]:
        raise NotImplementedError

    def list_for_member(self, member_id: int) -> Sequence[WorkoutPlan]:
        raise NotImplementedError

    def list_for_trainer(self, trainer_id: int) -> Sequence[WorkoutPlan]:
        raise NotImplementedError

    def list_all(self) -> Sequence[WorkoutPlan]:
        raise NotImplementedError

    def create(self, plan: WorkoutPlan) -> int:
        """Insert and return the new plan id (plan.plan_id is ignored)."""

        raise NotImplementedError

    def update(self, plan: WorkoutPlan) -> bool:
        raise NotImplementedError

    def delete(self, plan_id: int) -> bool:
        raise NotImplementedError
