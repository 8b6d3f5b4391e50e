from __future__ import annotations

import logging
from dataclasses import fields, replace
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty, require_positive_id
from ..core.constants import UNASSIGNED_ID
from ..core.exceptions import ValidationError
from ..workouts.repository import WorkoutPlanRepository
from .model import ClassSession
from .repository import ClassSessionRepository

logger = logging.getLogger(__name__)

_EDITABLE = {f.name for f in fields(ClassSession)} - {"session_id", "trainer_id"}


class ClassSessionService:
    """Use case: schedule group classes."""

    def __init__(self, sessions: ClassSessionRepository, plans: Optional[WorkoutPlanRepository] = None):
        self._sessions = sessions
        self._plans = plans

    def _validated(self, session: ClassSession) -> ClassSession:
        if not isinstance(session.schedule_at, datetime):
            raise ValidationError("Schedule time is required")
        if session.capacity is None or int(session.capacity) <= 0:
            raise ValidationError("Capacity must be > 0")

        plan_id = session.workout_plan_id
        if plan_id is not None:
            plan_id = require_positive_id(plan_id, "Workout plan ID")
            if self._plans is not None and not self._plans.get_by_id(plan_id):
                raise ValidationError("Workout plan not found")

        return replace(
            session,
            title=require_non_empty(session.title, "Title"),
            trainer_id=require_positive_id(session.trainer_id, "Trainer ID"),
            capacity=int(session.capacity),
            workout_plan_id=plan_id,
        )

    def create_session(
        self,
        *,
        trainer_id: int,
        title: str,
        schedule_at: datetime,
        capacity: int,
        workout_plan_id: Optional[int] = None,
    ) -> ClassSession:
        session = self._validated(
            ClassSession(
                session_id=UNASSIGNED_ID,
                trainer_id=trainer_id,
                title=title,
                schedule_at=schedule_at,
                capacity=capacity,
                workout_plan_id=workout_plan_id,
            )
        )
        session_id = self._sessions.create(session)
        logger.info("Scheduled class session %d (%s) at %s", session_id, session.title, session.schedule_at)
        return session.with_id(session_id)

    def get_session(self, session_id: int) -> ClassSession:
        session = self._sessions.get_by_id(require_positive_id(session_id, "Session ID"))
        if not session:
            raise ValidationError("Class session not found")
        return session

    def sessions_for_trainer(self, trainer_id: int) -> Sequence[ClassSession]:
        return self._sessions.list_for_trainer(require_positive_id(trainer_id, "Trainer ID"))

    def upcoming_sessions(self) -> Sequence[ClassSession]:
        return self._sessions.list_upcoming(now_local())

    def all_sessions(self) -> Sequence[ClassSession]:
        return self._sessions.list_all()

    def update_session(self, session_id: int, **changes) -> ClassSession:
        """Apply the given field changes; fields not passed keep their value."""
        unknown = set(changes) - _EDITABLE
        if unknown:
            raise ValidationError(f"Unknown class session field(s): {', '.join(sorted(unknown))}")

        updated = self._validated(replace(self.get_session(session_id), **changes))
        self._sessions.update(updated)
        return updated

    def delete_session(self, session_id: int) -> None:
        session_id = require_positive_id(session_id, "Session ID")
        if not self._sessions.delete(session_id):
            raise ValidationError("Class session not found")
        logger.info("Deleted class session %d", session_id)
