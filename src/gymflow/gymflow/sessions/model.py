from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ClassSession:
    """Domain entity: a scheduled group class led by a trainer.

    Note: plain data object, no DB access code here.
    """

    session_id: int
    trainer_id: int
    title: str
    schedule_at: datetime
    capacity: int
    workout_plan_id: Optional[int] = None

    def is_upcoming(self, now: datetime) -> bool:
        return self.schedule_at > now

    def with_id(self, session_id: int) -> "ClassSession":
        return replace(self, session_id=int(session_id))
