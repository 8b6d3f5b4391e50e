from __future__ import annotations

from datetime import datetime
from typing import Optional

import pytest

from src.gymflow.gymflow.core.exceptions import ValidationError
from src.gymflow.gymflow.sessions import service as session_service_module
from src.gymflow.gymflow.sessions.model import ClassSession
from src.gymflow.gymflow.sessions.service import ClassSessionService
from src.gymflow.gymflow.workouts.model import WorkoutPlan

NOW = datetime(2025, 6, 1, 12, 0, 0)


class InMemorySessions:
    def __init__(self):
        self._sessions: dict[int, ClassSession] = {}
        self._id = 0

    def get_by_id(self, session_id: int) -> Optional[ClassSession]:
        return self._sessions.get(session_id)

    def list_for_trainer(self, trainer_id: int):
        return [s for s in self._sessions.values() if s.trainer_id == trainer_id]

    def list_upcoming(self, now: datetime):
        return sorted((s for s in self._sessions.values() if s.is_upcoming(now)), key=lambda s: s.schedule_at)

    def list_all(self):
        return list(self._sessions.values())

    def create(self, session: ClassSession) -> int:
        self._id += 1
        self._sessions[self._id] = session.with_id(self._id)
        return self._id

    def update(self, session: ClassSession) -> bool:
        self._sessions[session.session_id] = session
        return True

    def delete(self, session_id: int) -> bool:
        return self._sessions.pop(session_id, None) is not None


class InMemoryPlans:
    def __init__(self, *plan_ids: int):
        self._plans = {i: WorkoutPlan(i, 1, 2, f"Plan {i}") for i in plan_ids}

    def get_by_id(self, plan_id: int) -> Optional[WorkoutPlan]:
        return self._plans.get(plan_id)


def _service(*plan_ids: int) -> ClassSessionService:
    return ClassSessionService(InMemorySessions(), InMemoryPlans(*plan_ids))


def test_create_and_get_session():
    svc = _service(9)

    session = svc.create_session(trainer_id=2, title="  HIIT ", schedule_at=NOW, capacity=12, workout_plan_id=9)

    assert (session.session_id, session.title, session.workout_plan_id) == (1, "HIIT", 9)
    assert svc.get_session(1) == session


@pytest.mark.parametrize(
    "overrides",
    [
        {"title": " "},
        {"trainer_id": 0},
        {"capacity": 0},
        {"schedule_at": None},
        {"workout_plan_id": 404},
    ],
)
def test_create_session_validation(overrides):
    values = dict(trainer_id=2, title="Yoga", schedule_at=NOW, capacity=10)
    values.update(overrides)

    with pytest.raises(ValidationError):
        _service(9).create_session(**values)


def test_upcoming_and_trainer_lists(monkeypatch):
    monkeypatch.setattr(session_service_module, "now_local", lambda: NOW)
    svc = _service()
    svc.create_session(trainer_id=2, title="Later", schedule_at=datetime(2025, 6, 3, 9, 0), capacity=5)
    svc.create_session(trainer_id=3, title="Past", schedule_at=datetime(2025, 5, 1, 9, 0), capacity=5)
    svc.create_session(trainer_id=2, title="Soon", schedule_at=datetime(2025, 6, 2, 9, 0), capacity=5)

    assert [s.title for s in svc.upcoming_sessions()] == ["Soon", "Later"]
    assert [s.title for s in svc.sessions_for_trainer(2)] == ["Later", "Soon"]
    assert len(svc.all_sessions()) == 3


def test_update_keeps_unchanged_fields():
    svc = _service()
    created = svc.create_session(trainer_id=2, title="Spin", schedule_at=NOW, capacity=8)

    updated = svc.update_session(created.session_id, capacity=20)

    assert (updated.title, updated.schedule_at, updated.capacity) == ("Spin", NOW, 20)
    with pytest.raises(ValidationError):
        svc.update_session(created.session_id, trainer_id=5)
    with pytest.raises(ValidationError):
        svc.update_session(created.session_id, capacity=-1)


def test_delete_session():
    svc = _service()
    created = svc.create_session(trainer_id=2, title="Box", schedule_at=NOW, capacity=8)

    svc.delete_session(created.session_id)

    with pytest.raises(ValidationError):
        svc.get_session(created.session_id)
    with pytest.raises(ValidationError):
        svc.delete_session(created.session_id)
