from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ClassSession
from .repository import ClassSessionRepository

_SELECT = "SELECT session_id, trainer_id, title, schedule_at, capacity, workout_plan_id FROM class_sessions"


def _to_session(r: Dict[str, Any]) -> ClassSession:
    plan_id = r.get("workout_plan_id")
    return ClassSession(
        session_id=int(r["session_id"]),
        trainer_id=int(r["trainer_id"]),
        title=r["title"],
        schedule_at=r["schedule_at"],
        capacity=int(r["capacity"]),
        workout_plan_id=int(plan_id) if plan_id is not None else None,
    )


class MySQLClassSessionRepository(ClassSessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str = "", params: tuple = ()) -> Sequence[ClassSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {where} ORDER BY schedule_at ASC, session_id ASC", params)
            return [_to_session(r) for r in fetchall(cur)]

    def get_by_id(self, session_id: int) -> Optional[ClassSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE session_id=%s", (int(session_id),))
            r = fetchone(cur)
            return _to_session(r) if r else None

    def list_for_trainer(self, trainer_id: int) -> Sequence[ClassSession]:
        return self._select("WHERE trainer_id=%s", (int(trainer_id),))

    def list_upcoming(self, now: datetime) -> Sequence[ClassSession]:
        return self._select("WHERE schedule_at > %s", (now,))

    def list_all(self) -> Sequence[ClassSession]:
        return self._select()

    def create(self, session: ClassSession) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO class_sessions(trainer_id, title, schedule_at, capacity, workout_plan_id)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (session.trainer_id, session.title, session.schedule_at, session.capacity, session.workout_plan_id),
            )
            return int(cur.lastrowid)

    def update(self, session: ClassSession) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE class_sessions
                SET trainer_id=%s, title=%s, schedule_at=%s, capacity=%s, workout_plan_id=%s
                WHERE session_id=%s
                """,
                (
                    session.trainer_id,
                    session.title,
                    session.schedule_at,
                    session.capacity,
                    session.workout_plan_id,
                    int(session.session_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, session_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM class_sessions WHERE session_id=%s", (int(session_id),))
            return cur.rowcount > 0
