from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .completion_model import WorkoutCompletion
from .completion_repository import WorkoutCompletionRepository

_SELECT = """
    SELECT completion_id, workout_plan_id, member_id, class_session_id, completed_at, notes
    FROM workout_completions
"""


def _to_completion(r: Dict[str, Any]) -> WorkoutCompletion:
    session_id = r.get("class_session_id")
    return WorkoutCompletion(
        completion_id=int(r["completion_id"]),
        workout_plan_id=int(r["workout_plan_id"]),
        member_id=int(r["member_id"]),
        completed_at=r["completed_at"],
        class_session_id=int(session_id) if session_id is not None else None,
        notes=r.get("notes"),
    )


class MySQLWorkoutCompletionRepository(WorkoutCompletionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, workout_plan_id: int, member_id: int) -> Optional[WorkoutCompletion]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE workout_plan_id=%s AND member_id=%s", (int(workout_plan_id), int(member_id)))
            r = fetchone(cur)
            return _to_completion(r) if r else None

    def list_for_member(self, member_id: int) -> Sequence[WorkoutCompletion]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE member_id=%s ORDER BY completed_at DESC", (int(member_id),))
            return [_to_completion(r) for r in fetchall(cur)]

    def list_for_plan(self, workout_plan_id: int) -> Sequence[WorkoutCompletion]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE workout_plan_id=%s ORDER BY completed_at DESC", (int(workout_plan_id),))
            return [_to_completion(r) for r in fetchall(cur)]

    def create(self, completion: WorkoutCompletion) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO workout_completions(workout_plan_id, member_id, class_session_id, completed_at, notes)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (
                    completion.workout_plan_id,
                    completion.member_id,
                    completion.class_session_id,
                    completion.completed_at,
                    completion.notes,
                ),
            )
            return int(cur.lastrowid)

    def delete(self, workout_plan_id: int, member_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM workout_completions WHERE workout_plan_id=%s AND member_id=%s",
                (int(workout_plan_id), int(member_id)),
            )
            return cur.rowcount > 0
