from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import WorkoutPlan
from .repository import WorkoutPlanRepository

_COLUMNS = """
    plan_id, member_id, trainer_id, title, description, difficulty, muscle_group,
    workout_type, duration_minutes, equipment_needed, target_sets, target_reps,
    rest_seconds, created_at
"""


def _opt_int(value: Any) -> Optional[int]:
    return int(value) if value is not None else None


def _to_plan(r: Dict[str, Any]) -> WorkoutPlan:
    return WorkoutPlan(
        plan_id=int(r["plan_id"]),
        member_id=int(r["member_id"]),
        trainer_id=int(r["trainer_id"]),
        title=r["title"],
        description=r.get("description"),
        difficulty=r.get("difficulty"),
        muscle_group=r.get("muscle_group"),
        workout_type=r.get("workout_type"),
        duration_minutes=_opt_int(r.get("duration_minutes")),
        equipment_needed=r.get("equipment_needed"),
        target_sets=_opt_int(r.get("target_sets")),
        target_reps=_opt_int(r.get("target_reps")),
        rest_seconds=_opt_int(r.get("rest_seconds")),
        created_at=r.get("created_at"),
    )


def _params(plan: WorkoutPlan) -> tuple:
    return (
        plan.member_id,
        plan.trainer_id,
        plan.title,
        plan.description,
        plan.difficulty,
        plan.muscle_group,
        plan.workout_type,
        plan.duration_minutes,
        plan.equipment_needed,
        plan.target_sets,
        plan.target_reps,
        plan.rest_seconds,
    )


class MySQLWorkoutPlanRepository(WorkoutPlanRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str = "", params: tuple = ()) -> Sequence[WorkoutPlan]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM workout_plans {where} ORDER BY created_at DESC, plan_id DESC", params)
            return [_to_plan(r) for r in fetchall(cur)]

    def get_by_id(self, plan_id: int) -> Optional[WorkoutPlan]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM workout_plans WHERE plan_id=%s", (int(plan_id),))
            r = fetchone(cur)
            return _to_plan(r) if r else None

    def list_for_member(self, member_id: int) -> Sequence[WorkoutPlan]:
        return self._select("WHERE member_id=%s", (int(member_id),))

    def list_for_trainer(self, trainer_id: int) -> Sequence[WorkoutPlan]:
        return self._select("WHERE trainer_id=%s", (int(trainer_id),))

    def list_all(self) -> Sequence[WorkoutPlan]:
        return self._select()

    def create(self, plan: WorkoutPlan) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO workout_plans(
                    member_id, trainer_id, title, description, difficulty, muscle_group,
                    workout_type, duration_minutes, equipment_needed, target_sets,
                    target_reps, rest_seconds, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _params(plan) + (plan.created_at,),
            )
            return int(cur.lastrowid)

    def update(self, plan: WorkoutPlan) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE workout_plans
                SET member_id=%s, trainer_id=%s, title=%s, description=%s, difficulty=%s,
                    muscle_group=%s, workout_type=%s, duration_minutes=%s, equipment_needed=%s,
                    target_sets=%s, target_reps=%s, rest_seconds=%s
                WHERE plan_id=%s
                """,
                _params(plan) + (int(plan.plan_id),),
            )
            return cur.rowcount > 0

    def delete(self, plan_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM workout_plans WHERE plan_id=%s", (int(plan_id),))
            return cur.rowcount > 0
