from __future__ import annotations

import logging
from typing import Iterable, List, Optional, TextIO

from ..common.datetime_utils import format_timestamp, now_local, parse_timestamp
from ..core.constants import UNASSIGNED_ID, WORKOUT_CSV_HEADER, WORKOUT_CSV_MIN_FIELDS
from ..core.exceptions import ValidationError
from ..workouts.model import WorkoutPlan
from .csv_codec import parse_int, read_table, write_table

logger = logging.getLogger(__name__)


def workout_plan_to_fields(plan: WorkoutPlan) -> list:
    # A plan without created_at exports a blank CreatedAt and imports stamped with the current time.
    return [
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
        plan.member_id,
        plan.trainer_id,
        format_timestamp(plan.created_at),
    ]


def _parse_created_at(value: Optional[str]):
    if value is None:
        return now_local()
    try:
        return parse_timestamp(value)
    except ValueError:
        logger.warning("Invalid CreatedAt %r, using current time", value)
        return now_local()


def workout_plan_from_fields(values: List[Optional[str]]) -> WorkoutPlan:
    """Build an unassigned WorkoutPlan from cleaned field values.

    Raises ValidationError when a number is malformed or a required value is missing.
    """
    duration = parse_int(values[5], "DurationMinutes")
    sets = parse_int(values[7], "TargetSets")
    reps = parse_int(values[8], "TargetReps")
    rest = parse_int(values[9], "RestSeconds")
    member_id = parse_int(values[10], "MemberId", required=True)
    trainer_id = parse_int(values[11], "TrainerId", required=True)

    title = values[0]
    if not title:
        raise ValidationError("Title is required")
    if member_id <= 0:
        raise ValidationError("Member ID must be > 0")
    if trainer_id <= 0:
        raise ValidationError("Trainer ID must be > 0")

    return WorkoutPlan(
        plan_id=UNASSIGNED_ID,
        member_id=member_id,
        trainer_id=trainer_id,
        title=title,
        description=values[1],
        difficulty=values[2],
        muscle_group=values[3],
        workout_type=values[4],
        duration_minutes=duration,
        equipment_needed=values[6],
        target_sets=sets,
        target_reps=reps,
        rest_seconds=rest,
        created_at=_parse_created_at(values[12]),
    )


def write_workout_plans(plans: Iterable[WorkoutPlan], stream: TextIO) -> int:
    return write_table(stream, WORKOUT_CSV_HEADER, (workout_plan_to_fields(p) for p in plans))


def read_workout_plans(stream: TextIO) -> List[WorkoutPlan]:
    return read_table(
        stream,
        header=WORKOUT_CSV_HEADER,
        min_fields=WORKOUT_CSV_MIN_FIELDS,
        convert=workout_plan_from_fields,
    )
