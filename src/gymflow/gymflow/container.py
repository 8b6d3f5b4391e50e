from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import MAX_IMPORT_FILE_BYTES
from .database.connection import DBConfig, DatabaseConnection
from .equipment.mysql_equipment_repository import MySQLEquipmentRepository
from .equipment.service import EquipmentService
from .sessions.mysql_class_session_repository import MySQLClassSessionRepository
from .sessions.service import ClassSessionService
from .transfer.service import FileImportExportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, UserService
from .workouts.completion_service import WorkoutCompletionService
from .workouts.mysql_completion_repository import MySQLWorkoutCompletionRepository
from .workouts.mysql_workout_plan_repository import MySQLWorkoutPlanRepository
from .workouts.service import WorkoutPlanService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    workout_plans_repo: MySQLWorkoutPlanRepository
    completions_repo: MySQLWorkoutCompletionRepository
    sessions_repo: MySQLClassSessionRepository
    attendance_repo: MySQLAttendanceRepository
    equipment_repo: MySQLEquipmentRepository

    file_service: FileImportExportService
    auth_service: AuthService
    user_service: UserService
    workout_plan_service: WorkoutPlanService
    workout_completion_service: WorkoutCompletionService
    class_session_service: ClassSessionService
    attendance_service: AttendanceService
    equipment_service: EquipmentService


def build_container(*, db_config: dict, max_import_bytes: int = MAX_IMPORT_FILE_BYTES) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    users_repo = MySQLUserRepository(conn)
    workout_plans_repo = MySQLWorkoutPlanRepository(conn)
    completions_repo = MySQLWorkoutCompletionRepository(conn)
    sessions_repo = MySQLClassSessionRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    equipment_repo = MySQLEquipmentRepository(conn)

    file_service = FileImportExportService(max_file_bytes=max_import_bytes)

    return Container(
        conn=conn,
        users_repo=users_repo,
        workout_plans_repo=workout_plans_repo,
        completions_repo=completions_repo,
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        equipment_repo=equipment_repo,
        file_service=file_service,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        workout_plan_service=WorkoutPlanService(workout_plans_repo, file_service),
        workout_completion_service=WorkoutCompletionService(completions_repo, workout_plans_repo),
        class_session_service=ClassSessionService(sessions_repo, workout_plans_repo),
        attendance_service=AttendanceService(attendance_repo, file_service, sessions_repo),
        equipment_service=EquipmentService(equipment_repo),
    )
