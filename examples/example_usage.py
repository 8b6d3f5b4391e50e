"""Example: use the CSV codec and service layer without Flask or a database.

Controllers are a thin layer; the import/export rules live in the services.
"""

import sys
import tempfile
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.gymflow.gymflow.attendance.model import AttendanceRecord
from src.gymflow.gymflow.transfer.service import FileImportExportService
from src.gymflow.gymflow.workouts.model import WorkoutPlan


def main():
    files = FileImportExportService()
    plans = [
        WorkoutPlan(
            plan_id=7,
            member_id=1,
            trainer_id=2,
            title="Leg day, heavy",
            difficulty="Advanced",
            duration_minutes=60,
            created_at=datetime(2025, 1, 6, 9, 30),
        )
    ]
    with tempfile.TemporaryDirectory() as tmp:
        path = files.export_workout_templates(plans, Path(tmp) / "plans.csv")
        print(path.read_text(encoding="utf-8"))
        print(files.import_workout_templates(path))

        report = files.export_attendance_report(
            [AttendanceRecord(attendance_id=1, session_id=3, member_id=1, attended=True)],
            Path(tmp) / "attendance.csv",
            member_names={1: "Alex Doe"},
            class_names={3: "Morning HIIT"},
        )
        print(report.read_text(encoding="utf-8"))


if __name__ == "__main__":
    main()
