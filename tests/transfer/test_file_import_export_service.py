from __future__ import annotations

from dataclasses import replace
from datetime import datetime

import pytest

from src.gymflow.gymflow.attendance.model import AttendanceRecord
from src.gymflow.gymflow.core.constants import ATTENDANCE_CSV_HEADER, NAMED_ATTENDANCE_CSV_HEADER
from src.gymflow.gymflow.core.exceptions import (
    FileOperationError,
    FileTooLargeError,
    ValidationError,
    WrongExtensionError,
)
from src.gymflow.gymflow.transfer.service import FileImportExportService
from src.gymflow.gymflow.workouts.model import WorkoutPlan


def _plan(title: str, difficulty: str) -> WorkoutPlan:
    return WorkoutPlan(
        plan_id=3,
        member_id=1,
        trainer_id=2,
        title=title,
        difficulty=difficulty,
        created_at=datetime(2025, 5, 1, 7, 0, 0),
    )


def test_export_creates_parent_directories_and_imports_back(tmp_path):
    svc = FileImportExportService()
    target = tmp_path / "nested" / "dir" / "plans.csv"

    path = svc.export_workout_templates([_plan("Push", "Easy"), _plan("Pull", "Hard")], str(target))
    imported = svc.import_workout_templates(path)

    assert target.exists()
    assert [(p.title, p.difficulty, p.plan_id) for p in imported] == [("Push", "Easy", 0), ("Pull", "Hard", 0)]


def test_import_reads_utf8_bom(tmp_path):
    path = tmp_path / "att.csv"
    path.write_bytes(("\ufeff" + ATTENDANCE_CSV_HEADER + "\r\n7,8,Completed\r\n").encode("utf-8"))

    records = FileImportExportService().import_attendance_report(path)

    assert [(r.member_id, r.session_id, r.attended) for r in records] == [(7, 8, True)]


def test_export_attendance_plain_and_named(tmp_path):
    svc = FileImportExportService()
    records = [AttendanceRecord(attendance_id=1, session_id=4, member_id=9, attended=False)]

    plain = svc.export_attendance_report(records, tmp_path / "plain.csv")
    named = svc.export_attendance_report(records, tmp_path / "named.csv", {9: "Sam"}, {4: "Yoga"})

    assert plain.read_text(encoding="utf-8") == f"{ATTENDANCE_CSV_HEADER}\n9,4,Pending\n"
    assert named.read_text(encoding="utf-8") == f"{NAMED_ATTENDANCE_CSV_HEADER}\n9,Sam,4,Yoga,No\n"


def test_null_arguments_are_rejected(tmp_path):
    svc = FileImportExportService()

    with pytest.raises(ValidationError):
        svc.export_workout_templates(None, tmp_path / "x.csv")
    with pytest.raises(ValidationError):
        svc.export_workout_templates([], "  ")
    with pytest.raises(ValidationError):
        svc.export_attendance_report(None, tmp_path / "x.csv")
    with pytest.raises(ValidationError):
        svc.import_workout_templates(None)


def test_export_write_failure_surfaces(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(FileOperationError):
        FileImportExportService().export_workout_templates([_plan("A", "B")], blocker / "plans.csv")


def test_import_checks_file_before_reading(tmp_path):
    path = tmp_path / "plans.txt"
    path.write_text("whatever", encoding="utf-8")

    with pytest.raises(WrongExtensionError):
        FileImportExportService().import_workout_templates(path)


def test_configured_size_limit(tmp_path):
    path = tmp_path / "plans.csv"
    path.write_text("x" * 64, encoding="utf-8")

    with pytest.raises(FileTooLargeError):
        FileImportExportService(max_file_bytes=32).validate_file(path)


def test_invalid_utf8_is_a_validation_error(tmp_path):
    path = tmp_path / "latin1.csv"
    path.write_bytes(b"MemberId,SessionId,Attended\n1,2,\xe9\xff\n")

    with pytest.raises(ValidationError):
        FileImportExportService().import_attendance_report(path)


@pytest.mark.parametrize("description", ["line1\rline2", "a\r\nb", "trailing\r", "mixed\n\r\nbreaks"])
def test_line_breaks_inside_fields_round_trip(tmp_path, description):
    svc = FileImportExportService()
    plans = [replace(_plan("First", "Easy"), description=description), _plan("Second", "Hard")]

    imported = svc.import_workout_templates(svc.export_workout_templates(plans, tmp_path / "plans.csv"))

    assert [(p.title, p.description) for p in imported] == [("First", description), ("Second", None)]
