from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Mapping, Optional, Sequence, TextIO, Union

from ..attendance.model import AttendanceRecord
from ..core.constants import MAX_IMPORT_FILE_BYTES
from ..core.exceptions import FileOperationError, ValidationError
from ..workouts.model import WorkoutPlan
from .attendance_csv import read_attendance, write_attendance, write_named_attendance
from .file_guard import validate_import_file
from .workout_csv import read_workout_plans, write_workout_plans

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class FileImportExportService:
    """Path-level CSV import/export for workout templates and attendance reports."""

    def __init__(self, *, max_file_bytes: int = MAX_IMPORT_FILE_BYTES):
        self._max_file_bytes = int(max_file_bytes)

    @staticmethod
    def _require_path(file_path: Optional[PathLike]) -> Path:
        if file_path is None or not str(file_path).strip():
            raise ValidationError("File path cannot be null or empty")
        return Path(file_path)

    @contextmanager
    def _writer(self, path: Path, what: str) -> Iterator[TextIO]:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8", newline="") as f:
                yield f
        except OSError as e:
            raise FileOperationError(f"Error exporting {what}: {e}") from e

    @contextmanager
    def _reader(self, file_path: Optional[PathLike], what: str) -> Iterator[TextIO]:
        path = self.validate_file(file_path)
        try:
            with path.open("r", encoding="utf-8-sig", newline="") as f:
                yield f
        except UnicodeDecodeError as e:
            raise ValidationError(f"File is not valid UTF-8 text: {path.name}") from e
        except OSError as e:
            raise FileOperationError(f"Error importing {what}: {e}") from e

    def validate_file(self, file_path: Optional[PathLike]) -> Path:
        return validate_import_file(file_path, max_bytes=self._max_file_bytes)

    def export_workout_templates(self, plans: Optional[Sequence[WorkoutPlan]], file_path: Optional[PathLike]) -> Path:
        if plans is None:
            raise ValidationError("Workout plans list cannot be null")
        path = self._require_path(file_path)

        with self._writer(path, "workout templates") as f:
            count = write_workout_plans(plans, f)
        logger.info("Exported %d workout plan(s) to %s", count, path)
        return path

    def import_workout_templates(self, file_path: Optional[PathLike]) -> List[WorkoutPlan]:
        with self._reader(file_path, "workout templates") as f:
            plans = read_workout_plans(f)
        logger.info("Imported %d workout plan(s) from %s", len(plans), file_path)
        return plans

    def export_attendance_report(
        self,
        records: Optional[Sequence[AttendanceRecord]],
        file_path: Optional[PathLike],
        member_names: Optional[Mapping[int, str]] = None,
        class_names: Optional[Mapping[int, str]] = None,
    ) -> Path:
        """Plain report unless a name map is given, then the named Yes/No variant."""
        if records is None:
            raise ValidationError("Attendance records list cannot be null")
        path = self._require_path(file_path)

        with self._writer(path, "attendance report") as f:
            if member_names is None and class_names is None:
                count = write_attendance(records, f)
            else:
                count = write_named_attendance(records, f, member_names=member_names, class_names=class_names)
        logger.info("Exported %d attendance record(s) to %s", count, path)
        return path

    def import_attendance_report(self, file_path: Optional[PathLike]) -> List[AttendanceRecord]:
        with self._reader(file_path, "attendance report") as f:
            records = read_attendance(f)
        logger.info("Imported %d attendance record(s) from %s", len(records), file_path)
        return records
