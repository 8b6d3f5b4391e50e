from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..common.validators import require_positive_id
from ..core.exceptions import DataAccessError, ValidationError
from ..sessions.repository import ClassSessionRepository
from ..transfer.service import FileImportExportService
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        files: Optional[FileImportExportService] = None,
        sessions: Optional[ClassSessionRepository] = None,
    ):
        self._attendance = attendance
        self._files = files or FileImportExportService()
        self._sessions = sessions

    def mark_attendance(self, session_id: int, member_id: int, attended: bool) -> AttendanceRecord:
        session_id = require_positive_id(session_id, "Session ID")
        member_id = require_positive_id(member_id, "Member ID")
        if self._sessions is not None and not self._sessions.get_by_id(session_id):
            raise ValidationError(f"Class session {session_id} not found")

        record = self._attendance.upsert(session_id=session_id, member_id=member_id, attended=bool(attended))
        logger.info("Attendance marked: member %d, session %d, attended=%s", member_id, session_id, record.attended)
        return record

    def get_for_session(self, session_id: int) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_session(require_positive_id(session_id, "Session ID"))

    def get_for_member(self, member_id: int) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_member(require_positive_id(member_id, "Member ID"))

    def get_by_id(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(require_positive_id(attendance_id, "Attendance ID"))
        if not record:
            raise ValidationError("Attendance record not found")
        return record

    def attendance_count(self, session_id: int) -> int:
        """Members who actually attended the session (pending records excluded)."""
        return sum(1 for r in self.get_for_session(session_id) if r.attended)

    def all_records(self) -> Sequence[AttendanceRecord]:
        return self._attendance.list_all()

    def export_report(self, path: Union[str, Path], *, named: bool = False) -> Path:
        if not named:
            return self._files.export_attendance_report(list(self.all_records()), path)

        rows = self._attendance.get_report_rows()
        records = [
            AttendanceRecord(attendance_id=r.attendance_id, session_id=r.session_id, member_id=r.member_id, attended=r.attended)
            for r in rows
        ]
        member_names = {r.member_id: r.member_name for r in rows if r.member_name}
        class_names = {r.session_id: r.class_name for r in rows if r.class_name}
        return self._files.export_attendance_report(records, path, member_names, class_names)

    def import_report(self, path: Union[str, Path], *, persist: bool = True) -> List[AttendanceRecord]:
        """Decode a report; with persist=True rows that cannot be stored are logged and skipped."""
        records = self._files.import_attendance_report(path)
        if not persist:
            return records

        saved: List[AttendanceRecord] = []
        for r in records:
            try:
                saved.append(self.mark_attendance(r.session_id, r.member_id, r.attended))
            except (ValidationError, DataAccessError) as e:
                logger.warning("Skipping imported attendance (member %d, session %d): %s", r.member_id, r.session_id, e)
        return saved
