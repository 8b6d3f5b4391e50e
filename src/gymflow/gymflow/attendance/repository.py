from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_session(self, session_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_member(self, member_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def upsert(self, *, session_id: int, member_id: int, attended: bool) -> AttendanceRecord:
        """Create the (session, member) record or update its attended flag."""

        raise NotImplementedError

    def get_report_rows(self) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError
