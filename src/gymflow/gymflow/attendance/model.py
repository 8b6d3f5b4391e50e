from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: whether a member attended a class session."""

    attendance_id: int
    session_id: int
    member_id: int
    attended: bool

    def with_id(self, attendance_id: int) -> "AttendanceRecord":
        return replace(self, attendance_id=int(attendance_id))


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for the named report export (joined with names)."""

    attendance_id: int
    session_id: int
    member_id: int
    attended: bool
    member_name: Optional[str] = None
    class_name: Optional[str] = None
