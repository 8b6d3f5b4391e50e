from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, TextIO

from ..core.constants import (
    ATTENDANCE_CSV_HEADER,
    ATTENDANCE_CSV_MIN_FIELDS,
    NAMED_ATTENDANCE_CSV_HEADER,
    UNASSIGNED_ID,
)
from ..core.enums import AttendanceLabel
from ..core.exceptions import ValidationError
from ..attendance.model import AttendanceRecord
from .csv_codec import parse_int, read_table, write_table

_ATTENDED_VALUES = {
    AttendanceLabel.COMPLETED.value.lower(): True,
    AttendanceLabel.PENDING.value.lower(): False,
    AttendanceLabel.YES.value.lower(): True,
    AttendanceLabel.NO.value.lower(): False,
    "true": True,
    "false": False,
}


def attended_label(attended: bool, *, named: bool = False) -> str:
    if named:
        return (AttendanceLabel.YES if attended else AttendanceLabel.NO).value
    return (AttendanceLabel.COMPLETED if attended else AttendanceLabel.PENDING).value


def parse_attended(value: Optional[str]) -> bool:
    key = (value or "").strip().lower()
    if key not in _ATTENDED_VALUES:
        raise ValidationError(f"Invalid Attended value: {value!r}")
    return _ATTENDED_VALUES[key]


def attendance_from_fields(values: List[Optional[str]]) -> AttendanceRecord:
    member_id = parse_int(values[0], "MemberId", required=True)
    session_id = parse_int(values[1], "SessionId", required=True)
    attended = parse_attended(values[2])

    if member_id <= 0:
        raise ValidationError("Member ID must be > 0")
    if session_id <= 0:
        raise ValidationError("Session ID must be > 0")

    return AttendanceRecord(
        attendance_id=UNASSIGNED_ID,
        session_id=session_id,
        member_id=member_id,
        attended=attended,
    )


def write_attendance(records: Iterable[AttendanceRecord], stream: TextIO) -> int:
    return write_table(
        stream,
        ATTENDANCE_CSV_HEADER,
        ([r.member_id, r.session_id, attended_label(r.attended)] for r in records),
    )


def write_named_attendance(
    records: Iterable[AttendanceRecord],
    stream: TextIO,
    *,
    member_names: Optional[Mapping[int, str]] = None,
    class_names: Optional[Mapping[int, str]] = None,
) -> int:
    """Report variant with member and class names, attended as Yes/No.

    Export only: the import side reads the plain MemberId,SessionId,Attended table.
    """
    member_names = member_names or {}
    class_names = class_names or {}
    return write_table(
        stream,
        NAMED_ATTENDANCE_CSV_HEADER,
        (
            [
                r.member_id,
                member_names.get(r.member_id),
                r.session_id,
                class_names.get(r.session_id),
                attended_label(r.attended, named=True),
            ]
            for r in records
        ),
    )


def read_attendance(stream: TextIO) -> List[AttendanceRecord]:
    return read_table(
        stream,
        header=ATTENDANCE_CSV_HEADER,
        min_fields=ATTENDANCE_CSV_MIN_FIELDS,
        convert=attendance_from_fields,
    )
