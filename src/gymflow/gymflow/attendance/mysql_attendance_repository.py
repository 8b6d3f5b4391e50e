from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

_SELECT = "SELECT attendance_id, session_id, member_id, attended FROM attendance_records"


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        session_id=int(r["session_id"]),
        member_id=int(r["member_id"]),
        attended=bool(r["attended"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str = "", params: tuple = ()) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} {where} ORDER BY session_id ASC, member_id ASC", params)
            return [_to_record(r) for r in fetchall(cur)]

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_session(self, session_id: int) -> Sequence[AttendanceRecord]:
        return self._select("WHERE session_id=%s", (int(session_id),))

    def list_for_member(self, member_id: int) -> Sequence[AttendanceRecord]:
        return self._select("WHERE member_id=%s", (int(member_id),))

    def list_all(self) -> Sequence[AttendanceRecord]:
        return self._select()

    def upsert(self, *, session_id: int, member_id: int, attended: bool) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(session_id, member_id, attended)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE attended=VALUES(attended)
                """,
                (int(session_id), int(member_id), int(bool(attended))),
            )
            cur.execute(f"{_SELECT} WHERE session_id=%s AND member_id=%s", (int(session_id), int(member_id)))
            return _to_record(fetchone(cur))

    def get_report_rows(self) -> Sequence[AttendanceReportRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    ar.attendance_id, ar.session_id, ar.member_id, ar.attended,
                    u.full_name AS member_name,
                    cs.title AS class_name
                FROM attendance_records ar
                LEFT JOIN users u ON u.user_id = ar.member_id
                LEFT JOIN class_sessions cs ON cs.session_id = ar.session_id
                ORDER BY ar.session_id ASC, ar.member_id ASC
                """
            )
            return [
                AttendanceReportRow(
                    attendance_id=int(r["attendance_id"]),
                    session_id=int(r["session_id"]),
                    member_id=int(r["member_id"]),
                    attended=bool(r["attended"]),
                    member_name=r.get("member_name"),
                    class_name=r.get("class_name"),
                )
                for r in fetchall(cur)
            ]
