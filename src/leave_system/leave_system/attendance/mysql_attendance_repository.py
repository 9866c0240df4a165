from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_SELECT = """
    SELECT a.attendance_id, a.employee_id, e.full_name, a.work_date,
           a.status, a.recorded_by, a.note
    FROM attendance a
    JOIN employees e ON e.employee_id = a.employee_id
"""


def _to_model(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        employee_name=r["full_name"],
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        recorded_by=r["recorded_by"],
        note=r.get("note"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE a.attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_model(r) if r else None

    def find_many(
        self,
        *,
        status: Optional[AttendanceStatus] = None,
        employee_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        recorded_by: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("a.status=%s")
            params.append(status.value)
        if employee_id is not None:
            clauses.append("a.employee_id=%s")
            params.append(int(employee_id))
        if start_date is not None:
            clauses.append("a.work_date>=%s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("a.work_date<=%s")
            params.append(end_date)
        if recorded_by is not None:
            clauses.append("a.recorded_by=%s")
            params.append(recorded_by)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE {where} ORDER BY a.work_date DESC, a.attendance_id DESC",
                tuple(params),
            )
            return [_to_model(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        employee_id: int,
        work_date: date,
        status: AttendanceStatus,
        recorded_by: str,
        note: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(employee_id, work_date, status, recorded_by, note)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(employee_id), work_date, status.value, recorded_by, note),
            )
            return int(cur.lastrowid)

    def update_status(
        self,
        *,
        attendance_id: int,
        status: AttendanceStatus,
        note: Optional[str],
        expected_status: AttendanceStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET status=%s, note=%s
                WHERE attendance_id=%s AND status=%s
                """,
                (status.value, note, int(attendance_id), expected_status.value),
            )
            return cur.rowcount > 0

    def delete(self, *, attendance_id: int, expected_status: AttendanceStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance WHERE attendance_id=%s AND status=%s",
                (int(attendance_id), expected_status.value),
            )
            return cur.rowcount > 0
