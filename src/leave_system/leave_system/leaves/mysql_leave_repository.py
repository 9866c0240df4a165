from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import LeaveKind, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRequestRepository

_COLUMNS = """
    request_id, employee_id, submitted_at, start_date, end_date,
    kind, reason, status, total_days, attachment_ref, consumed_month
"""


def _to_model(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        employee_id=int(r["employee_id"]),
        submitted_at=r["submitted_at"],
        start_date=r["start_date"],
        end_date=r["end_date"],
        kind=LeaveKind(r["kind"]),
        reason=r.get("reason") or "",
        status=RequestStatus(r["status"]),
        total_days=int(r["total_days"]),
        attachment_ref=r.get("attachment_ref"),
        consumed_month=r.get("consumed_month"),
    )


class MySQLLeaveRequestRepository(LeaveRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        employee_id: int,
        submitted_at: datetime,
        start_date: date,
        end_date: date,
        kind: LeaveKind,
        reason: str,
        total_days: int,
        attachment_ref: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(
                    employee_id, submitted_at, start_date, end_date,
                    kind, reason, status, total_days, attachment_ref
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    submitted_at,
                    start_date,
                    end_date,
                    kind.value,
                    reason,
                    RequestStatus.PENDING.value,
                    int(total_days),
                    attachment_ref,
                ),
            )
            return int(cur.lastrowid)

    def get(self, *, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM leave_requests WHERE request_id=%s",
                (int(request_id),),
            )
            r = fetchone(cur)
            return _to_model(r) if r else None

    def update_status(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        expected_status: RequestStatus,
        consumed_month: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, consumed_month=%s
                WHERE request_id=%s AND status=%s
                """,
                (status.value, consumed_month, int(request_id), expected_status.value),
            )
            return cur.rowcount > 0

    def delete(self, *, request_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM leave_requests WHERE request_id=%s", (int(request_id),))
            return cur.rowcount > 0

    def list_requests(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        kind: Optional[LeaveKind] = None,
        start_from: Optional[date] = None,
        start_to: Optional[date] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[LeaveRequest]:
        clauses = ["1=1"]
        params: list[object] = []

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if kind is not None:
            clauses.append("kind=%s")
            params.append(kind.value)
        if start_from is not None:
            clauses.append("start_date>=%s")
            params.append(start_from)
        if start_to is not None:
            clauses.append("start_date<=%s")
            params.append(start_to)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE {where}
                ORDER BY submitted_at DESC, request_id DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_to_model(r) for r in fetchall(cur)]
