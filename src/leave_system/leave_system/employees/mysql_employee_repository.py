from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import EmployeeQuota
from .repository import EmployeeRepository


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_quota(self, employee_id: int) -> Optional[EmployeeQuota]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, full_name, monthly_leave_quota,
                       used_leave_days_this_month, current_month
                FROM employees
                WHERE employee_id=%s
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return EmployeeQuota(
                employee_id=int(r["employee_id"]),
                full_name=r["full_name"],
                monthly_leave_quota=int(r["monthly_leave_quota"]),
                used_leave_days_this_month=int(r["used_leave_days_this_month"]),
                current_month=r.get("current_month"),
            )

    def update_quota(
        self,
        *,
        employee_id: int,
        expected_month: Optional[str],
        expected_used: int,
        current_month: str,
        used_leave_days_this_month: int,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # <=> is MySQL's null-safe equality; a fresh employee has no month yet.
            cur.execute(
                """
                UPDATE employees
                SET current_month=%s, used_leave_days_this_month=%s
                WHERE employee_id=%s
                  AND current_month <=> %s
                  AND used_leave_days_this_month=%s
                """,
                (
                    current_month,
                    int(used_leave_days_this_month),
                    int(employee_id),
                    expected_month,
                    int(expected_used),
                ),
            )
            return cur.rowcount > 0

    def list_employee_ids(self) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT employee_id FROM employees ORDER BY employee_id")
            return [int(r["employee_id"]) for r in fetchall(cur)]
