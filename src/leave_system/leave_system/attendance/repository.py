from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get(self, *, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def find_many(
        self,
        *,
        status: Optional[AttendanceStatus] = None,
        employee_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        recorded_by: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records in ``[start_date, end_date]`` (inclusive), newest date first."""

        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        work_date: date,
        status: AttendanceStatus,
        recorded_by: str,
        note: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update_status(
        self,
        *,
        attendance_id: int,
        status: AttendanceStatus,
        note: Optional[str],
        expected_status: AttendanceStatus,
    ) -> bool:
        raise NotImplementedError

    def delete(self, *, attendance_id: int, expected_status: AttendanceStatus) -> bool:
        raise NotImplementedError
