from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    attendance_id: int
    employee_id: int
    employee_name: str
    work_date: date
    status: AttendanceStatus
    recorded_by: str
    note: Optional[str] = None
