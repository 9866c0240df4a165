from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..core.constants import DEFAULT_SUMMARY_TOP


@dataclass(frozen=True)
class EmployeeAlphaRow:
    employee_id: int
    full_name: str
    alpha_count: int
    total_deduction: int


@dataclass(frozen=True)
class AlphaSummary:
    start: date
    end: date
    count: int
    total_deduction: int
    # None when the summary was filtered to a single employee.
    employees: Optional[list[EmployeeAlphaRow]] = None

    @property
    def employees_affected(self) -> int:
        return len(self.employees or [])

    def top(self, n: int = DEFAULT_SUMMARY_TOP) -> list[EmployeeAlphaRow]:
        return list(self.employees or [])[:n]


@dataclass(frozen=True)
class EmployeeAlphaReport:
    employee_id: int
    employee_name: str
    start: date
    end: date
    alpha_count: int
    total_deduction: int
    records: list[AttendanceRecord] = field(default_factory=list)


@dataclass(frozen=True)
class SystemAlphaStatus:
    """Alpha records the automatic check wrote for a day and the day before."""

    day: date
    day_count: int
    previous_day: date
    previous_day_count: int
