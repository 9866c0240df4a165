from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EmployeeQuota:
    """Leave-quota fields of an employee record."""

    employee_id: int
    full_name: str
    monthly_leave_quota: int
    used_leave_days_this_month: int
    current_month: Optional[str]

    @property
    def remaining(self) -> int:
        return self.monthly_leave_quota - self.used_leave_days_this_month
