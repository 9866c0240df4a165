from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import EmployeeQuota


class EmployeeRepository(Protocol):
    def get_quota(self, employee_id: int) -> Optional[EmployeeQuota]:
        raise NotImplementedError

    def update_quota(
        self,
        *,
        employee_id: int,
        expected_month: Optional[str],
        expected_used: int,
        current_month: str,
        used_leave_days_this_month: int,
    ) -> bool:
        """Compare-and-swap write of the quota counters.

        Applies only while the stored month/used still equal the expected
        values; returns False when another writer got there first.
        """

        raise NotImplementedError

    def list_employee_ids(self) -> Sequence[int]:
        raise NotImplementedError
