"""Monthly leave-quota lifecycle.

Every entry point except ``restore`` first rolls the employee's counters
over to the clock's calendar month, so a stale month's balance is never
read or written. ``restore`` deliberately skips that step: releasing days
into a month that has already closed must not revive its balance.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..common.clock import Clock, SystemClock
from ..common.datetime_utils import month_label
from ..common.validators import require_non_negative
from ..core.exceptions import ConcurrentUpdateError, NotFoundError, QuotaExceededError
from ..employees.model import EmployeeQuota
from ..employees.repository import EmployeeRepository
from .locks import EmployeeLocks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuotaState:
    quota: int
    used: int
    remaining: int
    was_reset: bool


@dataclass(frozen=True)
class QuotaCheck:
    quota: int
    used: int
    remaining: int
    requested: int
    sufficient: bool
    month: str


@dataclass(frozen=True)
class QuotaOverview:
    employee_id: int
    employee_name: str
    month: str
    total_quota: int
    used_days: int
    remaining_days: int


class QuotaManager:
    def __init__(
        self,
        employees: EmployeeRepository,
        *,
        clock: Optional[Clock] = None,
        locks: Optional[EmployeeLocks] = None,
    ):
        self._employees = employees
        self._clock = clock or SystemClock()
        self._locks = locks or EmployeeLocks()

    def current_month(self) -> str:
        return month_label(self._clock.now())

    def _load(self, employee_id: int) -> EmployeeQuota:
        employee = self._employees.get_quota(int(employee_id))
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")
        return employee

    def _write(self, employee: EmployeeQuota, *, month: str, used: int) -> None:
        ok = self._employees.update_quota(
            employee_id=employee.employee_id,
            expected_month=employee.current_month,
            expected_used=employee.used_leave_days_this_month,
            current_month=month,
            used_leave_days_this_month=used,
        )
        if not ok:
            raise ConcurrentUpdateError(f"Quota of employee {employee.employee_id} changed concurrently")

    def _rollover(self, employee_id: int) -> tuple[EmployeeQuota, bool]:
        # Caller holds the employee lock.
        employee = self._load(employee_id)
        month = self.current_month()

        if employee.current_month is not None and employee.current_month > month:
            # The stored month is ahead of our clock; never move it backwards.
            logger.warning(
                "Stored month %s of employee %s is ahead of clock month %s; not resetting",
                employee.current_month,
                employee.employee_id,
                month,
            )
            return employee, False

        if employee.current_month == month:
            return employee, False

        logger.info(
            "Resetting monthly quota for %s (employee %s): %s -> %s",
            employee.full_name,
            employee.employee_id,
            employee.current_month,
            month,
        )
        self._write(employee, month=month, used=0)
        reset = EmployeeQuota(
            employee_id=employee.employee_id,
            full_name=employee.full_name,
            monthly_leave_quota=employee.monthly_leave_quota,
            used_leave_days_this_month=0,
            current_month=month,
        )
        return reset, True

    @staticmethod
    def _state(employee: EmployeeQuota, was_reset: bool) -> QuotaState:
        return QuotaState(
            quota=employee.monthly_leave_quota,
            used=employee.used_leave_days_this_month,
            remaining=employee.remaining,
            was_reset=was_reset,
        )

    def rollover_if_needed(self, employee_id: int) -> QuotaState:
        with self._locks.hold(employee_id):
            employee, was_reset = self._rollover(employee_id)
            return self._state(employee, was_reset)

    def check_quota(self, employee_id: int, requested_days: int) -> QuotaCheck:
        requested = require_non_negative(requested_days, "requested_days")
        state = self.rollover_if_needed(employee_id)
        return QuotaCheck(
            quota=state.quota,
            used=state.used,
            remaining=state.remaining,
            requested=requested,
            sufficient=state.remaining >= requested,
            month=self.current_month(),
        )

    def consume(self, employee_id: int, days: int) -> QuotaState:
        """Commit ``days`` of allowance; call exactly once per approval."""
        days = require_non_negative(days, "days")
        with self._locks.hold(employee_id):
            employee, was_reset = self._rollover(employee_id)
            if days == 0:
                return self._state(employee, was_reset)

            new_used = employee.used_leave_days_this_month + days
            if new_used > employee.monthly_leave_quota:
                raise QuotaExceededError(
                    f"Insufficient leave quota: {employee.remaining} day(s) remaining, {days} requested",
                    remaining=employee.remaining,
                )

            self._write(employee, month=employee.current_month, used=new_used)
            logger.info(
                "Consumed %s leave day(s) for employee %s (%s/%s used in %s)",
                days,
                employee.employee_id,
                new_used,
                employee.monthly_leave_quota,
                employee.current_month,
            )
            return QuotaState(
                quota=employee.monthly_leave_quota,
                used=new_used,
                remaining=employee.monthly_leave_quota - new_used,
                was_reset=was_reset,
            )

    def restore(self, employee_id: int, days: int) -> bool:
        """Release previously consumed days.

        Returns False when nothing changed, including the cross-month case
        where the consumption belonged to a month that has since closed.
        """
        days = require_non_negative(days, "days")
        if days == 0:
            return False

        with self._locks.hold(employee_id):
            employee = self._load(employee_id)
            month = self.current_month()
            if employee.current_month != month:
                logger.info(
                    "Skipping restore of %s day(s) for employee %s: stored month %s is not %s",
                    days,
                    employee.employee_id,
                    employee.current_month,
                    month,
                )
                return False

            new_used = max(0, employee.used_leave_days_this_month - days)
            if new_used == employee.used_leave_days_this_month:
                return False

            self._write(employee, month=month, used=new_used)
            logger.info(
                "Restored %s leave day(s) for employee %s (%s/%s used in %s)",
                days,
                employee.employee_id,
                new_used,
                employee.monthly_leave_quota,
                month,
            )
            return True

    def reconcile(self, employee_id: int, used_days: int) -> QuotaState:
        """Rebuild the current month's usage from an authoritative total.

        The value is clamped to ``[0, quota]`` so the counters stay valid
        even when historic approvals exceed today's quota.
        """
        used_days = require_non_negative(used_days, "used_days")
        with self._locks.hold(employee_id):
            employee, was_reset = self._rollover(employee_id)
            new_used = min(used_days, employee.monthly_leave_quota)
            if new_used != used_days:
                logger.warning(
                    "Approved leave of employee %s (%s days) exceeds quota %s; clamping",
                    employee.employee_id,
                    used_days,
                    employee.monthly_leave_quota,
                )
            if new_used != employee.used_leave_days_this_month:
                self._write(employee, month=employee.current_month, used=new_used)
            return QuotaState(
                quota=employee.monthly_leave_quota,
                used=new_used,
                remaining=employee.monthly_leave_quota - new_used,
                was_reset=was_reset,
            )

    def get_overview(self, employee_id: int) -> QuotaOverview:
        with self._locks.hold(employee_id):
            employee, _ = self._rollover(employee_id)
            return QuotaOverview(
                employee_id=employee.employee_id,
                employee_name=employee.full_name,
                month=self.current_month(),
                total_quota=employee.monthly_leave_quota,
                used_days=employee.used_leave_days_this_month,
                remaining_days=employee.remaining,
            )
