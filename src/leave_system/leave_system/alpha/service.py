from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.clock import Clock, SystemClock
from ..common.datetime_utils import month_range
from ..common.validators import require_enum
from ..core.constants import SYSTEM_RECORDER
from ..core.enums import RECLASSIFY_TARGETS, AttendanceStatus
from ..core.exceptions import InvalidStateError, NotFoundError, ValidationError
from .deduction import DeductionPolicy, FlatRateDeduction
from .model import AlphaSummary, EmployeeAlphaReport, EmployeeAlphaRow, SystemAlphaStatus

logger = logging.getLogger(__name__)


class AbsenceLedgerService:
    """Unexcused-absence ("alpa") bookkeeping.

    Deductions are computed from the records on every query and never
    stored, so reclassifying or removing a record needs no reversal entry.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        deduction: Optional[DeductionPolicy] = None,
        clock: Optional[Clock] = None,
    ):
        self._attendance = attendance
        self._deduction = deduction or FlatRateDeduction()
        self._clock = clock or SystemClock()

    def _resolve_range(self, start: Optional[date], end: Optional[date]) -> tuple[date, date]:
        if start is None or end is None:
            now = self._clock.now()
            first, last = month_range(now.year, now.month)
            start = start or first
            end = end or last
        if end < start:
            raise ValidationError("End date must be on or after start date")
        return start, end

    def _get_alpha(self, attendance_id: int) -> AttendanceRecord:
        record = self._attendance.get(attendance_id=int(attendance_id))
        if not record:
            raise NotFoundError(f"Attendance record {attendance_id} not found")
        if record.status != AttendanceStatus.ALPHA:
            raise InvalidStateError(
                f"Attendance record {attendance_id} is not an alpha record (status={record.status.value})"
            )
        return record

    def record_alpha(
        self,
        employee_id: int,
        work_date: date,
        *,
        recorded_by: str = SYSTEM_RECORDER,
        note: Optional[str] = None,
    ) -> int:
        # Duplicate detection (same employee and date) belongs to the caller.
        return self._attendance.create(
            employee_id=int(employee_id),
            work_date=work_date,
            status=AttendanceStatus.ALPHA,
            recorded_by=recorded_by,
            note=note,
        )

    def summarize(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        employee_id: Optional[int] = None,
    ) -> AlphaSummary:
        start, end = self._resolve_range(start, end)
        records = self._attendance.find_many(
            status=AttendanceStatus.ALPHA,
            employee_id=employee_id,
            start_date=start,
            end_date=end,
        )
        count = len(records)
        total = self._deduction.deduction_for(count)

        if employee_id is not None:
            return AlphaSummary(start=start, end=end, count=count, total_deduction=total)

        grouped: dict[int, dict] = {}
        for r in records:
            g = grouped.get(r.employee_id)
            if not g:
                g = {"full_name": r.employee_name, "count": 0}
                grouped[r.employee_id] = g
            g["count"] += 1

        rows = [
            EmployeeAlphaRow(
                employee_id=emp_id,
                full_name=g["full_name"],
                alpha_count=g["count"],
                total_deduction=self._deduction.deduction_for(g["count"]),
            )
            for emp_id, g in grouped.items()
        ]
        # Equal counts fall back to name, then id, so the order is reproducible.
        rows.sort(key=lambda x: (-x.alpha_count, x.full_name.casefold(), x.employee_id))
        return AlphaSummary(start=start, end=end, count=count, total_deduction=total, employees=rows)

    def employee_report(
        self,
        employee_id: int,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> EmployeeAlphaReport:
        start, end = self._resolve_range(start, end)
        records = list(
            self._attendance.find_many(
                status=AttendanceStatus.ALPHA,
                employee_id=int(employee_id),
                start_date=start,
                end_date=end,
            )
        )
        return EmployeeAlphaReport(
            employee_id=int(employee_id),
            employee_name=records[0].employee_name if records else "Unknown",
            start=start,
            end=end,
            alpha_count=len(records),
            total_deduction=self._deduction.deduction_for(len(records)),
            records=records,
        )

    def _system_alpha_count(self, day: date) -> int:
        return len(
            self._attendance.find_many(
                status=AttendanceStatus.ALPHA,
                start_date=day,
                end_date=day,
                recorded_by=SYSTEM_RECORDER,
            )
        )

    def system_alpha_status(self, day: Optional[date] = None) -> SystemAlphaStatus:
        day = day or self._clock.now().date()
        previous = day - timedelta(days=1)
        return SystemAlphaStatus(
            day=day,
            day_count=self._system_alpha_count(day),
            previous_day=previous,
            previous_day_count=self._system_alpha_count(previous),
        )

    def reclassify(
        self,
        attendance_id: int,
        new_status: AttendanceStatus | str,
        note: Optional[str] = None,
    ) -> AttendanceRecord:
        new_status = require_enum(new_status, AttendanceStatus, "new_status")
        if new_status not in RECLASSIFY_TARGETS:
            allowed = ", ".join(sorted(s.value for s in RECLASSIFY_TARGETS))
            raise ValidationError(f"new_status must be one of: {allowed}")

        record = self._get_alpha(attendance_id)
        note = (note or "").strip() or f"Converted from {AttendanceStatus.ALPHA.value} to {new_status.value}"

        ok = self._attendance.update_status(
            attendance_id=record.attendance_id,
            status=new_status,
            note=note,
            expected_status=AttendanceStatus.ALPHA,
        )
        if not ok:
            raise InvalidStateError(f"Attendance record {attendance_id} is no longer an alpha record")

        logger.info(
            "Reclassified alpha %s of employee %s on %s to %s",
            record.attendance_id,
            record.employee_id,
            record.work_date,
            new_status.value,
        )
        return AttendanceRecord(
            attendance_id=record.attendance_id,
            employee_id=record.employee_id,
            employee_name=record.employee_name,
            work_date=record.work_date,
            status=new_status,
            recorded_by=record.recorded_by,
            note=note,
        )

    def remove(self, attendance_id: int) -> AttendanceRecord:
        record = self._get_alpha(attendance_id)
        if not self._attendance.delete(attendance_id=record.attendance_id, expected_status=AttendanceStatus.ALPHA):
            raise InvalidStateError(f"Attendance record {attendance_id} is no longer an alpha record")

        logger.info(
            "Removed alpha %s of employee %s on %s",
            record.attendance_id,
            record.employee_id,
            record.work_date,
        )
        return record
