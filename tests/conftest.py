from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime
from typing import Optional

import pytest

from leave_system.attendance.model import AttendanceRecord
from leave_system.common.clock import FixedClock
from leave_system.core.enums import RequestStatus
from leave_system.employees.model import EmployeeQuota
from leave_system.leaves.model import LeaveRequest


class InMemoryEmployees:
    def __init__(self):
        self._rows: dict[int, EmployeeQuota] = {}
        self._mutex = threading.Lock()
        self.writes = 0

    def add(self, employee_id: int, *, quota: int = 12, used: int = 0, month: Optional[str] = None, name: str = "") -> None:
        self._rows[employee_id] = EmployeeQuota(
            employee_id=employee_id,
            full_name=name or f"Employee {employee_id}",
            monthly_leave_quota=quota,
            used_leave_days_this_month=used,
            current_month=month,
        )

    def row(self, employee_id: int) -> EmployeeQuota:
        return self._rows[employee_id]

    def get_quota(self, employee_id: int) -> Optional[EmployeeQuota]:
        return self._rows.get(employee_id)

    def update_quota(self, *, employee_id, expected_month, expected_used, current_month, used_leave_days_this_month):
        with self._mutex:
            row = self._rows.get(employee_id)
            if not row or row.current_month != expected_month or row.used_leave_days_this_month != expected_used:
                return False
            self._rows[employee_id] = replace(
                row,
                current_month=current_month,
                used_leave_days_this_month=used_leave_days_this_month,
            )
            self.writes += 1
            return True

    def list_employee_ids(self):
        return sorted(self._rows)


class InMemoryLeaveRequests:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, LeaveRequest] = {}

    def create(self, *, employee_id, submitted_at, start_date, end_date, kind, reason, total_days, attachment_ref=None):
        rid = self._next_id
        self._next_id += 1
        self.rows[rid] = LeaveRequest(
            request_id=rid,
            employee_id=employee_id,
            submitted_at=submitted_at,
            start_date=start_date,
            end_date=end_date,
            kind=kind,
            reason=reason,
            status=RequestStatus.PENDING,
            total_days=total_days,
            attachment_ref=attachment_ref,
        )
        return rid

    def get(self, *, request_id):
        return self.rows.get(int(request_id))

    def update_status(self, *, request_id, status, expected_status, consumed_month=None):
        req = self.rows.get(int(request_id))
        if not req or req.status != expected_status:
            return False
        self.rows[int(request_id)] = replace(req, status=status, consumed_month=consumed_month)
        return True

    def delete(self, *, request_id):
        return self.rows.pop(int(request_id), None) is not None

    def list_requests(self, *, employee_id=None, status=None, kind=None, start_from=None, start_to=None, limit=200):
        items = [
            r
            for r in self.rows.values()
            if (employee_id is None or r.employee_id == employee_id)
            and (status is None or r.status == status)
            and (kind is None or r.kind == kind)
            and (start_from is None or r.start_date >= start_from)
            and (start_to is None or r.start_date <= start_to)
        ]
        items.sort(key=lambda r: (r.submitted_at, r.request_id), reverse=True)
        return items[:limit]


class InMemoryAttendance:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, AttendanceRecord] = {}
        self.names: dict[int, str] = {}

    def create(self, *, employee_id, work_date, status, recorded_by, note=None):
        aid = self._next_id
        self._next_id += 1
        self.rows[aid] = AttendanceRecord(
            attendance_id=aid,
            employee_id=employee_id,
            employee_name=self.names.get(employee_id, f"Employee {employee_id}"),
            work_date=work_date,
            status=status,
            recorded_by=recorded_by,
            note=note,
        )
        return aid

    def get(self, *, attendance_id):
        return self.rows.get(int(attendance_id))

    def find_many(self, *, status=None, employee_id=None, start_date=None, end_date=None, recorded_by=None):
        items = [
            r
            for r in self.rows.values()
            if (status is None or r.status == status)
            and (employee_id is None or r.employee_id == employee_id)
            and (start_date is None or r.work_date >= start_date)
            and (end_date is None or r.work_date <= end_date)
            and (recorded_by is None or r.recorded_by == recorded_by)
        ]
        items.sort(key=lambda r: (r.work_date, r.attendance_id), reverse=True)
        return items

    def update_status(self, *, attendance_id, status, note, expected_status):
        rec = self.rows.get(int(attendance_id))
        if not rec or rec.status != expected_status:
            return False
        self.rows[int(attendance_id)] = replace(rec, status=status, note=note)
        return True

    def delete(self, *, attendance_id, expected_status):
        rec = self.rows.get(int(attendance_id))
        if not rec or rec.status != expected_status:
            return False
        del self.rows[int(attendance_id)]
        return True


class InMemoryAttachments:
    def __init__(self, *refs: str):
        self.files: set[str] = set(refs)

    def exists(self, ref):
        return ref in self.files

    def delete(self, ref):
        if ref in self.files:
            self.files.remove(ref)
            return True
        return False


@pytest.fixture
def clock():
    return FixedClock(datetime(2025, 1, 15, 9, 0, 0))


@pytest.fixture
def employees():
    return InMemoryEmployees()


@pytest.fixture
def leave_repo():
    return InMemoryLeaveRequests()


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def attachments():
    return InMemoryAttachments()
