from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .alpha.deduction import FlatRateDeduction
from .alpha.service import AbsenceLedgerService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .common.clock import Clock, SystemClock
from .core.constants import DEFAULT_ALPHA_DEDUCTION_RATE, MAX_ATTACHMENT_BYTES
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .files.storage import LocalAttachmentStore
from .leaves.mysql_leave_repository import MySQLLeaveRequestRepository
from .leaves.service import LeaveRequestService
from .quota.service import QuotaManager


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    clock: Clock

    employees_repo: MySQLEmployeeRepository
    leave_requests_repo: MySQLLeaveRequestRepository
    attendance_repo: MySQLAttendanceRepository
    attachments: LocalAttachmentStore

    quota_manager: QuotaManager
    leave_service: LeaveRequestService
    absence_ledger: AbsenceLedgerService


def build_container(
    *,
    db_config: dict,
    upload_dir: str | Path = "uploads/sick-letters",
    alpha_deduction_rate: int = DEFAULT_ALPHA_DEDUCTION_RATE,
    max_attachment_bytes: int = MAX_ATTACHMENT_BYTES,
    clock: Optional[Clock] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    clock = clock or SystemClock()

    employees_repo = MySQLEmployeeRepository(conn)
    leave_requests_repo = MySQLLeaveRequestRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    attachments = LocalAttachmentStore(upload_dir, clock=clock, max_bytes=max_attachment_bytes)

    quota_manager = QuotaManager(employees_repo, clock=clock)
    leave_service = LeaveRequestService(leave_requests_repo, quota_manager, attachments, clock=clock)
    absence_ledger = AbsenceLedgerService(
        attendance_repo,
        deduction=FlatRateDeduction(alpha_deduction_rate),
        clock=clock,
    )

    return Container(
        conn=conn,
        clock=clock,
        employees_repo=employees_repo,
        leave_requests_repo=leave_requests_repo,
        attendance_repo=attendance_repo,
        attachments=attachments,
        quota_manager=quota_manager,
        leave_service=leave_service,
        absence_ledger=absence_ledger,
    )
