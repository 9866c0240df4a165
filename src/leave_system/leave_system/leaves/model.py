from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import month_label
from ..core.enums import LeaveKind, RequestStatus


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    employee_id: int
    submitted_at: datetime
    start_date: date
    end_date: date
    kind: LeaveKind
    reason: str
    status: RequestStatus
    total_days: int
    attachment_ref: Optional[str] = None
    # Month whose allowance this request currently holds; None when uncharged.
    consumed_month: Optional[str] = None

    @property
    def start_month(self) -> str:
        return month_label(self.start_date)

    @property
    def draws_on_quota(self) -> bool:
        return self.kind == LeaveKind.LEAVE
