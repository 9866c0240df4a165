from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import LeaveKind, RequestStatus
from .model import LeaveRequest


class LeaveRequestRepository(Protocol):
    def create(
        self,
        *,
        employee_id: int,
        submitted_at: datetime,
        start_date: date,
        end_date: date,
        kind: LeaveKind,
        reason: str,
        total_days: int,
        attachment_ref: Optional[str] = None,
    ) -> int:
        """Insert a pending request and return its id."""

        raise NotImplementedError

    def get(self, *, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def update_status(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        expected_status: RequestStatus,
        consumed_month: Optional[str] = None,
    ) -> bool:
        """Set ``status`` and ``consumed_month`` only while the stored status is ``expected_status``."""

        raise NotImplementedError

    def delete(self, *, request_id: int) -> bool:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        kind: Optional[LeaveKind] = None,
        start_from: Optional[date] = None,
        start_to: Optional[date] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[LeaveRequest]:
        """Newest submission first."""

        raise NotImplementedError
