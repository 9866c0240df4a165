from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.clock import Clock, SystemClock
from ..common.datetime_utils import month_range
from ..common.validators import require_enum
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import LeaveKind, RequestStatus
from ..core.exceptions import InvalidTransitionError, NotFoundError, QuotaExceededError, ValidationError
from ..files.storage import AttachmentStore
from ..quota.service import QuotaManager
from .calculator import inclusive_day_count
from .model import LeaveRequest
from .repository import LeaveRequestRepository

logger = logging.getLogger(__name__)


class LeaveRequestService:
    """Leave-request lifecycle.

    Reads quota state and calls the QuotaManager at approval, reversal
    and deletion; it never writes the counters itself.
    """

    def __init__(
        self,
        requests: LeaveRequestRepository,
        quota: QuotaManager,
        attachments: AttachmentStore,
        *,
        clock: Optional[Clock] = None,
    ):
        self._requests = requests
        self._quota = quota
        self._attachments = attachments
        self._clock = clock or SystemClock()

    def _get(self, request_id: int) -> LeaveRequest:
        req = self._requests.get(request_id=int(request_id))
        if not req:
            raise NotFoundError(f"Leave request {request_id} not found")
        return req

    def _in_current_month(self, req: LeaveRequest) -> bool:
        return req.start_month == self._quota.current_month()

    def _discard_attachment(self, ref: str) -> None:
        try:
            if self._attachments.delete(ref):
                logger.info("Removed staged attachment %s", ref)
        except Exception:
            # The original error is what the caller needs to see.
            logger.exception("Failed to remove staged attachment %s", ref)

    def _release_quota(self, req: LeaveRequest) -> None:
        # Only a charge against the still-open month can be given back.
        if req.consumed_month is not None and req.consumed_month == self._quota.current_month():
            self._quota.restore(req.employee_id, req.total_days)

    def create_request(
        self,
        *,
        employee_id: int,
        kind: LeaveKind | str,
        start_date: date,
        end_date: date,
        reason: str = "",
        attachment_ref: Optional[str] = None,
    ) -> LeaveRequest:
        try:
            kind = require_enum(kind, LeaveKind, "kind")

            if kind == LeaveKind.SICK and not attachment_ref:
                raise ValidationError("A medical certificate (PDF) is required for sick leave")
            if attachment_ref and not self._attachments.exists(attachment_ref):
                raise ValidationError("Uploaded attachment not found")
            if end_date < start_date:
                raise ValidationError("End date must be on or after start date")

            total_days = inclusive_day_count(start_date, end_date)

            if kind == LeaveKind.LEAVE:
                check = self._quota.check_quota(employee_id, total_days)
                if not check.sufficient:
                    raise QuotaExceededError(
                        f"Insufficient leave quota! Remaining: {check.remaining} day(s).",
                        remaining=check.remaining,
                    )

            request_id = self._requests.create(
                employee_id=int(employee_id),
                submitted_at=self._clock.now(),
                start_date=start_date,
                end_date=end_date,
                kind=kind,
                reason=(reason or "").strip(),
                total_days=total_days,
                attachment_ref=attachment_ref,
            )
        except Exception:
            if attachment_ref:
                self._discard_attachment(attachment_ref)
            raise

        logger.info(
            "Created %s request %s for employee %s (%s day(s))",
            kind.value,
            request_id,
            employee_id,
            total_days,
        )
        return self._get(request_id)

    def transition(self, request_id: int, new_status: RequestStatus | str) -> LeaveRequest:
        new_status = require_enum(new_status, RequestStatus, "status")
        if new_status == RequestStatus.PENDING:
            raise ValidationError("A request cannot be moved back to pending")

        req = self._get(request_id)

        if req.status == RequestStatus.PENDING:
            self._decide(req, new_status)
        elif req.status == RequestStatus.APPROVED and new_status == RequestStatus.REJECTED:
            self._revoke(req)
        else:
            raise InvalidTransitionError(
                f"Leave request {req.request_id} cannot move from {req.status.value} to {new_status.value}"
            )

        logger.info(
            "Leave request %s: %s -> %s",
            req.request_id,
            req.status.value,
            new_status.value,
        )
        return self._get(req.request_id)

    def _decide(self, req: LeaveRequest, new_status: RequestStatus) -> None:
        consumed_month = None
        if new_status == RequestStatus.APPROVED and req.draws_on_quota:
            # Only requests starting in the open month are charged to it.
            if self._in_current_month(req):
                self._quota.consume(req.employee_id, req.total_days)
                consumed_month = req.start_month
            else:
                logger.info(
                    "Leave request %s starts in %s; not consuming current quota",
                    req.request_id,
                    req.start_month,
                )

        ok = self._requests.update_status(
            request_id=req.request_id,
            status=new_status,
            expected_status=RequestStatus.PENDING,
            consumed_month=consumed_month,
        )
        if not ok:
            if consumed_month is not None:
                self._quota.restore(req.employee_id, req.total_days)
            raise InvalidTransitionError(f"Leave request {req.request_id} was already decided")

    def _revoke(self, req: LeaveRequest) -> None:
        ok = self._requests.update_status(
            request_id=req.request_id,
            status=RequestStatus.REJECTED,
            expected_status=RequestStatus.APPROVED,
        )
        if not ok:
            raise InvalidTransitionError(f"Leave request {req.request_id} is no longer approved")
        self._release_quota(req)

    def approve(self, request_id: int) -> LeaveRequest:
        return self.transition(request_id, RequestStatus.APPROVED)

    def reject(self, request_id: int) -> LeaveRequest:
        return self.transition(request_id, RequestStatus.REJECTED)

    def delete_request(self, request_id: int) -> LeaveRequest:
        req = self._get(request_id)

        # Restore before removing: a crash in between over-restores, which
        # the next rollover corrects; the reverse order would lose days.
        if req.status == RequestStatus.APPROVED:
            self._release_quota(req)

        if not self._requests.delete(request_id=req.request_id):
            raise NotFoundError(f"Leave request {request_id} not found")

        if req.attachment_ref:
            self._attachments.delete(req.attachment_ref)

        logger.info("Deleted leave request %s (%s)", req.request_id, req.status.value)
        return req

    def get_request(self, request_id: int) -> LeaveRequest:
        return self._get(request_id)

    def list_requests(
        self,
        *,
        employee_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[LeaveRequest]:
        return self._requests.list_requests(employee_id=employee_id, status=status, limit=limit)

    def pending_requests(self, *, limit: int = 500) -> Sequence[LeaveRequest]:
        return self._requests.list_requests(status=RequestStatus.PENDING, limit=limit)

    def approved_leave_days_this_month(self, employee_id: int) -> int:
        now = self._clock.now()
        first, last = month_range(now.year, now.month)
        approved = self._requests.list_requests(
            employee_id=int(employee_id),
            status=RequestStatus.APPROVED,
            kind=LeaveKind.LEAVE,
            start_from=first,
            start_to=last,
            limit=10_000,
        )
        return sum(r.total_days for r in approved)
