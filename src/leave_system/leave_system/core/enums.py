from __future__ import annotations

from enum import Enum


class LeaveKind(str, Enum):
    """Type of a leave request; only LEAVE draws on the monthly quota."""

    LEAVE = "Leave"
    SICK = "Sick"
    OTHER = "Other"


class RequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AttendanceStatus(str, Enum):
    """Attendance statuses as stored in the database."""

    PRESENT = "hadir"
    EXCUSED = "izin"
    SICK = "sakit"
    ALPHA = "alpa"


# Statuses an alpha record may be corrected to.
RECLASSIFY_TARGETS = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.EXCUSED, AttendanceStatus.SICK})
