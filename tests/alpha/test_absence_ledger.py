from __future__ import annotations

from datetime import date

import pytest

from leave_system.alpha.deduction import FlatRateDeduction
from leave_system.alpha.service import AbsenceLedgerService
from leave_system.core.enums import AttendanceStatus
from leave_system.core.exceptions import InvalidStateError, NotFoundError, ValidationError


@pytest.fixture
def ledger(attendance_repo, clock):
    attendance_repo.names.update({1: "Budi", 2: "Siti", 3: "andi"})
    return AbsenceLedgerService(attendance_repo, deduction=FlatRateDeduction(100_000), clock=clock)


def test_record_alpha_is_attributed_to_system(ledger, attendance_repo):
    aid = ledger.record_alpha(1, date(2025, 1, 6))

    rec = attendance_repo.rows[aid]
    assert rec.status == AttendanceStatus.ALPHA
    assert rec.recorded_by == "System"


def test_summarize_counts_alpha_in_inclusive_range(ledger, attendance_repo):
    ledger.record_alpha(1, date(2025, 1, 1))
    ledger.record_alpha(1, date(2025, 1, 31))
    ledger.record_alpha(2, date(2025, 2, 1))
    attendance_repo.create(employee_id=2, work_date=date(2025, 1, 10), status=AttendanceStatus.PRESENT, recorded_by="HR")

    summary = ledger.summarize(start=date(2025, 1, 1), end=date(2025, 1, 31))

    assert summary.count == 2
    assert summary.total_deduction == 200_000
    assert summary.employees_affected == 1


def test_summarize_defaults_to_current_month(ledger):
    ledger.record_alpha(1, date(2024, 12, 31))
    ledger.record_alpha(1, date(2025, 1, 2))

    summary = ledger.summarize()

    assert (summary.start, summary.end) == (date(2025, 1, 1), date(2025, 1, 31))
    assert summary.count == 1


def test_breakdown_sorted_by_count_then_name(ledger):
    for d in (2, 3):
        ledger.record_alpha(2, date(2025, 1, d))
    ledger.record_alpha(1, date(2025, 1, 4))
    ledger.record_alpha(3, date(2025, 1, 5))

    summary = ledger.summarize()

    assert [(r.full_name, r.alpha_count) for r in summary.employees] == [("Siti", 2), ("andi", 1), ("Budi", 1)]
    assert summary.employees[0].total_deduction == 200_000
    assert [r.full_name for r in summary.top(2)] == ["Siti", "andi"]


def test_employee_filter_has_no_breakdown(ledger):
    ledger.record_alpha(1, date(2025, 1, 2))
    ledger.record_alpha(2, date(2025, 1, 2))

    summary = ledger.summarize(employee_id=1)

    assert summary.count == 1
    assert summary.total_deduction == 100_000
    assert summary.employees is None


def test_invalid_range_is_rejected(ledger):
    with pytest.raises(ValidationError):
        ledger.summarize(start=date(2025, 1, 31), end=date(2025, 1, 1))


def test_reclassified_alpha_drops_out_of_summary(ledger, attendance_repo):
    aid = ledger.record_alpha(1, date(2025, 1, 8))
    ledger.record_alpha(1, date(2025, 1, 9))

    updated = ledger.reclassify(aid, "hadir", "Badge reader outage")

    assert updated.status == AttendanceStatus.PRESENT
    assert attendance_repo.rows[aid].note == "Badge reader outage"
    summary = ledger.summarize(start=date(2025, 1, 1), end=date(2025, 1, 31))
    assert summary.count == 1
    assert summary.total_deduction == 100_000


def test_reclassify_writes_default_note(ledger, attendance_repo):
    aid = ledger.record_alpha(1, date(2025, 1, 8))
    ledger.reclassify(aid, AttendanceStatus.SICK)
    assert attendance_repo.rows[aid].note == "Converted from alpa to sakit"


def test_reclassify_rejects_alpha_or_unknown_target(ledger):
    aid = ledger.record_alpha(1, date(2025, 1, 8))

    with pytest.raises(ValidationError):
        ledger.reclassify(aid, "alpa")
    with pytest.raises(ValidationError):
        ledger.reclassify(aid, "vacation")


def test_reclassify_only_applies_to_alpha(ledger, attendance_repo):
    aid = attendance_repo.create(
        employee_id=1, work_date=date(2025, 1, 8), status=AttendanceStatus.EXCUSED, recorded_by="HR"
    )
    with pytest.raises(InvalidStateError):
        ledger.reclassify(aid, "hadir")


def test_remove_deletes_alpha(ledger, attendance_repo):
    aid = ledger.record_alpha(1, date(2025, 1, 8))

    removed = ledger.remove(aid)

    assert removed.attendance_id == aid
    assert aid not in attendance_repo.rows
    assert ledger.summarize().count == 0


def test_remove_refuses_non_alpha_and_missing(ledger, attendance_repo):
    aid = attendance_repo.create(
        employee_id=1, work_date=date(2025, 1, 8), status=AttendanceStatus.PRESENT, recorded_by="HR"
    )
    with pytest.raises(InvalidStateError):
        ledger.remove(aid)
    with pytest.raises(NotFoundError):
        ledger.remove(999)
    assert aid in attendance_repo.rows


def test_employee_report(ledger):
    ledger.record_alpha(1, date(2025, 1, 3))
    ledger.record_alpha(1, date(2025, 1, 9))

    report = ledger.employee_report(1)

    assert report.employee_name == "Budi"
    assert report.alpha_count == 2
    assert report.total_deduction == 200_000
    assert [r.work_date for r in report.records] == [date(2025, 1, 9), date(2025, 1, 3)]


def test_employee_report_without_records(ledger):
    report = ledger.employee_report(2)
    assert report.employee_name == "Unknown"
    assert report.alpha_count == 0


def test_system_alpha_status_counts_only_system_records(ledger, attendance_repo):
    ledger.record_alpha(1, date(2025, 1, 15))
    ledger.record_alpha(2, date(2025, 1, 14))
    ledger.record_alpha(3, date(2025, 1, 14))
    ledger.record_alpha(1, date(2025, 1, 14), recorded_by="HR Admin")
    attendance_repo.create(
        employee_id=2, work_date=date(2025, 1, 15), status=AttendanceStatus.PRESENT, recorded_by="System"
    )

    status = ledger.system_alpha_status()

    assert (status.day, status.day_count) == (date(2025, 1, 15), 1)
    assert (status.previous_day, status.previous_day_count) == (date(2025, 1, 14), 2)


def test_system_alpha_status_for_explicit_day_crosses_month(ledger):
    ledger.record_alpha(1, date(2024, 12, 31))

    status = ledger.system_alpha_status(date(2025, 1, 1))

    assert status.previous_day == date(2024, 12, 31)
    assert status.day_count == 0
    assert status.previous_day_count == 1
