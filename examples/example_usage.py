"""Example: driving the service layer directly (no HTTP layer).

Shows the approval flow: check quota, submit, approve, inspect the balance.
"""

from datetime import date

from leave_system.core.enums import LeaveKind
from leave_system.main import bootstrap


def main():
    container = bootstrap()
    today = container.clock.now().date()

    print(container.quota_manager.check_quota(employee_id=1, requested_days=2))

    req = container.leave_service.create_request(
        employee_id=1,
        kind=LeaveKind.LEAVE,
        start_date=today,
        end_date=date.fromordinal(today.toordinal() + 1),
        reason="Family event",
    )
    container.leave_service.approve(req.request_id)
    print(container.quota_manager.get_overview(employee_id=1))
    print(container.absence_ledger.summarize())


if __name__ == "__main__":
    main()
