"""Rebuild this month's used leave days from approved Leave requests.

Run after data fixes or imports that touched leave_requests directly:

    APP_ENV=production python scripts/reconcile_leave_quota.py
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src" / "leave_system"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from leave_system.main import bootstrap


def main() -> None:
    container = bootstrap()
    quota = container.quota_manager
    leaves = container.leave_service

    employee_ids = container.employees_repo.list_employee_ids()
    print(f"Processing {len(employee_ids)} employee(s) for {quota.current_month()}...")

    for employee_id in employee_ids:
        approved_days = leaves.approved_leave_days_this_month(employee_id)
        state = quota.reconcile(employee_id, approved_days)
        if approved_days:
            print(f"  employee {employee_id}: used {state.used}/{state.quota}, remaining {state.remaining}")

    print("OK: quotas reconciled")


if __name__ == "__main__":
    main()
