"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_MONTHLY_LEAVE_QUOTA = 12
DEFAULT_ALPHA_DEDUCTION_RATE = 100_000
DEFAULT_LIST_LIMIT = 200
DEFAULT_SUMMARY_TOP = 10

MAX_ATTACHMENT_BYTES = 5 * 1024 * 1024
ALLOWED_ATTACHMENT_MIMETYPES = ("application/pdf",)

SYSTEM_RECORDER = "System"
SECONDS_PER_DAY = 86400
