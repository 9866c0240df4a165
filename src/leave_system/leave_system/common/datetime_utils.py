from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Union

DateLike = Union[date, datetime]


def month_label(value: DateLike) -> str:
    """Calendar month of ``value`` as zero-padded ``YYYY-MM``."""
    return f"{value.year:04d}-{value.month:02d}"


def month_range(year: int, month: int) -> tuple[date, date]:
    """First and last day of a calendar month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def as_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)
