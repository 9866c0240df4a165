from __future__ import annotations

import math

from ..common.datetime_utils import DateLike, as_datetime
from ..core.constants import SECONDS_PER_DAY


def inclusive_day_count(start: DateLike, end: DateLike) -> int:
    """Calendar days spanned by ``start``..``end``, both ends counted.

    Order of the arguments does not matter; equal dates give 1.
    """
    seconds = abs((as_datetime(end) - as_datetime(start)).total_seconds())
    return math.ceil(seconds / SECONDS_PER_DAY) + 1
