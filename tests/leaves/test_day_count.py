from datetime import date, datetime

from leave_system.leaves.calculator import inclusive_day_count


def test_same_day_counts_as_one():
    d = date(2025, 1, 10)
    assert inclusive_day_count(d, d) == 1


def test_both_endpoints_are_counted():
    assert inclusive_day_count(date(2025, 1, 10), date(2025, 1, 13)) == 4


def test_symmetric_under_swapped_arguments():
    a, b = date(2025, 1, 28), date(2025, 2, 3)
    assert inclusive_day_count(a, b) == inclusive_day_count(b, a) == 7


def test_partial_day_rounds_up():
    start = datetime(2025, 1, 10, 0, 0)
    end = datetime(2025, 1, 11, 6, 0)
    assert inclusive_day_count(start, end) == 3


def test_spans_leap_day():
    assert inclusive_day_count(date(2024, 2, 28), date(2024, 3, 1)) == 3
