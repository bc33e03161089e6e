"""Unit tests for date helpers"""

from datetime import date
from quote_engine.utils.date_utils import first_of_month, first_of_month_after, nights_between


def test_nights_between():
    assert nights_between(date(2027, 7, 3), date(2027, 7, 6)) == 3
    assert nights_between(date(2027, 7, 6), date(2027, 7, 3)) == -3


def test_first_of_month_after_rolls_year():
    assert first_of_month_after(date(2026, 10, 18), 2) == date(2026, 12, 1)
    assert first_of_month_after(date(2026, 12, 1), 2) == date(2027, 2, 1)
    assert first_of_month_after(date(2026, 11, 30), 14) == date(2028, 1, 1)


def test_first_of_month():
    assert first_of_month(date(2027, 1, 13)) == date(2027, 1, 1)
