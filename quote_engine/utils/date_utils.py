"""Date manipulation utilities"""

from datetime import date


def nights_between(check_in: date, check_out: date) -> int:
    """Whole nights between two dates (negative if check_out precedes check_in)"""
    return (check_out - check_in).days


def first_of_month_after(from_date: date, months: int) -> date:
    """1st of the month `months` calendar months after from_date's month"""
    month_index = from_date.month - 1 + months
    return date(from_date.year + month_index // 12, month_index % 12 + 1, 1)


def first_of_month(from_date: date) -> date:
    return from_date.replace(day=1)
