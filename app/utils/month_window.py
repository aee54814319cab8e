# app/utils/month_window.py

from datetime import date
from dateutil.relativedelta import relativedelta
from typing import List, Tuple

WINDOW_SIZE = 6

# fixed English names; calendar.month_name follows the process locale
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def adjust_month(index: int, year: int) -> Tuple[int, int]:
    """Map a raw month index (may fall outside 1..12) to a real (year, month)."""
    if index < 1:
        return year - 1, index + 12
    if index > 12:
        return year, index - 12
    return year, index


def rolling_months(today: date, size: int = WINDOW_SIZE) -> List[Tuple[int, int]]:
    """(year, month) pairs for the trailing window ending at today's month, oldest first."""
    month = today.month
    return [adjust_month(i, today.year) for i in range(month - size + 1, month + 1)]


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    # half open: [first day of month, first day of next month)
    start = date(year, month, 1)
    return start, start + relativedelta(months=1)


def month_name(month: int) -> str:
    return MONTH_NAMES[month - 1]
