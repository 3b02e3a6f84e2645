"""
Calendar arithmetic for period stepping.

Month and year shifts keep the day of month when the target month has it and
otherwise clamp to the target month's last day (Jan 31 + 1 month = Feb 28).
"""

from datetime import date, datetime, timedelta
from typing import Union

from dateutil.relativedelta import relativedelta
from pandas import Timestamp

from periodlib.conventions.types import Quantum

DATE_FMT = "%Y-%m-%d"
COMPACT_FMT = "%Y%m%d"


def to_date(date_like: Union[str, date, datetime, Timestamp]) -> date:
    """
    Convert a string, datetime or Timestamp to a plain date.
    Accepts 'YYYY-MM-DD' and 'YYYYMMDD' string formats.
    """
    if isinstance(date_like, Timestamp):
        return date_like.date()
    if isinstance(date_like, datetime):
        return date_like.date()
    if isinstance(date_like, date):
        return date_like
    if isinstance(date_like, str):
        for fmt in (DATE_FMT, COMPACT_FMT):
            try:
                return datetime.strptime(date_like, fmt).date()
            except ValueError:
                continue
        raise ValueError(f"Unsupported date string format: {date_like!r}")
    raise TypeError(f"Unsupported type for date: {type(date_like)}")


def add_months(dt: date, months: int) -> date:
    """Add (or subtract, for negative counts) months, clamping the day."""
    return dt + relativedelta(months=months)


def shift(dt: date, quantum: Quantum, count: int) -> date:
    """Move ``dt`` by ``count`` units of ``quantum``."""
    if quantum.months():
        return add_months(dt, quantum.months() * count)
    return dt + timedelta(days=quantum.days() * count)


def nearest_boundary(dt: date, quantum: Quantum, start_of_week: int) -> date:
    """Return the first day of the ``quantum`` period that contains ``dt``."""
    if quantum is Quantum.YEAR:
        return date(dt.year, 1, 1)
    if quantum is Quantum.QUARTER:
        return date(dt.year, dt.month - (dt.month - 1) % 3, 1)
    if quantum is Quantum.MONTH:
        return date(dt.year, dt.month, 1)
    if quantum is Quantum.WEEK:
        return latest_weekday(dt, start_of_week)
    return dt


def latest_weekday(dt: date, weekday: int) -> date:
    """Latest date on or before ``dt`` falling on ``weekday``."""
    return dt - timedelta(days=(dt.weekday() - weekday) % 7)


def earliest_weekday(dt: date, weekday: int) -> date:
    """Earliest date on or after ``dt`` falling on ``weekday``."""
    return dt + timedelta(days=(weekday - dt.weekday()) % 7)
