"""Weekday and month name lookup."""

import calendar
from typing import Dict, Optional


def _build_table(full_names, abbreviations, first: int) -> Dict[str, int]:
    table: Dict[str, int] = {}
    for index, (name, abbr) in enumerate(zip(full_names, abbreviations)):
        if not name:
            continue
        table[name.lower()] = index + first
        table[abbr.lower()] = index + first
    return table


# English names regardless of the process locale
_WEEKDAYS = _build_table(
    ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"],
    ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"],
    first=calendar.MONDAY,
)
_MONTHS = _build_table(
    [
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ],
    ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"],
    first=1,
)


def weekday_from_name(text: str) -> Optional[int]:
    """Return the weekday number (Monday = 0) for a full or 3-letter name."""
    return _WEEKDAYS.get(text.strip().lower())


def month_from_name(text: str) -> Optional[int]:
    """Return the month number (1-12) for a full or 3-letter name."""
    return _MONTHS.get(text.strip().lower())
