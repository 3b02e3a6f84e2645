"""
Basic types and enums used across the period engine.
"""

from enum import Enum, IntEnum


class Quantum(Enum):
    """Calendar stepping units."""

    DAY = "DAY"
    WEEK = "WEEK"
    MONTH = "MONTH"
    QUARTER = "QUARTER"
    YEAR = "YEAR"

    def months(self) -> int:
        """Number of months per unit (0 for day-based units)."""
        return _MONTHS_PER_UNIT[self]

    def days(self) -> int:
        """Number of days per unit (0 for month-based units)."""
        return _DAYS_PER_UNIT[self]

    @property
    def unit(self) -> str:
        return self.value.lower()


_MONTHS_PER_UNIT = {
    Quantum.DAY: 0,
    Quantum.WEEK: 0,
    Quantum.MONTH: 1,
    Quantum.QUARTER: 3,
    Quantum.YEAR: 12,
}

_DAYS_PER_UNIT = {
    Quantum.DAY: 1,
    Quantum.WEEK: 7,
    Quantum.MONTH: 0,
    Quantum.QUARTER: 0,
    Quantum.YEAR: 0,
}


class Weekday(IntEnum):
    """Days of the week, numbered like ``date.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


class FormatType(Enum):
    """Date rendering styles."""

    WRITTEN = "WRITTEN"  # round-trippable input style
    PRINTED = "PRINTED"  # report style
    CUSTOM = "CUSTOM"
