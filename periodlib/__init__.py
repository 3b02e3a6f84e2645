"""Recurring date-interval algebra.

This package turns period expressions ("monthly", "every 2 weeks",
"from 2020 to 2021/06", "this quarter") into concrete, steppable calendar
intervals.

Key modules:
- periods: durations, date specifiers and ranges, intervals and the grammar
- dates: calendar arithmetic, literal parsing, name lookup and formatting
- conventions: enums and runtime configuration
"""

from periodlib.conventions import DEFAULT_CONFIG, FormatType, Quantum, TimesConfig, Weekday
from periodlib.errors import (
    AmbiguousYearError,
    IntervalError,
    LiteralDateError,
    LiteralDatetimeError,
    ParseError,
    PeriodError,
)
from periodlib.periods import (
    Duration,
    Interval,
    Period,
    PeriodCursor,
    Range,
    Specifier,
    SpecifierOrRange,
    parse_period,
)

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "AmbiguousYearError",
    "DEFAULT_CONFIG",
    "Duration",
    "FormatType",
    "Interval",
    "IntervalError",
    "LiteralDateError",
    "LiteralDatetimeError",
    "ParseError",
    "Period",
    "PeriodCursor",
    "PeriodError",
    "Quantum",
    "Range",
    "Specifier",
    "SpecifierOrRange",
    "TimesConfig",
    "Weekday",
    "parse_period",
]
