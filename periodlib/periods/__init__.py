"""Period algebra public API."""

from .duration import Duration
from .specifier import Range, Specifier, SpecifierOrRange
from .parser import PeriodParser, parse_period, period_tokens
from .interval import Interval
from .cursor import Period, PeriodCursor, period_frame, periods

__all__ = [
    "Duration",
    "Interval",
    "Period",
    "PeriodCursor",
    "PeriodParser",
    "Range",
    "Specifier",
    "SpecifierOrRange",
    "parse_period",
    "period_frame",
    "period_tokens",
    "periods",
]
