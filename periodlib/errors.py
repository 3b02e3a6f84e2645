"""Exception types raised by the period engine."""

from typing import Optional


class PeriodError(ValueError):
    """Base class for all period and date errors."""


class ParseError(PeriodError):
    """Raised when a period expression contains a token the grammar cannot use."""

    def __init__(
        self, message: str, token: Optional[str] = None, position: Optional[int] = None
    ):
        super().__init__(message)
        self.token = token
        self.position = position


class LiteralDateError(PeriodError):
    """Raised when text does not match any recognised date literal."""


class LiteralDatetimeError(PeriodError):
    """Raised when text does not match any recognised date/time literal."""


class AmbiguousYearError(PeriodError):
    """Raised when a partial date needs a year but none is available."""


class IntervalError(PeriodError):
    """Raised when an interval is asked to do something its state cannot support."""
