"""
Literal date and date/time parsing.

Recognises the numeric forms used in period expressions ('2021/06/15',
'2021-06', '06/15', '2021', ...) and reports which parts were present.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple

from periodlib.conventions.config import DEFAULT_CONFIG, TimesConfig
from periodlib.errors import LiteralDateError, LiteralDatetimeError


@dataclass(frozen=True)
class DateTraits:
    """Which parts of a date literal were written out."""

    has_year: bool = False
    has_month: bool = False
    has_day: bool = False


_FULL = DateTraits(True, True, True)
_YEAR_MONTH = DateTraits(True, True, False)
_MONTH_DAY = DateTraits(False, True, True)
_YEAR = DateTraits(True, False, False)

# Order matters: complete dates first, then partial forms
_DATE_MASKS = (
    ("%Y/%m/%d", _FULL),
    ("%Y-%m-%d", _FULL),
    ("%Y.%m.%d", _FULL),
    ("%Y%m%d", _FULL),
    ("%Y/%m", _YEAR_MONTH),
    ("%Y-%m", _YEAR_MONTH),
    ("%Y.%m", _YEAR_MONTH),
    ("%m/%d", _MONTH_DAY),
    ("%m-%d", _MONTH_DAY),
    ("%m.%d", _MONTH_DAY),
    ("%Y", _YEAR),
)

_TIME_SUFFIXES = (" %H:%M:%S", " %H:%M")


def _traits_of(fmt: str) -> DateTraits:
    return DateTraits("%Y" in fmt, "%m" in fmt or "%b" in fmt, "%d" in fmt)


def _strptime(text: str, fmt: str, year: int) -> datetime:
    # Yearless masks are parsed with the contextual year spliced in, so that
    # Feb 29 is validated against the right year.
    if "%Y" not in fmt:
        return datetime.strptime(f"{year:04d}|{text}", "%Y|" + fmt)
    return datetime.strptime(text, fmt)


def parse_date_with_traits(
    text: str,
    current_year: Optional[int] = None,
    config: Optional[TimesConfig] = None,
) -> Tuple[date, DateTraits]:
    """
    Parse a date literal and report which parts it spelled out.

    A missing year is taken from ``current_year`` (or the configured today),
    missing month and day default to 1.
    """
    config = config or DEFAULT_CONFIG
    candidate = text.strip()
    year = current_year if current_year is not None else config.today().year

    masks = _DATE_MASKS
    if config.input_date_format:
        custom = config.input_date_format
        masks = ((custom, _traits_of(custom)),) + masks

    for fmt, traits in masks:
        try:
            return _strptime(candidate, fmt, year).date(), traits
        except ValueError:
            continue
    raise LiteralDateError(f"Invalid date: {text}")


def parse_date(
    text: str,
    current_year: Optional[int] = None,
    config: Optional[TimesConfig] = None,
) -> date:
    """Parse a date literal into a date."""
    return parse_date_with_traits(text, current_year, config)[0]


def parse_datetime(
    text: str,
    current_year: Optional[int] = None,
    config: Optional[TimesConfig] = None,
) -> datetime:
    """Parse a date/time literal; a bare date yields midnight."""
    config = config or DEFAULT_CONFIG
    candidate = text.strip()
    year = current_year if current_year is not None else config.today().year

    for fmt, traits in _DATE_MASKS:
        if not traits.has_day:
            continue
        for suffix in _TIME_SUFFIXES:
            try:
                return _strptime(candidate, fmt + suffix, year)
            except ValueError:
                continue
    try:
        when = parse_date(candidate, current_year, config)
    except LiteralDateError as exc:
        raise LiteralDatetimeError(f"Invalid date/time: {text}") from exc
    return datetime(when.year, when.month, when.day)
