"""
Partial-date matchers and the ranges built from them.

A ``Specifier`` names a calendar span by any subset of year, month, day and
weekday ("2020", "June", "June 15th", "monday"). A ``Range`` bounds a span by
two optional specifiers. ``SpecifierOrRange`` is whichever of the two a
period expression produced.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from periodlib.conventions.types import Quantum
from periodlib.dates.adjustments import earliest_weekday
from periodlib.dates.literals import DateTraits
from periodlib.errors import AmbiguousYearError
from periodlib.periods.duration import Duration


@dataclass(frozen=True)
class Specifier:
    """A partial date: every field is optional."""

    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    weekday: Optional[int] = None

    def __post_init__(self):
        if self.month is not None and not 1 <= self.month <= 12:
            raise ValueError(f"month must be in 1..12: {self.month}")
        if self.day is not None and not 1 <= self.day <= 31:
            raise ValueError(f"day must be in 1..31: {self.day}")
        if self.weekday is not None and not 0 <= self.weekday <= 6:
            raise ValueError(f"weekday must be in 0..6: {self.weekday}")

    @classmethod
    def from_date(cls, when: date, traits: Optional[DateTraits] = None) -> "Specifier":
        """Build a specifier from the parts of ``when`` that ``traits`` marks present."""
        return cls(
            year=when.year if traits is None or traits.has_year else None,
            month=when.month if traits is None or traits.has_month else None,
            day=when.day if traits is None or traits.has_day else None,
        )

    def is_unbounded(self) -> bool:
        return (
            self.year is None
            and self.month is None
            and self.day is None
            and self.weekday is None
        )

    def is_recurring(self) -> bool:
        """True when only a weekday is given, i.e. a weekly anchor."""
        return (
            self.weekday is not None
            and self.year is None
            and self.month is None
            and self.day is None
        )

    def implied_duration(self) -> Optional[Duration]:
        if self.day is not None or self.weekday is not None:
            return Duration(Quantum.DAY, 1)
        if self.month is not None:
            return Duration(Quantum.MONTH, 1)
        if self.year is not None:
            return Duration(Quantum.YEAR, 1)
        return None

    def begin(self, current_year: Optional[int] = None) -> Optional[date]:
        """
        Earliest date matching this specifier.

        ``current_year`` stands in for a missing year. Returns None for an
        empty specifier.
        """
        if self.is_unbounded():
            return None
        year = self.year if self.year is not None else current_year
        if year is None:
            raise AmbiguousYearError(
                f"Cannot resolve{self.describe()} without a year"
            )

        start = date(year, self.month or 1, self.day or 1)
        if self.weekday is not None and self.day is None:
            start = earliest_weekday(start, self.weekday)
        return start

    def end(self, current_year: Optional[int] = None) -> Optional[date]:
        """First date after the span (exclusive end)."""
        start = self.begin(current_year)
        if start is None:
            return None
        return self.implied_duration().add(start)

    def contains(self, when: date, current_year: Optional[int] = None) -> bool:
        if self.is_unbounded():
            return True
        return self.begin(current_year) <= when < self.end(current_year)

    def describe(self) -> str:
        out = ""
        if self.year is not None:
            out += f" year {self.year}"
        if self.month is not None:
            out += f" month {self.month}"
        if self.day is not None:
            out += f" day {self.day}"
        if self.weekday is not None:
            out += f" wday {self.weekday}"
        return out


@dataclass(frozen=True)
class Range:
    """Span between two optional specifiers.

    The end specifier is excluded unless ``end_inclusive`` is set: a range
    "from 2020 until 2022" stops on 2022-01-01, while the inclusive form
    "from 2020 to 2022" runs through 2022-12-31.
    """

    begin_spec: Optional[Specifier] = None
    end_spec: Optional[Specifier] = None
    end_inclusive: bool = False

    def begin(self, current_year: Optional[int] = None) -> Optional[date]:
        if self.begin_spec is None:
            return None
        return self.begin_spec.begin(current_year)

    def end(self, current_year: Optional[int] = None) -> Optional[date]:
        if self.end_spec is None:
            return None
        if self.end_inclusive:
            return self.end_spec.end(current_year)
        return self.end_spec.begin(current_year)

    def contains(self, when: date, current_year: Optional[int] = None) -> bool:
        start = self.begin(current_year)
        stop = self.end(current_year)
        after_begin = when >= start if start is not None else True
        before_end = when < stop if stop is not None else True
        return after_begin and before_end

    def describe(self) -> str:
        out = ""
        if self.begin_spec is not None:
            out += "from" + self.begin_spec.describe()
        if self.end_spec is not None:
            out += " to" + self.end_spec.describe()
        return out


@dataclass(frozen=True)
class SpecifierOrRange:
    """Either a single specifier or a range; absence is expressed by None."""

    value: Union[Specifier, Range]

    def __post_init__(self):
        if not isinstance(self.value, (Specifier, Range)):
            raise TypeError(f"Expected a Specifier or Range, got {type(self.value)}")

    @property
    def specifier(self) -> Optional[Specifier]:
        return self.value if isinstance(self.value, Specifier) else None

    @property
    def range(self) -> Optional[Range]:
        return self.value if isinstance(self.value, Range) else None

    def begin(self, current_year: Optional[int] = None) -> Optional[date]:
        return self.value.begin(current_year)

    def end(self, current_year: Optional[int] = None) -> Optional[date]:
        return self.value.end(current_year)

    def contains(self, when: date, current_year: Optional[int] = None) -> bool:
        return self.value.contains(when, current_year)

    def has_begin(self) -> bool:
        """Whether the lower bound is fixed by the expression itself."""
        if isinstance(self.value, Range):
            return self.value.begin_spec is not None
        return not self.value.is_unbounded()

    def describe(self) -> str:
        if isinstance(self.value, Specifier):
            return "in" + self.value.describe()
        return self.value.describe()
