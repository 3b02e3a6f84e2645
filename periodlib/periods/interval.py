"""
Recurring date intervals.

An ``Interval`` couples a period expression (its ``range``) with an optional
step ``duration``. Once stabilized it carries a current slice
``[start, end_of_duration)`` that can be advanced or moved to the slice
containing a given date. Slices never overlap and leave no gaps: each new
``start`` is the previous ``end_of_duration``.
"""

import logging
from datetime import date, timedelta
from typing import Optional, TextIO, Union

from periodlib.conventions.config import DEFAULT_CONFIG, TimesConfig
from periodlib.conventions.types import FormatType, Quantum, Weekday
from periodlib.dates.adjustments import (
    earliest_weekday,
    latest_weekday,
    nearest_boundary,
    to_date,
)
from periodlib.dates.formatting import format_date
from periodlib.errors import IntervalError
from periodlib.periods.duration import Duration
from periodlib.periods.parser import PeriodParser
from periodlib.periods.specifier import Range, Specifier, SpecifierOrRange

logger = logging.getLogger(__name__)

_MAX_SAMPLES = 20


class Interval:
    """A (possibly recurring) span of calendar time.

    Fields:
        range: the textual period, a specifier or a range (or None)
        start, finish: resolved bounds of the whole interval
        aligned: whether ``start`` already sits on the stepping grid
        next: start of the following slice
        duration: step between slices
        end_of_duration: exclusive end of the current slice
        anchor: weekday every slice starts on ("every monday"), or None

    Two intervals compare equal when their ``start`` is equal; nothing else
    is compared.
    """

    def __init__(
        self,
        range: Optional[Union[SpecifierOrRange, Specifier, Range]] = None,
        start: Optional[date] = None,
        finish: Optional[date] = None,
        aligned: bool = False,
        next: Optional[date] = None,
        duration: Optional[Duration] = None,
        end_of_duration: Optional[date] = None,
        anchor: Optional[int] = None,
    ):
        if isinstance(range, (Specifier, Range)):
            range = SpecifierOrRange(range)
        if anchor is not None and not 0 <= anchor <= 6:
            raise ValueError(f"anchor must be a weekday in 0..6: {anchor}")
        self.range = range
        self.start = start
        self.finish = finish
        self.aligned = aligned
        self.next = next
        self.duration = duration
        self.end_of_duration = end_of_duration
        self.anchor = anchor
        self._context_year: Optional[int] = None

    @classmethod
    def from_text(
        cls,
        text: str,
        config: Optional[TimesConfig] = None,
        today: Optional[date] = None,
    ) -> "Interval":
        interval = cls()
        interval.parse(text, config, today)
        return interval

    def copy(self) -> "Interval":
        duplicate = Interval(
            range=self.range,
            start=self.start,
            finish=self.finish,
            aligned=self.aligned,
            next=self.next,
            duration=self.duration,
            end_of_duration=self.end_of_duration,
            anchor=self.anchor,
        )
        duplicate._context_year = self._context_year
        return duplicate

    def __eq__(self, other):
        if not isinstance(other, Interval):
            return NotImplemented
        return self.start == other.start

    def __bool__(self) -> bool:
        return self.is_valid()

    def __repr__(self) -> str:
        return (
            f"Interval(range={self.range.describe() if self.range else None!r}, "
            f"start={self.start}, finish={self.finish}, duration={self.duration}, "
            f"end_of_duration={self.end_of_duration})"
        )

    def is_valid(self) -> bool:
        return self.start is not None

    def _is_recurring(self) -> bool:
        return (
            self.range is not None
            and self.range.specifier is not None
            and self.range.specifier.is_recurring()
        )

    def _has_fixed_begin(self) -> bool:
        return (
            self.range is not None
            and self.range.has_begin()
            and not self._is_recurring()
        )

    # Bounds
    def begin(self, current_year: Optional[int] = None) -> Optional[date]:
        if self.start is not None:
            return self.start
        return self._range_begin(current_year)

    def _range_begin(self, current_year: Optional[int] = None) -> Optional[date]:
        """The range's lower bound, moved onto the anchor weekday if any."""
        if self.range is None:
            return None
        begin = self.range.begin(current_year)
        if begin is not None and self.anchor is not None and not self._is_recurring():
            begin = earliest_weekday(begin, self.anchor)
        return begin

    def _grid_start(self, when: date, config: TimesConfig) -> date:
        """Start of the slice grid around ``when``."""
        if self.anchor is not None:
            return latest_weekday(when, self.anchor)
        return nearest_boundary(when, self.duration.quantum, config.start_of_week)

    def end(self, current_year: Optional[int] = None) -> Optional[date]:
        if self.finish is not None:
            return self.finish
        return self.range.end(current_year) if self.range else None

    def contains(self, when: date, current_year: Optional[int] = None) -> bool:
        """Whether ``when`` falls in the current slice (or the whole interval)."""
        when = to_date(when)
        if self.start is not None and self.end_of_duration is not None:
            return self.start <= when < self.end_of_duration
        lower = self.begin(current_year)
        upper = self.end(current_year)
        return (lower is None or when >= lower) and (upper is None or when < upper)

    def inclusive_end(self) -> Optional[date]:
        """Last day actually covered by the current slice."""
        if self.end_of_duration is None:
            return None
        return self.end_of_duration - timedelta(days=1)

    # Parsing
    def parse(
        self,
        text: str,
        config: Optional[TimesConfig] = None,
        today: Optional[date] = None,
    ) -> "Interval":
        """Replace this interval's definition with the one described by ``text``."""
        parser = PeriodParser(text, config, today)
        self.range, self.duration = parser.parse()
        self.anchor = parser.anchor
        self.start = None
        self.finish = None
        self.next = None
        self.end_of_duration = None
        self.aligned = False
        self._context_year = None
        return self

    # Resolution
    def resolve_end(self, current_year: Optional[int] = None) -> None:
        """Fill in ``finish`` from the range and the current slice end."""
        if self.finish is None and self.range is not None and not self._is_recurring():
            self.finish = self.range.end(current_year)

        if self.start is None:
            return
        if self.duration is None:
            if self.end_of_duration is None:
                self.end_of_duration = self.finish
            return

        if self.end_of_duration is None:
            self.end_of_duration = self.duration.add(self.start)
        if self.finish is not None and self.end_of_duration > self.finish:
            self.end_of_duration = self.finish
        if self.next is None:
            self.next = self.end_of_duration

    def stabilize(
        self,
        reference: Optional[date] = None,
        config: Optional[TimesConfig] = None,
    ) -> "Interval":
        """
        Resolve ``start``/``finish`` and align the first slice.

        A range fixes the bounds directly, with ``reference``'s year standing
        in for any missing year. Without a lower bound the interval is
        snapped to the duration's quantum grid around ``reference`` (today
        by default). A weekday-only range anchors a weekly grid on the
        latest such weekday on or before ``reference``. Does nothing once
        aligned.
        """
        if self.aligned:
            return self
        config = config or DEFAULT_CONFIG
        reference = to_date(reference) if reference is not None else config.today()
        year = reference.year

        if self._is_recurring():
            if self.start is None:
                self.start = latest_weekday(reference, self.range.specifier.weekday)
            if self.duration is None:
                self.duration = Duration(Quantum.WEEK, 1)
        elif self.range is not None:
            if self.start is None:
                self.start = self._range_begin(year)
            if self.finish is None:
                self.finish = self.range.end(year)
            if self.start is None and self.duration is not None:
                around = reference
                if self.finish is not None and around >= self.finish:
                    around = self.finish - timedelta(days=1)
                self.start = self._grid_start(around, config)
            if (
                self.start is not None
                and self.finish is not None
                and self.start >= self.finish
            ):
                # e.g. "every monday in 2021/06/15", a Tuesday
                logger.debug("No anchored slice between %s and %s", self.start, self.finish)
                self.start = None
        elif self.duration is not None:
            if self.start is None:
                self.start = self._grid_start(reference, config)
        else:
            return self

        self.resolve_end(year)
        self.aligned = True
        self._context_year = year
        logger.debug(
            "Stabilized at %s: start=%s finish=%s end_of_duration=%s",
            reference,
            self.start,
            self.finish,
            self.end_of_duration,
        )
        return self

    # Stepping
    def _move_to(self, start: date) -> None:
        self.start = start
        self.end_of_duration = None
        self.next = None
        self.resolve_end()

    def advance(self, config: Optional[TimesConfig] = None) -> "Interval":
        """Move to the following slice; an exhausted interval becomes invalid."""
        if self.start is None:
            raise IntervalError("Cannot advance an unstarted date interval")
        self.stabilize(self.start, config)
        if self.duration is None:
            raise IntervalError("Cannot advance a date interval without a duration")
        if self.next is None:
            self.resolve_end()

        if self.finish is not None and self.next >= self.finish:
            logger.debug("Interval exhausted at %s (finish %s)", self.next, self.finish)
            self.start = None
            self.next = None
            self.end_of_duration = None
        else:
            self._move_to(self.next)
        return self

    def locate(self, when: date, config: Optional[TimesConfig] = None) -> bool:
        """
        Move to the slice containing ``when``.

        Scanning starts from the range's own lower bound when it has one,
        otherwise from the current slice, stepping backward if needed.
        Returns False when no slice contains ``when``: before a fixed begin
        the interval is left untouched, at or past ``finish`` it is left on
        the last slice inside the range.
        """
        when = to_date(when)
        self.stabilize(when, config)

        if self.duration is None:
            found = self.contains(when)
            logger.debug("Single-period locate of %s: %s", when, found)
            return found
        if self.start is None:
            raise IntervalError("Date interval is improperly initialized")

        step = self.duration
        if step.add(self.start) <= self.start:
            raise IntervalError(f"Cannot locate with a non-advancing duration: {step}")
        if self.end_of_duration is None:
            self.resolve_end()

        if self._has_fixed_begin():
            origin = self._range_begin(self._context_year or when.year)
            if when < origin:
                logger.debug("%s precedes interval begin %s", when, origin)
                return False
        else:
            origin = self.start
            if when < origin:
                scan = origin
                while when < scan:
                    scan = step.subtract(scan)
                self._move_to(scan)
                return True

        if self.finish is not None and when >= self.finish:
            scan = self._skip_ahead(origin, self.finish - timedelta(days=1))
            while step.add(scan) < self.finish:
                scan = step.add(scan)
            self._move_to(scan)
            logger.debug("%s is past finish %s; stopped at %s", when, self.finish, scan)
            return False

        scan = self._skip_ahead(origin, when)
        end_of_scan = step.add(scan)
        while when >= end_of_scan:
            scan = end_of_scan
            end_of_scan = step.add(scan)
        self._move_to(scan)
        logger.debug("Located %s in [%s, %s)", when, self.start, self.end_of_duration)
        return True

    find_period = locate

    def _skip_ahead(self, scan: date, target: date) -> date:
        """Jump over whole day-based slices lying entirely before ``target``."""
        span = self.duration.quantum.days() * self.duration.length
        if span <= 0 or target < scan:
            return scan
        return scan + timedelta(days=span * ((target - scan).days // span))

    # Diagnostics
    def describe(self, config: Optional[TimesConfig] = None) -> str:
        lines = []
        if self.range is not None:
            lines.append(f"   range: {self.range.describe()}")
        if self.start is not None:
            lines.append(f"   start: {format_date(self.start, config=config)}")
        if self.finish is not None:
            lines.append(f"  finish: {format_date(self.finish, config=config)}")
        if self.duration is not None:
            lines.append(f"duration: {self.duration.describe()}")
        if self.anchor is not None:
            lines.append(f"  anchor: {Weekday(self.anchor).name.title()}")
        return "\n".join(lines)

    def dump(
        self,
        out: TextIO,
        current_year: Optional[int] = None,
        config: Optional[TimesConfig] = None,
    ) -> None:
        """Write the fields before and after stabilization plus sample periods."""
        config = config or DEFAULT_CONFIG
        if current_year is None:
            current_year = config.today().year

        out.write("--- Before stabilization ---\n")
        out.write(self.describe(config) + "\n")

        sample = self.copy()
        sample.stabilize(sample.begin(current_year), config)
        out.write("\n--- After stabilization ---\n")
        out.write(sample.describe(config) + "\n")

        out.write(f"\n--- Sample dates in range (max. {_MAX_SAMPLES}) ---\n")
        last_start = None
        for index in range(_MAX_SAMPLES):
            if not sample or sample.start == last_start:
                break
            line = f"{index + 1:>2}: {format_date(sample.start, FormatType.PRINTED, config=config)}"
            if sample.duration is not None:
                line += f" -- {format_date(sample.inclusive_end(), FormatType.PRINTED, config=config)}"
            out.write(line + "\n")
            if sample.duration is None:
                break
            last_start = sample.start
            sample.advance(config)
