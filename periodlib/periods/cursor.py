"""
Non-mutating traversal of an interval's periods.

``PeriodCursor`` works on a private copy of an ``Interval`` so the stored
definition is never advanced; iterating twice yields the same sequence.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from itertools import islice
from typing import Iterator, List, Optional

import pandas as pd

from periodlib.conventions.config import TimesConfig
from periodlib.periods.interval import Interval


@dataclass(frozen=True)
class Period:
    """One slice ``[start, end)`` of an interval."""

    start: date
    end: Optional[date]

    @property
    def inclusive_end(self) -> Optional[date]:
        if self.end is None:
            return None
        return self.end - timedelta(days=1)

    def contains(self, when: date) -> bool:
        return self.start <= when and (self.end is None or when < self.end)


class PeriodCursor:
    """Lazy, restartable sequence of the periods of an interval."""

    def __init__(
        self,
        interval: Interval,
        reference: Optional[date] = None,
        config: Optional[TimesConfig] = None,
    ):
        self._definition = interval.copy()
        self.reference = reference
        self.config = config

    def _fresh(self) -> Interval:
        current = self._definition.copy()
        current.stabilize(self.reference, self.config)
        return current

    def __iter__(self) -> Iterator[Period]:
        current = self._fresh()
        while current:
            yield Period(current.start, current.end_of_duration)
            if current.duration is None:
                return
            previous = current.start
            current.advance(self.config)
            if current.start == previous:
                # A zero-length step would repeat forever
                return

    def first(self) -> Optional[Period]:
        return next(iter(self), None)

    def find(self, when: date) -> Optional[Period]:
        """The period containing ``when``, or None."""
        current = self._fresh()
        if not current.locate(when, self.config):
            return None
        return Period(current.start, current.end_of_duration)


def periods(
    interval: Interval,
    reference: Optional[date] = None,
    config: Optional[TimesConfig] = None,
    limit: Optional[int] = None,
) -> List[Period]:
    """Materialise up to ``limit`` periods (all of them for bounded intervals)."""
    cursor = PeriodCursor(interval, reference, config)
    if limit is None:
        probe = cursor._fresh()
        if probe.duration is not None:
            if probe.finish is None:
                raise ValueError("An open-ended interval needs a limit")
            if probe.start is not None and probe.duration.add(probe.start) <= probe.start:
                raise ValueError(
                    f"A duration that does not move forward needs a limit: {probe.duration}"
                )
        return list(cursor)
    return list(islice(cursor, limit))


def period_frame(
    interval: Interval,
    reference: Optional[date] = None,
    config: Optional[TimesConfig] = None,
    limit: Optional[int] = None,
) -> pd.DataFrame:
    """Periods as a DataFrame with start, end and inclusive_end columns."""
    rows = [
        {"start": p.start, "end": p.end, "inclusive_end": p.inclusive_end}
        for p in periods(interval, reference, config, limit)
    ]
    return pd.DataFrame(rows, columns=["start", "end", "inclusive_end"])
