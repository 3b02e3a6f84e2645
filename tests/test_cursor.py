"""
Non-mutating period traversal.
"""
from datetime import date

import pytest

from periodlib.conventions import Quantum
from periodlib.periods import Duration, Interval, Period, PeriodCursor, Specifier, period_frame, periods


def test_cursor_yields_bounded_periods(config):
    interval = Interval.from_text("quarterly in 2021", config)
    cursor = PeriodCursor(interval, config=config)
    result = list(cursor)
    assert [p.start for p in result] == [
        date(2021, 1, 1),
        date(2021, 4, 1),
        date(2021, 7, 1),
        date(2021, 10, 1),
    ]
    assert result[-1].end == date(2022, 1, 1)
    assert result[-1].inclusive_end == date(2021, 12, 31)


def test_cursor_is_restartable_and_leaves_definition_alone(config):
    interval = Interval.from_text("monthly in 2021", config)
    cursor = PeriodCursor(interval, config=config)
    assert list(cursor) == list(cursor)
    assert interval.start is None
    assert not interval.aligned


def test_cursor_periods_are_contiguous(config):
    interval = Interval(duration=Duration(Quantum.MONTH, 1))
    result = periods(interval, date(2021, 1, 31), config, limit=6)
    assert result[0] == Period(date(2021, 1, 1), date(2021, 2, 1))
    for earlier, later in zip(result, result[1:]):
        assert earlier.end == later.start


def test_cursor_find(config):
    cursor = PeriodCursor(Interval(duration=Duration(Quantum.WEEK, 1)), date(2021, 1, 1), config)
    found = cursor.find(date(2021, 6, 16))
    assert found == Period(date(2021, 6, 13), date(2021, 6, 20))
    assert found.contains(date(2021, 6, 19))
    assert not found.contains(date(2021, 6, 20))


def test_cursor_find_outside_range(config):
    cursor = PeriodCursor(Interval.from_text("monthly in 2021", config), config=config)
    assert cursor.find(date(2020, 6, 1)) is None


def test_open_ended_periods_need_limit(config):
    interval = Interval.from_text("weekly", config)
    with pytest.raises(ValueError):
        periods(interval, config=config)
    assert len(periods(interval, config=config, limit=3)) == 3


def test_single_period_without_duration(config):
    interval = Interval.from_text("since 2020 until 2021", config)
    assert periods(interval, config=config) == [Period(date(2020, 1, 1), date(2021, 1, 1))]


def test_period_frame(config):
    frame = period_frame(Interval.from_text("quarterly in 2021", config), config=config)
    assert list(frame.columns) == ["start", "end", "inclusive_end"]
    assert len(frame) == 4
    assert frame["inclusive_end"].iloc[0] == date(2021, 3, 31)


def test_backward_duration_needs_limit(config):
    interval = Interval(range=Specifier(year=2021), duration=Duration(Quantum.MONTH, -1))
    with pytest.raises(ValueError):
        periods(interval, config=config)
    assert len(periods(interval, config=config, limit=3)) == 3


def test_cursor_every_weekday_until(config):
    result = periods(Interval.from_text("every monday until 2021/07/01", config), config=config)
    assert [p.start for p in result] == [
        date(2021, 6, 14),
        date(2021, 6, 21),
        date(2021, 6, 28),
    ]
    assert result[-1].end == date(2021, 7, 1)
