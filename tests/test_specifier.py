"""
Specifier, Range and SpecifierOrRange behaviour.
"""
from datetime import date

import pytest

from periodlib.conventions import Quantum, Weekday
from periodlib.dates.literals import DateTraits
from periodlib.errors import AmbiguousYearError
from periodlib.periods import Duration, Range, Specifier, SpecifierOrRange


def test_year_specifier_span():
    spec = Specifier(year=2020)
    assert spec.begin() == date(2020, 1, 1)
    assert spec.end() == date(2021, 1, 1)
    assert spec.contains(date(2020, 6, 15))
    assert not spec.contains(date(2021, 1, 1))


def test_month_specifier_uses_current_year():
    spec = Specifier(month=2)
    assert spec.begin(2021) == date(2021, 2, 1)
    assert spec.end(2021) == date(2021, 3, 1)


def test_missing_year_without_context_is_ambiguous():
    with pytest.raises(AmbiguousYearError):
        Specifier(month=2).begin()
    with pytest.raises(AmbiguousYearError):
        Specifier(weekday=Weekday.MONDAY).end()


def test_empty_specifier_is_unbounded():
    spec = Specifier()
    assert spec.begin() is None
    assert spec.end() is None
    assert spec.implied_duration() is None
    assert spec.contains(date(1999, 1, 1))


def test_weekday_specifier_picks_first_matching_day():
    assert Specifier(year=2021, weekday=Weekday.MONDAY).begin() == date(2021, 1, 4)
    assert Specifier(year=2021, weekday=Weekday.MONDAY).end() == date(2021, 1, 5)
    assert Specifier(year=2021, month=6, weekday=Weekday.MONDAY).begin() == date(2021, 6, 7)


def test_implied_duration():
    assert Specifier(year=2020, month=1, day=5).implied_duration() == Duration(Quantum.DAY, 1)
    assert Specifier(weekday=Weekday.FRIDAY).implied_duration() == Duration(Quantum.DAY, 1)
    assert Specifier(year=2020, month=3).implied_duration() == Duration(Quantum.MONTH, 1)
    assert Specifier(year=2020).implied_duration() == Duration(Quantum.YEAR, 1)


def test_from_date_respects_traits():
    when = date(2021, 6, 15)
    assert Specifier.from_date(when) == Specifier(2021, 6, 15)
    assert Specifier.from_date(when, DateTraits(True, True, False)) == Specifier(2021, 6)
    assert Specifier.from_date(when, DateTraits(False, True, True)) == Specifier(month=6, day=15)


def test_recurring_only_for_bare_weekday():
    assert Specifier(weekday=Weekday.MONDAY).is_recurring()
    assert not Specifier(year=2021, weekday=Weekday.MONDAY).is_recurring()
    assert not Specifier(year=2021).is_recurring()


def test_field_validation():
    with pytest.raises(ValueError):
        Specifier(month=13)
    with pytest.raises(ValueError):
        Specifier(day=0)
    with pytest.raises(ValueError):
        Specifier(weekday=7)


def test_unbounded_range_contains_everything():
    rng = Range()
    assert rng.begin() is None
    assert rng.end() is None
    for when in (date(1900, 1, 1), date(2021, 6, 16), date(2999, 12, 31)):
        assert rng.contains(when)


def test_default_range_excludes_end_period():
    rng = Range(Specifier(year=2020), Specifier(year=2021))
    assert rng.end() == date(2021, 1, 1)
    assert not rng.contains(date(2021, 1, 1))
    assert rng.contains(date(2020, 12, 31))
    assert not rng.contains(date(2019, 12, 31))


def test_inclusive_range_covers_end_period():
    rng = Range(Specifier(year=2020), Specifier(year=2021), end_inclusive=True)
    assert rng.end() == date(2022, 1, 1)
    assert rng.contains(date(2021, 12, 31))


def test_half_open_ranges():
    since = Range(begin_spec=Specifier(year=2020))
    assert since.contains(date(2050, 1, 1))
    assert not since.contains(date(2019, 12, 31))
    until = Range(end_spec=Specifier(year=2020, month=3))
    assert until.contains(date(1970, 1, 1))
    assert not until.contains(date(2020, 3, 1))


def test_specifier_or_range_dispatch():
    single = SpecifierOrRange(Specifier(year=2020))
    assert single.specifier == Specifier(year=2020)
    assert single.range is None
    assert single.begin() == date(2020, 1, 1)
    assert single.end() == date(2021, 1, 1)
    assert single.describe() == "in year 2020"

    span = SpecifierOrRange(Range(Specifier(year=2020), Specifier(year=2021, month=6)))
    assert span.specifier is None
    assert span.end() == date(2021, 6, 1)
    assert span.describe() == "from year 2020 to year 2021 month 6"
    assert span.has_begin()


def test_specifier_or_range_rejects_other_values():
    with pytest.raises(TypeError):
        SpecifierOrRange(2020)
