"""
Literal date/time parsing and name lookup.
"""
from datetime import date, datetime

import pytest

from periodlib.conventions import TimesConfig
from periodlib.dates.literals import (
    DateTraits,
    parse_date,
    parse_date_with_traits,
    parse_datetime,
)
from periodlib.dates.names import month_from_name, weekday_from_name
from periodlib.errors import LiteralDateError, LiteralDatetimeError


@pytest.mark.parametrize(
    "text, expected, traits",
    [
        ("2021/06/15", date(2021, 6, 15), DateTraits(True, True, True)),
        ("2021-06-15", date(2021, 6, 15), DateTraits(True, True, True)),
        ("2021.06.15", date(2021, 6, 15), DateTraits(True, True, True)),
        ("20210615", date(2021, 6, 15), DateTraits(True, True, True)),
        ("2021/06", date(2021, 6, 1), DateTraits(True, True, False)),
        ("2021-6", date(2021, 6, 1), DateTraits(True, True, False)),
        ("06/15", date(2020, 6, 15), DateTraits(False, True, True)),
        ("2021", date(2021, 1, 1), DateTraits(True, False, False)),
    ],
)
def test_date_masks(text, expected, traits):
    assert parse_date_with_traits(text, current_year=2020) == (expected, traits)


def test_missing_year_defaults_to_configured_today():
    config = TimesConfig(epoch=datetime(2019, 3, 3))
    assert parse_date("12/25", config=config) == date(2019, 12, 25)


def test_leap_day_checked_against_current_year():
    assert parse_date("02/29", current_year=2020) == date(2020, 2, 29)
    with pytest.raises(LiteralDateError):
        parse_date("02/29", current_year=2021)


def test_custom_input_format_takes_precedence():
    config = TimesConfig(input_date_format="%d.%m.%Y")
    when, traits = parse_date_with_traits("15.06.2021", config=config)
    assert when == date(2021, 6, 15)
    assert traits == DateTraits(True, True, True)


@pytest.mark.parametrize("text", ["2021/13/01", "yesterday", "15", ""])
def test_invalid_dates(text):
    with pytest.raises(LiteralDateError):
        parse_date(text, current_year=2021)


def test_parse_datetime():
    assert parse_datetime("2021/06/15 13:45:10") == datetime(2021, 6, 15, 13, 45, 10)
    assert parse_datetime("2021-06-15 08:05") == datetime(2021, 6, 15, 8, 5)
    assert parse_datetime("2021/06/15") == datetime(2021, 6, 15)


def test_invalid_datetime():
    with pytest.raises(LiteralDatetimeError):
        parse_datetime("2021/06/15 25:00", current_year=2021)


def test_name_lookup():
    assert weekday_from_name("Monday") == 0
    assert weekday_from_name("sun") == 6
    assert weekday_from_name("funday") is None
    assert month_from_name("Dec") == 12
    assert month_from_name("january") == 1
    assert month_from_name("smarch") is None
