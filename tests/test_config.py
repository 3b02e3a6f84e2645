from datetime import date, datetime

import pytest

from periodlib.conventions import DEFAULT_CONFIG, TimesConfig, Weekday


def test_defaults():
    assert DEFAULT_CONFIG.start_of_week == Weekday.SUNDAY
    assert DEFAULT_CONFIG.written_date_format == "%Y/%m/%d"
    assert DEFAULT_CONFIG.epoch is None


def test_epoch_pins_today():
    config = TimesConfig(epoch=datetime(2021, 6, 16, 12))
    assert config.today() == date(2021, 6, 16)
    assert config.now() == datetime(2021, 6, 16, 12)


def test_from_mapping_accepts_names_and_any_case():
    config = TimesConfig.from_mapping({"Start_Of_Week": "monday", "EPOCH": "2020-01-02"})
    assert config.start_of_week == Weekday.MONDAY
    assert config.today() == date(2020, 1, 2)


def test_from_mapping_rejects_unknown_keys():
    with pytest.raises(ValueError):
        TimesConfig.from_mapping({"timezone": "UTC"})


def test_from_env():
    config = TimesConfig.from_env(
        {
            "PERIODLIB_START_OF_WEEK": "1",
            "PERIODLIB_DATE_FORMAT": "%d/%m/%Y",
            "PERIODLIB_EPOCH": "2021-06-16T08:00:00",
            "UNRELATED": "x",
        }
    )
    assert config.start_of_week == Weekday.TUESDAY
    assert config.written_date_format == "%d/%m/%Y"
    assert config.today() == date(2021, 6, 16)


def test_invalid_values():
    with pytest.raises(ValueError):
        TimesConfig(start_of_week=9)
    with pytest.raises(ValueError):
        TimesConfig.from_mapping({"start_of_week": "someday"})
    with pytest.raises(ValueError):
        TimesConfig.from_env({"PERIODLIB_EPOCH": "not a date"})


def test_with_overrides_returns_copy():
    config = DEFAULT_CONFIG.with_overrides(start_of_week=Weekday.MONDAY)
    assert config.start_of_week == Weekday.MONDAY
    assert DEFAULT_CONFIG.start_of_week == Weekday.SUNDAY
