"""
Runtime configuration for period computations.

A ``TimesConfig`` is built once (from defaults, the environment or a mapping)
and passed down explicitly to parsing, stabilization and formatting.
"""

import logging
import os
from dataclasses import dataclass, fields, replace
from datetime import date, datetime
from typing import Any, Mapping, Optional, Union

from periodlib.conventions.types import Weekday
from periodlib.dates.names import weekday_from_name

logger = logging.getLogger(__name__)

_ENV_PREFIX = "PERIODLIB_"


@dataclass(frozen=True)
class TimesConfig:
    """Calendar and formatting preferences."""

    start_of_week: int = Weekday.SUNDAY
    written_date_format: str = "%Y/%m/%d"
    printed_date_format: str = "%y-%b-%d"
    written_datetime_format: str = "%Y/%m/%d %H:%M:%S"
    printed_datetime_format: str = "%y-%b-%d %H:%M:%S"
    input_date_format: Optional[str] = None
    epoch: Optional[datetime] = None

    def __post_init__(self):
        if not 0 <= int(self.start_of_week) <= 6:
            raise ValueError(f"start_of_week must be in 0..6: {self.start_of_week!r}")

    def now(self) -> datetime:
        """Current moment, pinned to ``epoch`` when one is configured."""
        return self.epoch if self.epoch is not None else datetime.now()

    def today(self) -> date:
        return self.now().date()

    def with_overrides(self, **overrides: Any) -> "TimesConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **overrides)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "TimesConfig":
        """
        Build a config from a plain mapping (e.g. a decoded JSON section).

        Keys are matched case-insensitively against the field names; unknown
        keys are rejected.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in values.items():
            name = str(key).strip().lower()
            if name not in known:
                raise ValueError(f"Unknown configuration key: {key}")
            if name == "start_of_week":
                value = _coerce_weekday(value)
            elif name == "epoch" and value is not None:
                value = _coerce_epoch(value)
            kwargs[name] = value
        return cls(**kwargs)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TimesConfig":
        """
        Build a config from ``PERIODLIB_*`` environment variables.

        Recognised: START_OF_WEEK, DATE_FORMAT, PRINTED_DATE_FORMAT,
        DATETIME_FORMAT, PRINTED_DATETIME_FORMAT, INPUT_DATE_FORMAT, EPOCH.
        """
        env = os.environ if environ is None else environ
        mapping = {
            "START_OF_WEEK": "start_of_week",
            "DATE_FORMAT": "written_date_format",
            "PRINTED_DATE_FORMAT": "printed_date_format",
            "DATETIME_FORMAT": "written_datetime_format",
            "PRINTED_DATETIME_FORMAT": "printed_datetime_format",
            "INPUT_DATE_FORMAT": "input_date_format",
            "EPOCH": "epoch",
        }
        values = {}
        for suffix, name in mapping.items():
            raw = env.get(_ENV_PREFIX + suffix)
            if raw:
                values[name] = raw
        logger.debug("Loaded period config overrides from environment: %s", values)
        return cls.from_mapping(values)


def _coerce_weekday(value: Union[int, str]) -> int:
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    wday = weekday_from_name(text)
    if wday is None:
        raise ValueError(f"Unrecognised start of week: {value!r}")
    return wday


def _coerce_epoch(value: Union[date, datetime, str]) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return datetime.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise ValueError(f"Unrecognised epoch: {value!r}") from exc


DEFAULT_CONFIG = TimesConfig()
