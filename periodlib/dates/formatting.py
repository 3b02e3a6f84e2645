"""
Date rendering and the block writer used by diagnostic dumps.
"""

from datetime import date, datetime
from typing import Optional, TextIO
from xml.sax.saxutils import escape

from periodlib.conventions.config import DEFAULT_CONFIG, TimesConfig
from periodlib.conventions.types import FormatType


def _pattern(
    format_type: FormatType, fmt: Optional[str], written: str, printed: str
) -> str:
    if format_type is FormatType.WRITTEN:
        return written
    if format_type is FormatType.PRINTED:
        return printed
    if fmt is None:
        raise ValueError("A custom format requires an explicit pattern")
    return fmt


def format_date(
    when: date,
    format_type: FormatType = FormatType.PRINTED,
    fmt: Optional[str] = None,
    config: Optional[TimesConfig] = None,
) -> str:
    """Render a date in the requested style."""
    config = config or DEFAULT_CONFIG
    pattern = _pattern(
        format_type, fmt, config.written_date_format, config.printed_date_format
    )
    return when.strftime(pattern)


def format_datetime(
    when: datetime,
    format_type: FormatType = FormatType.PRINTED,
    fmt: Optional[str] = None,
    config: Optional[TimesConfig] = None,
) -> str:
    """Render a date/time in the requested style."""
    config = config or DEFAULT_CONFIG
    pattern = _pattern(
        format_type,
        fmt,
        config.written_datetime_format,
        config.printed_datetime_format,
    )
    return when.strftime(pattern)


def write_block(out: TextIO, name: str, text: str) -> None:
    """Write ``text`` wrapped in a ``<name>`` element."""
    out.write(f"<{name}>{escape(text)}</{name}>")


def date_to_xml(
    out: TextIO, when: date, wrap: bool = True, config: Optional[TimesConfig] = None
) -> None:
    text = format_date(when, FormatType.WRITTEN, config=config)
    if wrap:
        write_block(out, "date", text)
    else:
        out.write(escape(text))


def datetime_to_xml(
    out: TextIO,
    when: datetime,
    wrap: bool = True,
    config: Optional[TimesConfig] = None,
) -> None:
    text = format_datetime(when, FormatType.WRITTEN, config=config)
    if wrap:
        write_block(out, "datetime", text)
    else:
        out.write(escape(text))
