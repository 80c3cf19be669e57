"""
Date and time parsing for the simulation window.

Values are tried against a fixed list of patterns, most specific first. The
first pattern that matches wins; fields a pattern omits default to
month=1, day=1, hour=0 and minute=0.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from ..errors import InvalidDateFormatError


@dataclass(frozen=True)
class DateFormat:
    """A supported date pattern and its Python parse/format equivalents."""
    pattern: str
    regex: re.Pattern
    strptime_format: str


DATE_FORMATS: tuple[DateFormat, ...] = (
    DateFormat("yyyy-MM-dd HH:mm", re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}", re.ASCII), "%Y-%m-%d %H:%M"),
    DateFormat("yyyy-MM-dd", re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII), "%Y-%m-%d"),
    DateFormat("yyyy-MM", re.compile(r"\d{4}-\d{2}", re.ASCII), "%Y-%m"),
    DateFormat("yyyy", re.compile(r"\d{4}", re.ASCII), "%Y"),
)

SUPPORTED_PATTERNS: tuple[str, ...] = tuple(fmt.pattern for fmt in DATE_FORMATS)

DateInput = Union[None, str, int, float, datetime, date]


def _describe_supported() -> str:
    return ", ".join(SUPPORTED_PATTERNS[:-1]) + " and " + SUPPORTED_PATTERNS[-1]


def _try_format(fmt: DateFormat, text: str) -> Optional[datetime]:
    if not fmt.regex.fullmatch(text):
        return None
    try:
        # strptime fills omitted fields with month=1, day=1, hour=0, minute=0
        return datetime.strptime(text, fmt.strptime_format)
    except ValueError:
        return None


def parse_datetime(value: Optional[str], property_name: Optional[str] = None) -> Optional[datetime]:
    """
    Parse a date string using the first supported pattern that matches.

    Args:
        value: Raw date string; None or blank means "absent"
        property_name: Property the value was read from, used in error messages

    Returns:
        Parsed naive datetime, or None when the value is absent

    Raises:
        InvalidDateFormatError: If no supported pattern matches
    """
    if value is None or not value.strip():
        return None

    text = value.strip()
    for fmt in DATE_FORMATS:
        parsed = _try_format(fmt, text)
        if parsed is not None:
            return parsed

    where = f" of property '{property_name}'" if property_name else ""
    raise InvalidDateFormatError(
        f"Unrecognized date format in value '{value}'{where}. "
        f"Supported formats are: {_describe_supported()}",
        supported_formats=SUPPORTED_PATTERNS,
        property_name=property_name,
        raw_value=value,
    )


def format_datetime(ts: datetime, pattern: str = "yyyy-MM-dd HH:mm") -> str:
    """Render a timestamp at the granularity of one of the supported patterns."""
    for fmt in DATE_FORMATS:
        if fmt.pattern == pattern:
            # %Y is not zero-padded below year 1000 on every platform
            return ts.strftime(fmt.strptime_format.replace("%Y", f"{ts.year:04d}"))
    raise ValueError(f"Unsupported date pattern '{pattern}'. Supported patterns are: {_describe_supported()}")


def from_epoch_millis(millis: Union[int, float]) -> datetime:
    """Convert epoch milliseconds to a naive local datetime."""
    return datetime.fromtimestamp(millis / 1000)


def to_local_datetime(value: DateInput, property_name: Optional[str] = None) -> Optional[datetime]:
    """
    Coerce the accepted window inputs to a naive local datetime.

    Strings go through parse_datetime, numbers are epoch milliseconds, aware
    datetimes are converted to local time and plain dates start at midnight.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return parse_datetime(value, property_name)
    if isinstance(value, bool):
        raise TypeError(f"Unsupported timestamp value: {value!r}")
    if isinstance(value, (int, float)):
        return from_epoch_millis(value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    raise TypeError(f"Unsupported timestamp value: {value!r}")
