"""Parsing and formatting of OpenAPI ``date`` and ``date-time`` values."""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone

_EPOCH_DATE = date(1970, 1, 1)
_EPOCH_DATE_TIME = datetime(1970, 1, 1, tzinfo=timezone.utc)

_FULL_DATE_RE = re.compile(r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})")

_DATE_TIME_RE = re.compile(
    r"""
    (?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})
    (?P<sep>[T ])
    (?P<hour>\d{2}):(?P<minute>\d{2})
    (?::(?P<second>\d{2})(?:\.(?P<fraction>\d+))?)?
    (?P<tz>Z|[+-]\d{2}(?::?\d{2})?)?
    """,
    re.VERBOSE,
)


def normalize_date_time_utc(value: datetime) -> datetime:
    """Return ``value`` expressed in UTC; naive values are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_date(date_string: str) -> date:
    """Parse a full-date string (YYYY-MM-DD).

    An empty string yields the Unix epoch date (1970-01-01).
    Raises ValueError if the string is not a valid full-date.
    """
    if date_string == "":
        return _EPOCH_DATE
    match = _FULL_DATE_RE.fullmatch(date_string)
    if match is None:
        raise ValueError(f"invalid date: {date_string!r}")
    return date(int(match["year"]), int(match["month"]), int(match["day"]))


def _parse_offset(text: str | None) -> timezone:
    if text is None or text == "Z":
        return timezone.utc
    sign = -1 if text[0] == "-" else 1
    digits = text[1:].replace(":", "")
    hours = int(digits[:2])
    minutes = int(digits[2:4]) if len(digits) > 2 else 0
    if minutes >= 60:
        raise ValueError(f"invalid timezone offset: {text!r}")
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def parse_date_time(date_string: str) -> datetime:
    """Parse a date-time string into a timezone-aware UTC datetime.

    Accepts RFC 3339 with optional fractional seconds and tz-offsets of the
    forms ``Z``, ``+HH``, ``+HHMM`` and ``+HH:MM``; minutes precision with a
    tz-offset; values with no tz-offset (taken as UTC); and the "dialog"
    form ``YYYY-MM-DD hh:mm:ss``. An empty string yields the Unix epoch.
    Raises ValueError if the string cannot be parsed.
    """
    if date_string == "":
        return _EPOCH_DATE_TIME
    match = _DATE_TIME_RE.fullmatch(date_string)
    if match is None:
        raise ValueError(f"invalid date-time: {date_string!r}")

    second, fraction, tz = match["second"], match["fraction"], match["tz"]
    if match["sep"] == " " and (second is None or fraction is not None or tz is not None):
        raise ValueError(f"invalid date-time: {date_string!r}")
    if second is None and tz is None:
        raise ValueError(f"invalid date-time: {date_string!r}")

    microsecond = int(fraction[:6].ljust(6, "0")) if fraction else 0
    parsed = datetime(
        int(match["year"]),
        int(match["month"]),
        int(match["day"]),
        int(match["hour"]),
        int(match["minute"]),
        int(second) if second else 0,
        microsecond,
        tzinfo=_parse_offset(tz),
    )
    return normalize_date_time_utc(parsed)


def format_date(value: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def format_date_time(value: datetime) -> str:
    """Format a date-time in UTC with millisecond precision, e.g. 2016-06-20T04:25:16.218Z."""
    utc = normalize_date_time_utc(value)
    return utc.strftime("%Y-%m-%dT%H:%M:%S") + f".{utc.microsecond // 1000:03d}Z"