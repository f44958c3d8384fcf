from __future__ import annotations

import calendar
import math
import re
from datetime import datetime, timedelta

from obspy import UTCDateTime

from .errors import TimeFormatError

EPOCH = datetime(1970, 1, 1)

ISO8601_PATTERN = re.compile(
    r"([0-9]{4})-([0-9]{2})-([0-9]{2})"
    r"T([0-9]{2}):([0-9]{2}):([0-9]{2})(?:\.([0-9]+))?Z"
)
ISO8601_OUTPUT_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def _split_iso8601(text) -> tuple[int, int, int, int, int, int, str]:
    if not isinstance(text, str):
        raise TimeFormatError(f"Timestamp must be a string, got {type(text).__name__}")

    match = ISO8601_PATTERN.fullmatch(text)
    if match is None:
        raise TimeFormatError(f"Timestamp {text!r} does not match YYYY-MM-DDTHH:MM:SS[.f]Z")

    year, month, day, hour, minute, second = (int(part) for part in match.groups()[:6])
    fraction = match.group(7) or ""

    if year < 1:
        raise TimeFormatError(f"Year out of range in {text!r}")
    if not 1 <= month <= 12:
        raise TimeFormatError(f"Month out of range in {text!r}")
    if not 1 <= day <= calendar.monthrange(year, month)[1]:
        raise TimeFormatError(f"Day out of range in {text!r}")
    if hour > 23:
        raise TimeFormatError(f"Hour out of range in {text!r}")
    if minute > 59:
        raise TimeFormatError(f"Minute out of range in {text!r}")
    if second > 59:
        raise TimeFormatError(f"Second out of range in {text!r}")

    return year, month, day, hour, minute, second, fraction


def _to_moment(seconds: float) -> datetime:
    microseconds = round(seconds * 1_000_000)
    try:
        return EPOCH + timedelta(microseconds=microseconds)
    except OverflowError as exc:
        raise TimeFormatError(f"Epoch time {seconds!r} is outside the calendar range") from exc


def parse_iso8601(text: str) -> float:
    """Convert a ``YYYY-MM-DDTHH:MM:SS[.f]Z`` string to decimal epoch seconds.

    Any number of fractional digits is accepted. Raises TimeFormatError when
    the string does not follow the grammar, a calendar field is out of range,
    or the value rounds past 9999-12-31T23:59:59.999999Z.
    """
    year, month, day, hour, minute, second, fraction = _split_iso8601(text)
    seconds = UTCDateTime(year, month, day, hour, minute, second).timestamp
    if fraction:
        seconds += float("0." + fraction)
    _to_moment(seconds)
    return seconds


def format_epoch(seconds: float) -> str:
    """Convert decimal epoch seconds to an ISO-8601 UTC string.

    The output always carries six fractional digits; the input is rounded to
    the nearest microsecond.
    """
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        raise TimeFormatError(f"Epoch time must be a number, got {type(seconds).__name__}")
    if not math.isfinite(seconds):
        raise TimeFormatError(f"Epoch time must be finite, got {seconds!r}")

    return UTCDateTime(_to_moment(seconds)).strftime(ISO8601_OUTPUT_FORMAT)


def is_alpha(s: str) -> bool:
    """True if every character is an ASCII letter."""
    if not isinstance(s, str) or not s:
        return False
    return s.isascii() and s.isalpha()


def is_iso8601(s: str) -> bool:
    try:
        parse_iso8601(s)
    except TimeFormatError:
        return False
    return True
