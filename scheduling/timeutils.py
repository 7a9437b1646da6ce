"""Parsing and formatting helpers for wall-clock times and calendar dates."""

import re
from datetime import date, datetime

from .errors import FormatError, TimeOverflowError

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR

# 24-hour clock, zero padded. "9:00" and "09.00" are rejected.
TIME_PATTERN = re.compile(r"(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2})")
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def to_minutes(text: str) -> int:
    """Convert an ``HH:MM`` string into minutes since midnight.

    Args:
        text: Time of day in canonical 24-hour ``HH:MM`` form.

    Returns:
        Minutes since midnight, in the range 0-1439.

    Raises:
        FormatError: If the value is not a string in ``HH:MM`` form or the
            hour/minute is out of range.
    """
    if not isinstance(text, str):
        raise FormatError(f"Expected time as 'HH:MM' string, got {text!r}")

    match = TIME_PATTERN.fullmatch(text)
    if match is None:
        raise FormatError(f"Invalid time format: '{text}'. Expected HH:MM.")

    hour = int(match.group("hour"))
    minute = int(match.group("minute"))
    if hour > 23:
        raise FormatError(f"Hour out of range in '{text}' (00-23 allowed)")
    if minute > 59:
        raise FormatError(f"Minute out of range in '{text}' (00-59 allowed)")

    return hour * MINUTES_PER_HOUR + minute


def minutes_to_time(minutes: int) -> str:
    """Convert minutes since midnight back into an ``HH:MM`` string.

    Raises:
        TimeOverflowError: If ``minutes`` is outside a single day.
    """
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise TimeOverflowError(
            f"{minutes} minutes is outside a single day (0-{MINUTES_PER_DAY - 1})"
        )
    hours, mins = divmod(minutes, MINUTES_PER_HOUR)
    return f"{hours:02d}:{mins:02d}"


def parse_date(text: str) -> date:
    """Parse a date string in ``YYYY-MM-DD`` format.

    Raises:
        FormatError: If the string is not a valid ``YYYY-MM-DD`` date.
    """
    if not isinstance(text, str) or DATE_PATTERN.fullmatch(text) is None:
        raise FormatError(f"Invalid date format: {text!r}. Expected YYYY-MM-DD.")
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError as e:
        raise FormatError(f"Invalid date: '{text}' ({e})") from e


def duration_between(start: str, end: str) -> int:
    """Return the number of minutes from ``start`` to ``end`` (may be negative)."""
    return to_minutes(end) - to_minutes(start)


def format_duration(minutes: int) -> str:
    """Render a duration as human readable text, e.g. ``1 hour 30 minutes``."""
    if minutes < MINUTES_PER_HOUR:
        return f"{minutes} minutes"

    hours, mins = divmod(minutes, MINUTES_PER_HOUR)
    hours_text = "1 hour" if hours == 1 else f"{hours} hours"
    if mins == 0:
        return hours_text
    return f"{hours_text} {mins} minutes"
