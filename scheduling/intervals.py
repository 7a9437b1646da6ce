"""Interval arithmetic: end-time computation, same-day and overlap tests."""

from .errors import InvalidDurationError, TimeOverflowError
from .models import Interval, TimeOfDay
from .timeutils import MINUTES_PER_DAY


def add_minutes(start: TimeOfDay, duration: int) -> TimeOfDay:
    """Compute the time ``duration`` minutes after ``start``.

    Args:
        start: Start time of the activity.
        duration: Positive number of minutes.

    Returns:
        The end time on the same day.

    Raises:
        InvalidDurationError: If ``duration`` is not a positive integer.
        TimeOverflowError: If the result would reach or pass midnight.
    """
    if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
        raise InvalidDurationError(f"Duration must be a positive number of minutes, got {duration!r}")

    end = start.minutes + duration
    if end >= MINUTES_PER_DAY:
        raise TimeOverflowError(
            f"{start} + {duration} min crosses midnight; shorten it or split it into two activities"
        )
    return TimeOfDay(end)


def same_day(a: Interval, b: Interval) -> bool:
    """Return True if two intervals fall on the same day.

    Two dated intervals must share the date. When either one is an undated
    weekly range, only the weekdays are compared.
    """
    if a.date is not None and b.date is not None:
        return a.date == b.date
    return a.day == b.day


def overlaps(a: Interval, b: Interval) -> bool:
    """Return True if ``a`` and ``b`` share at least one minute on the same day.

    Back-to-back intervals (``a.end == b.start``) do not overlap.
    """
    if not same_day(a, b):
        return False
    return a.start < b.end and a.end > b.start


def contains(outer: Interval, inner: Interval) -> bool:
    """Return True if ``inner`` lies entirely within ``outer`` on the same day."""
    if not same_day(outer, inner):
        return False
    return outer.start <= inner.start and inner.end <= outer.end
