"""Exceptions raised by the scheduling engine."""


class SchedulingError(Exception):
    """Base class for every error raised by the scheduling engine."""


class FormatError(SchedulingError, ValueError):
    """A time or date string does not use the canonical HH:MM / YYYY-MM-DD form."""


class TimeOverflowError(SchedulingError, OverflowError):
    """A computed time of day falls outside the 00:00-23:59 range.

    Activities never span midnight, so an end time past 23:59 must be
    shortened or split into two activities by the caller.
    """


class InvalidIntervalError(SchedulingError, ValueError):
    """An interval ends at or before its start, or its date and weekday disagree."""


class InvalidDurationError(SchedulingError, ValueError):
    """A duration is not a positive whole number of minutes."""
