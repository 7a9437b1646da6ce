"""Expansion of weekly recurrence requests into calendar dates."""

from datetime import date, timedelta
from typing import Iterator

from loguru import logger

from .models import Activity, RecurrenceRequest, Weekday

ONE_WEEK = timedelta(days=7)


def first_occurrence(day: Weekday, on_or_after: date) -> date:
    """Find the first date falling on ``day`` on or after ``on_or_after``.

    Args:
        day: The weekday the activity recurs on.
        on_or_after: The earliest possible date.

    Returns:
        Date of the first occurrence.
    """
    days_ahead = day - on_or_after.weekday()
    if days_ahead < 0:
        days_ahead += 7

    return on_or_after + timedelta(days=days_ahead)


def iter_occurrences(request: RecurrenceRequest) -> Iterator[date]:
    """Yield every non-excluded weekly occurrence of ``request`` in order.

    Each call walks the range from the start, so the same request always
    produces the same dates.
    """
    current = first_occurrence(request.day, request.date_from)
    while current <= request.date_to:
        if current not in request.exclusions:
            yield current
        current += ONE_WEEK


def occurrence_dates(request: RecurrenceRequest) -> list[date]:
    """Return the sorted occurrence dates of ``request``.

    An empty list is returned when no matching weekday falls in the range.
    Exclusions on other weekdays never match and are ignored.
    """
    dates = list(iter_occurrences(request))
    logger.debug(
        f"Expanded {request.group_id} on {request.day.label} "
        f"{request.date_from}..{request.date_to} into {len(dates)} occurrences"
    )
    return dates


def occurrence_id(group_id: str, day: date) -> str:
    return f"{group_id}:{day.isoformat()}"


def expand_request(request: RecurrenceRequest) -> list[Activity]:
    """Build one dated candidate activity per occurrence of ``request``."""
    return [
        Activity(
            id=occurrence_id(request.group_id, day),
            group_id=request.group_id,
            interval=request.interval.with_date(day),
            location=request.location,
            supervisor_id=request.supervisor_id,
            participant_ids=request.participant_ids,
            kind=request.kind,
            title=request.title,
        )
        for day in iter_occurrences(request)
    ]
