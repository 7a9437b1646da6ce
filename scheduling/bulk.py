"""Conflict checks for single activities and whole recurrence requests."""

from dataclasses import dataclass
from datetime import date
from typing import Sequence

from loguru import logger

from .conflicts import classify
from .models import Activity, ConflictFinding, ConflictReport, RecurrenceRequest
from .occurrences import expand_request


@dataclass(frozen=True)
class OccurrenceCheck:
    """Conflict report for one expanded date of a recurrence request."""

    date: date
    activity: Activity
    report: ConflictReport


@dataclass(frozen=True)
class RecurrenceCheck:
    """Conflict reports for every occurrence of a recurrence request."""

    request: RecurrenceRequest
    occurrences: tuple[OccurrenceCheck, ...] = ()

    @property
    def has_critical(self) -> bool:
        return any(check.report.has_critical for check in self.occurrences)

    @property
    def blocked_dates(self) -> list[date]:
        return [check.date for check in self.occurrences if check.report.has_critical]

    @property
    def clear_dates(self) -> list[date]:
        return [check.date for check in self.occurrences if check.report.is_clear]

    @property
    def findings(self) -> list[ConflictFinding]:
        return [finding for check in self.occurrences for finding in check.report]

    @property
    def activities(self) -> list[Activity]:
        return [check.activity for check in self.occurrences]


def check_activity(
    candidate: Activity,
    existing: Sequence[Activity],
    include_time_only: bool = True,
) -> ConflictReport:
    """Classify a single submitted activity against the existing roster."""
    return classify(candidate, existing, include_time_only)


def check_recurrence(
    request: RecurrenceRequest,
    existing: Sequence[Activity],
    include_time_only: bool = True,
) -> RecurrenceCheck:
    """Expand ``request`` and classify each occurrence against ``existing``.

    Args:
        request: Weekly recurrence to be created.
        existing: Snapshot of the activities already on the calendar.
        include_time_only: Forwarded to the classifier.

    Returns:
        One report per generated date, in date order.
    """
    checks = tuple(
        OccurrenceCheck(
            date=activity.interval.date,
            activity=activity,
            report=classify(activity, existing, include_time_only),
        )
        for activity in expand_request(request)
    )
    result = RecurrenceCheck(request, checks)
    logger.debug(
        f"Checked {len(checks)} occurrences of {request.group_id}: "
        f"{len(result.blocked_dates)} blocked, {len(result.clear_dates)} clear"
    )
    return result
