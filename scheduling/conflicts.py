"""Conflict classification between a candidate activity and existing bookings.

Every overlapping pair is checked on each shared resource in a fixed order:
the room, the supervising conductor/teacher, then the participants. Room and
supervisor clashes are critical and block submission; shared participants
and bare time overlaps are warnings the user may confirm past.
"""

from typing import Iterable

from loguru import logger

from .intervals import overlaps, same_day
from .models import (
    Activity,
    ConflictDimension,
    ConflictFinding,
    ConflictReport,
    Severity,
)


def is_exempt(candidate: Activity, other: Activity) -> bool:
    """Return True if ``other`` belongs to the same group on the same day.

    A group may hold several sessions on one day without conflicting with
    itself. The day is compared the way ``same_day`` compares it, so a
    group's weekly session covers every dated occurrence on its weekday.
    """
    return other.group_id == candidate.group_id and same_day(candidate.interval, other.interval)


def classify_pair(
    candidate: Activity,
    other: Activity,
    include_time_only: bool = True,
) -> list[ConflictFinding]:
    """Return the findings for a single candidate/existing pair.

    Args:
        candidate: The activity being scheduled.
        other: An activity already on the calendar.
        include_time_only: Report a ``time`` warning when the two overlap
            without sharing any resource.

    Returns:
        Findings in precedence order, at most one per dimension.
    """
    if other.id == candidate.id or is_exempt(candidate, other):
        return []
    if not same_day(candidate.interval, other.interval):
        return []
    if not overlaps(candidate.interval, other.interval):
        return []

    affected_date = candidate.interval.date or other.interval.date
    findings: list[ConflictFinding] = []

    if candidate.location and candidate.location == other.location:
        findings.append(
            ConflictFinding(ConflictDimension.LOCATION, Severity.CRITICAL, other, affected_date)
        )

    if candidate.supervisor_id and candidate.supervisor_id == other.supervisor_id:
        findings.append(
            ConflictFinding(ConflictDimension.SUPERVISOR, Severity.CRITICAL, other, affected_date)
        )

    shared = candidate.participant_ids & other.participant_ids
    if shared:
        findings.append(
            ConflictFinding(
                ConflictDimension.PARTICIPANTS,
                Severity.WARNING,
                other,
                affected_date,
                shared_participants=shared,
            )
        )

    if not findings and include_time_only:
        findings.append(ConflictFinding(ConflictDimension.TIME, Severity.WARNING, other, affected_date))

    return findings


def classify(
    candidate: Activity,
    existing: Iterable[Activity],
    include_time_only: bool = True,
) -> ConflictReport:
    """Classify ``candidate`` against every activity in ``existing``.

    Findings keep the order of ``existing``; within one pair they follow
    location, supervisor, participants, time.
    """
    findings: list[ConflictFinding] = []
    for other in existing:
        findings.extend(classify_pair(candidate, other, include_time_only))

    report = ConflictReport(tuple(findings))
    if findings:
        logger.debug(
            f"Candidate {candidate.id} on {candidate.interval}: "
            f"{len(report.critical)} critical, {len(report.warnings)} warning findings"
        )
    return report
