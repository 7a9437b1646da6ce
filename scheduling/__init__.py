"""Scheduling engine: conflict classification, recurrence expansion and slot synthesis."""

from .analysis import LoadSummary, analyze_load
from .bulk import OccurrenceCheck, RecurrenceCheck, check_activity, check_recurrence
from .conflicts import classify, classify_pair
from .errors import (
    FormatError,
    InvalidDurationError,
    InvalidIntervalError,
    SchedulingError,
    TimeOverflowError,
)
from .intervals import add_minutes, overlaps, same_day
from .models import (
    Activity,
    ActivityKind,
    AvailabilityWindow,
    CandidateSlot,
    ConflictDimension,
    ConflictFinding,
    ConflictReport,
    Interval,
    RecurrenceRequest,
    ResourceRole,
    Severity,
    TimeOfDay,
    Weekday,
)
from .occurrences import expand_request, occurrence_dates
from .slots import (
    back_to_back_runs,
    choose,
    occupied_intervals,
    order_by_preference,
    suggest_alternatives,
    synthesize,
)
from .timeutils import parse_date, to_minutes

__all__ = [
    "Activity",
    "ActivityKind",
    "AvailabilityWindow",
    "CandidateSlot",
    "ConflictDimension",
    "ConflictFinding",
    "ConflictReport",
    "FormatError",
    "Interval",
    "InvalidDurationError",
    "InvalidIntervalError",
    "LoadSummary",
    "OccurrenceCheck",
    "RecurrenceCheck",
    "RecurrenceRequest",
    "ResourceRole",
    "SchedulingError",
    "Severity",
    "TimeOfDay",
    "TimeOverflowError",
    "Weekday",
    "add_minutes",
    "analyze_load",
    "back_to_back_runs",
    "check_activity",
    "check_recurrence",
    "choose",
    "classify",
    "classify_pair",
    "expand_request",
    "occupied_intervals",
    "occurrence_dates",
    "order_by_preference",
    "overlaps",
    "parse_date",
    "same_day",
    "suggest_alternatives",
    "synthesize",
    "to_minutes",
]
