"""Data models for activities, intervals and availability."""

from dataclasses import dataclass, field
from datetime import date as date_type
from datetime import time
from enum import Enum, IntEnum
from typing import Optional, Union

from .errors import FormatError, InvalidIntervalError, TimeOverflowError
from .timeutils import MINUTES_PER_DAY, MINUTES_PER_HOUR, minutes_to_time, to_minutes


class Weekday(IntEnum):
    """Day of the week, numbered like ``date.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def parse(cls, value: Union["Weekday", int, str]) -> "Weekday":
        """Accept a Weekday, an int 0-6 or an English day name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            if 0 <= value <= 6:
                return cls(value)
            raise FormatError(f"Weekday must be 0-6 (Mon-Sun), got {value}")
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        raise FormatError(f"Unknown weekday: {value!r}")

    @classmethod
    def of(cls, day: date_type) -> "Weekday":
        return cls(day.weekday())

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """Wall-clock time as minutes since midnight."""

    minutes: int

    def __post_init__(self) -> None:
        if isinstance(self.minutes, bool) or not isinstance(self.minutes, int):
            raise FormatError(f"Minutes must be an integer, got {self.minutes!r}")
        if not 0 <= self.minutes < MINUTES_PER_DAY:
            raise TimeOverflowError(
                f"Time of day must be within 00:00-23:59, got {self.minutes} minutes"
            )

    @classmethod
    def parse(cls, text: str) -> "TimeOfDay":
        return cls(to_minutes(text))

    @classmethod
    def coerce(cls, value: Union["TimeOfDay", str]) -> "TimeOfDay":
        if isinstance(value, cls):
            return value
        return cls.parse(value)

    @property
    def hour(self) -> int:
        return self.minutes // MINUTES_PER_HOUR

    @property
    def minute(self) -> int:
        return self.minutes % MINUTES_PER_HOUR

    def to_time(self) -> time:
        return time(self.hour, self.minute)

    def __str__(self) -> str:
        return minutes_to_time(self.minutes)


@dataclass(frozen=True)
class Interval:
    """A start-end range of minutes on one weekday, optionally pinned to a date.

    Intervals with a ``date`` are concrete occurrences; intervals without one
    are abstract weekly ranges such as availability windows.
    """

    start: TimeOfDay
    end: TimeOfDay
    day: Weekday
    date: Optional[date_type] = None

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise InvalidIntervalError(
                f"Interval must end after it starts, got {self.start}-{self.end}"
            )
        if self.date is not None and self.date.weekday() != self.day:
            raise InvalidIntervalError(
                f"{self.date.isoformat()} is a {Weekday.of(self.date).label}, not a {Weekday(self.day).label}"
            )

    @classmethod
    def weekly(
        cls,
        day: Union[Weekday, int, str],
        start: Union[TimeOfDay, str],
        end: Union[TimeOfDay, str],
    ) -> "Interval":
        """Build an undated interval recurring on ``day``."""
        return cls(TimeOfDay.coerce(start), TimeOfDay.coerce(end), Weekday.parse(day))

    @classmethod
    def on(
        cls,
        day: date_type,
        start: Union[TimeOfDay, str],
        end: Union[TimeOfDay, str],
    ) -> "Interval":
        """Build an interval pinned to a calendar date; the weekday is derived."""
        return cls(TimeOfDay.coerce(start), TimeOfDay.coerce(end), Weekday.of(day), day)

    @property
    def duration_minutes(self) -> int:
        return self.end.minutes - self.start.minutes

    def with_date(self, day: date_type) -> "Interval":
        return Interval(self.start, self.end, Weekday.of(day), day)

    def __str__(self) -> str:
        where = self.date.isoformat() if self.date else Weekday(self.day).label
        return f"{where} {self.start}-{self.end}"


class ActivityKind(str, Enum):
    REHEARSAL = "rehearsal"
    LESSON = "lesson"
    THEORY = "theory"


class ResourceRole(str, Enum):
    """The part a resource plays in an activity."""

    LOCATION = "location"
    SUPERVISOR = "supervisor"
    PARTICIPANT = "participant"


@dataclass(frozen=True)
class Activity:
    """A rehearsal or lesson occupying a room, a supervisor and participants."""

    id: str
    group_id: str
    interval: Interval
    location: Optional[str] = None
    supervisor_id: Optional[str] = None
    participant_ids: frozenset[str] = field(default_factory=frozenset)
    kind: ActivityKind = ActivityKind.REHEARSAL
    title: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.participant_ids, frozenset):
            object.__setattr__(self, "participant_ids", frozenset(self.participant_ids))

    @property
    def date(self) -> Optional[date_type]:
        return self.interval.date

    @property
    def display_title(self) -> str:
        return self.title or self.group_id


@dataclass(frozen=True)
class RecurrenceRequest:
    """Weekly recurrence of one activity between two dates, minus exclusions."""

    group_id: str
    interval: Interval
    date_from: date_type
    date_to: date_type
    exclusions: frozenset[date_type] = field(default_factory=frozenset)
    location: Optional[str] = None
    supervisor_id: Optional[str] = None
    participant_ids: frozenset[str] = field(default_factory=frozenset)
    kind: ActivityKind = ActivityKind.REHEARSAL
    title: str = ""

    def __post_init__(self) -> None:
        if self.interval.date is not None:
            raise InvalidIntervalError("A recurrence interval must not be pinned to a date")
        if not isinstance(self.exclusions, frozenset):
            object.__setattr__(self, "exclusions", frozenset(self.exclusions))
        if not isinstance(self.participant_ids, frozenset):
            object.__setattr__(self, "participant_ids", frozenset(self.participant_ids))

    @property
    def day(self) -> Weekday:
        return Weekday(self.interval.day)


class ConflictDimension(str, Enum):
    TIME = "time"
    LOCATION = "location"
    SUPERVISOR = "supervisor"
    PARTICIPANTS = "participants"


class Severity(str, Enum):
    CRITICAL = "critical"  # blocks submission
    WARNING = "warning"  # advisory, may be overridden


@dataclass(frozen=True)
class ConflictFinding:
    """One dimension of overlap between a candidate and an existing activity."""

    dimension: ConflictDimension
    severity: Severity
    with_activity: Activity
    affected_date: Optional[date_type] = None
    shared_participants: frozenset[str] = field(default_factory=frozenset)

    def describe(self) -> str:
        other = self.with_activity
        when = str(other.interval)
        if self.dimension is ConflictDimension.LOCATION:
            return f"Location '{other.location}' is already booked by {other.display_title} ({when})"
        if self.dimension is ConflictDimension.SUPERVISOR:
            return f"Supervisor {other.supervisor_id} is already leading {other.display_title} ({when})"
        if self.dimension is ConflictDimension.PARTICIPANTS:
            count = len(self.shared_participants)
            noun = "participant" if count == 1 else "participants"
            return f"{count} shared {noun} with {other.display_title} ({when})"
        return f"Time overlaps with {other.display_title} ({when})"


@dataclass(frozen=True)
class ConflictReport:
    """Ordered findings for one candidate activity."""

    findings: tuple[ConflictFinding, ...] = ()

    @property
    def has_critical(self) -> bool:
        return any(f.severity is Severity.CRITICAL for f in self.findings)

    @property
    def critical(self) -> tuple[ConflictFinding, ...]:
        return tuple(f for f in self.findings if f.severity is Severity.CRITICAL)

    @property
    def warnings(self) -> tuple[ConflictFinding, ...]:
        return tuple(f for f in self.findings if f.severity is Severity.WARNING)

    @property
    def is_clear(self) -> bool:
        return not self.findings

    @property
    def dimensions(self) -> tuple[ConflictDimension, ...]:
        return tuple(f.dimension for f in self.findings)

    def __len__(self) -> int:
        return len(self.findings)

    def __iter__(self):
        return iter(self.findings)


@dataclass(frozen=True)
class AvailabilityWindow:
    """A weekly range during which a teacher or room can be booked."""

    day: Weekday
    start: TimeOfDay
    end: TimeOfDay
    location: Optional[str] = None
    resource_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise InvalidIntervalError(
                f"Availability window must end after it starts, got {self.start}-{self.end}"
            )

    @property
    def interval(self) -> Interval:
        return Interval(self.start, self.end, self.day)

    @property
    def duration_minutes(self) -> int:
        return self.end.minutes - self.start.minutes


@dataclass(frozen=True)
class CandidateSlot:
    """A bookable, not yet booked, slot of one supported duration."""

    day: Weekday
    start: TimeOfDay
    end: TimeOfDay
    duration_minutes: int
    location: Optional[str] = None

    @property
    def interval(self) -> Interval:
        return Interval(self.start, self.end, self.day)

    def __str__(self) -> str:
        return f"{Weekday(self.day).label} {self.start}-{self.end} ({self.duration_minutes} min)"
