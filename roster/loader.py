"""Roster loader reading activities, availability and requests from JSON."""

import json
from pathlib import Path
from typing import Any, Optional, Union

from loguru import logger

from scheduling import (
    Activity,
    ActivityKind,
    AvailabilityWindow,
    Interval,
    RecurrenceRequest,
    SchedulingError,
    TimeOfDay,
    Weekday,
    parse_date,
)

from .models import Roster


class RosterError(SchedulingError):
    """A roster document is missing a field or holds a value of the wrong type."""


def _require(record: dict[str, Any], key: str, where: str) -> Any:
    value = record.get(key)
    if value is None or value == "":
        raise RosterError(f"{where}: missing required field '{key}'")
    return value


def _string_set(record: dict[str, Any], key: str, where: str) -> frozenset[str]:
    values = record.get(key) or []
    if not isinstance(values, list):
        raise RosterError(f"{where}: '{key}' must be a list")
    return frozenset(str(value) for value in values)


def _kind(record: dict[str, Any], where: str) -> ActivityKind:
    value = record.get("kind", ActivityKind.REHEARSAL.value)
    try:
        return ActivityKind(value)
    except ValueError:
        allowed = ", ".join(kind.value for kind in ActivityKind)
        raise RosterError(f"{where}: unknown kind '{value}' (expected one of {allowed})") from None


def _optional_str(record: dict[str, Any], key: str) -> Optional[str]:
    value = record.get(key)
    return str(value) if value not in (None, "") else None


def parse_activity(record: dict[str, Any], where: str = "activity") -> Activity:
    """Build an Activity from a roster record.

    A record with a ``date`` is a single dated occurrence; a record with only
    a ``day`` is a weekly activity.
    """
    start = TimeOfDay.parse(_require(record, "start", where))
    end = TimeOfDay.parse(_require(record, "end", where))

    raw_date = record.get("date")
    if raw_date:
        day_date = parse_date(raw_date)
        day = Weekday.parse(record["day"]) if record.get("day") is not None else Weekday.of(day_date)
        interval = Interval(start, end, day, day_date)
    elif record.get("day") is not None:
        interval = Interval(start, end, Weekday.parse(record["day"]))
    else:
        raise RosterError(f"{where}: either 'date' or 'day' is required")

    return Activity(
        id=str(_require(record, "id", where)),
        group_id=str(_require(record, "group_id", where)),
        interval=interval,
        location=_optional_str(record, "location"),
        supervisor_id=_optional_str(record, "supervisor_id"),
        participant_ids=_string_set(record, "participant_ids", where),
        kind=_kind(record, where),
        title=str(record.get("title") or ""),
    )


def parse_window(record: dict[str, Any], where: str = "window") -> AvailabilityWindow:
    return AvailabilityWindow(
        day=Weekday.parse(_require(record, "day", where)),
        start=TimeOfDay.parse(_require(record, "start", where)),
        end=TimeOfDay.parse(_require(record, "end", where)),
        location=_optional_str(record, "location"),
        resource_id=_optional_str(record, "resource_id"),
    )


def parse_request(record: dict[str, Any], where: str = "request") -> RecurrenceRequest:
    exclusions = record.get("exclusions") or []
    if not isinstance(exclusions, list):
        raise RosterError(f"{where}: 'exclusions' must be a list of YYYY-MM-DD dates")

    return RecurrenceRequest(
        group_id=str(_require(record, "group_id", where)),
        interval=Interval.weekly(
            _require(record, "day", where),
            _require(record, "start", where),
            _require(record, "end", where),
        ),
        date_from=parse_date(_require(record, "from", where)),
        date_to=parse_date(_require(record, "to", where)),
        exclusions=frozenset(parse_date(value) for value in exclusions),
        location=_optional_str(record, "location"),
        supervisor_id=_optional_str(record, "supervisor_id"),
        participant_ids=_string_set(record, "participant_ids", where),
        kind=_kind(record, where),
        title=str(record.get("title") or ""),
    )


def parse_roster(data: dict[str, Any]) -> Roster:
    """Build a Roster from an already decoded JSON document."""
    if not isinstance(data, dict):
        raise RosterError("Roster document must be a JSON object")

    sections = {}
    for key in ("activities", "windows", "requests"):
        records = data.get(key) or []
        if not isinstance(records, list):
            raise RosterError(f"'{key}' must be a list")
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                raise RosterError(f"{key}[{index}]: expected an object, got {type(record).__name__}")
        sections[key] = records

    activities = []
    for index, record in enumerate(sections["activities"]):
        activities.append(parse_activity(record, f"activities[{index}]"))
    windows = []
    for index, record in enumerate(sections["windows"]):
        windows.append(parse_window(record, f"windows[{index}]"))
    requests = []
    for index, record in enumerate(sections["requests"]):
        requests.append(parse_request(record, f"requests[{index}]"))

    return Roster(tuple(activities), tuple(windows), tuple(requests))


class RosterLoader:
    """Loads a roster snapshot from a JSON file.

    Stands in for the application's data store: the engine only ever sees
    the Roster returned by ``load()``.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        """Initialize the loader.

        Args:
            path: Path to the roster JSON file.
        """
        self._path = Path(path)

    def _read(self) -> Any:
        try:
            with open(self._path, encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise RosterError(f"{self._path}: invalid JSON ({e})") from e

    def load(self) -> Roster:
        """Read and validate the roster file.

        Returns:
            The parsed Roster.

        Raises:
            OSError: If the file cannot be read.
            RosterError: If a record is incomplete.
            FormatError: If a time or date is malformed.
            InvalidIntervalError: If an interval ends before it starts.
        """
        logger.info(f"Loading roster from {self._path}")
        try:
            roster = parse_roster(self._read())
        except SchedulingError as e:
            logger.error(f"Invalid roster {self._path}: {e}")
            raise

        logger.info(
            f"Loaded {len(roster.activities)} activities, {len(roster.windows)} windows, "
            f"{len(roster.requests)} requests"
        )
        return roster
