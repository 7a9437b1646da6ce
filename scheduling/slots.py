"""Synthesis of bookable slots from availability windows."""

from typing import Iterable, Optional, Sequence, Union

from loguru import logger

from .errors import InvalidDurationError
from .intervals import add_minutes, overlaps, same_day
from .models import Activity, AvailabilityWindow, CandidateSlot, Interval, ResourceRole, TimeOfDay

SLOT_STRIDE_MINUTES = 15
DEFAULT_DURATIONS = (30, 45, 60)


def _validate_positive(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidDurationError(f"{name} must be a positive number of minutes, got {value!r}")


def _window_candidates(
    window: AvailabilityWindow,
    duration: int,
    stride: int,
) -> Iterable[CandidateSlot]:
    cursor = window.start.minutes
    last_start = window.end.minutes - duration
    while cursor <= last_start:
        start = TimeOfDay(cursor)
        yield CandidateSlot(
            day=window.day,
            start=start,
            end=add_minutes(start, duration),
            duration_minutes=duration,
            location=window.location,
        )
        cursor += stride


def synthesize(
    windows: Iterable[AvailabilityWindow],
    occupied: Sequence[Interval],
    already_chosen: Sequence[Interval] = (),
    durations: Sequence[int] = DEFAULT_DURATIONS,
    stride: int = SLOT_STRIDE_MINUTES,
) -> list[CandidateSlot]:
    """Generate every free slot of each duration inside the given windows.

    Start times advance through each window in ``stride`` steps, from the
    window start up to the last start that still ends inside it. A candidate
    is dropped if it overlaps an occupied interval or one already chosen in
    the same session. Candidates of different durations are all kept.

    Args:
        windows: Weekly availability windows of one teacher or room.
        occupied: Intervals already booked against the resource.
        already_chosen: Intervals picked earlier in the same request.
        durations: Slot lengths in minutes.
        stride: Step between consecutive start times in minutes.

    Returns:
        Candidate slots ordered by window, then duration, then start time.

    Raises:
        InvalidDurationError: If a duration or the stride is not positive.
    """
    _validate_positive("Stride", stride)
    for duration in durations:
        _validate_positive("Duration", duration)

    blocked = tuple(occupied) + tuple(already_chosen)
    slots: list[CandidateSlot] = []
    for window in windows:
        for duration in durations:
            if duration > window.duration_minutes:
                continue
            for slot in _window_candidates(window, duration, stride):
                candidate = slot.interval
                if any(overlaps(candidate, busy) for busy in blocked):
                    continue
                slots.append(slot)

    logger.debug(f"Synthesized {len(slots)} candidate slots against {len(blocked)} blocked intervals")
    return slots


def choose(slot: CandidateSlot, already_chosen: Sequence[Interval] = ()) -> tuple[Interval, ...]:
    """Return a new already-chosen collection that includes ``slot``."""
    return tuple(already_chosen) + (slot.interval,)


def order_by_preference(
    slots: Iterable[CandidateSlot],
    preferred_times: Sequence[Union[str, TimeOfDay]] = (),
) -> list[CandidateSlot]:
    """Move slots starting at a preferred time to the front.

    Preferred slots follow the order of ``preferred_times``; every other slot
    keeps its relative order behind them.
    """
    rank = {}
    for position, value in enumerate(preferred_times):
        rank.setdefault(TimeOfDay.coerce(value), position)
    return sorted(slots, key=lambda slot: rank.get(slot.start, len(rank)))


def suggest_alternatives(
    candidate: Activity,
    windows: Iterable[AvailabilityWindow],
    occupied: Sequence[Interval],
    preferred_times: Sequence[Union[str, TimeOfDay]] = (),
    limit: int = 3,
    stride: int = SLOT_STRIDE_MINUTES,
) -> list[CandidateSlot]:
    """Propose free slots to move a conflicted activity to.

    Slots keep the candidate's length and come from the resource's
    availability windows. The candidate's current start on its own day is
    never proposed.

    Args:
        candidate: The activity that could not be booked as requested.
        windows: Availability windows of the teacher or room to move to.
        occupied: Intervals already booked against that resource.
        preferred_times: ``HH:MM`` start times to offer first.
        limit: Maximum number of suggestions.
        stride: Step between consecutive start times in minutes.

    Returns:
        At most ``limit`` slots, preferred start times first.
    """
    current = candidate.interval
    slots = [
        slot
        for slot in synthesize(windows, occupied, (), (current.duration_minutes,), stride)
        if not (slot.start == current.start and same_day(slot.interval, current))
    ]
    suggestions = order_by_preference(slots, preferred_times)[:limit]
    logger.debug(f"Suggested {len(suggestions)} alternatives for {candidate.id}")
    return suggestions


def back_to_back_runs(
    windows: Iterable[AvailabilityWindow],
    occupied: Sequence[Interval],
    duration: int = 45,
    min_length: int = 2,
) -> list[tuple[CandidateSlot, ...]]:
    """Find runs of consecutive free slots with no gap between them.

    Each window is cut into ``duration`` pieces from its start. Free pieces
    that follow each other directly form a run; an occupied piece ends it.

    Returns:
        Runs of at least ``min_length`` slots, in window order.

    Raises:
        InvalidDurationError: If ``duration`` is not positive.
    """
    _validate_positive("Duration", duration)

    runs: list[tuple[CandidateSlot, ...]] = []
    for window in windows:
        current: list[CandidateSlot] = []
        for slot in _window_candidates(window, duration, duration):
            if any(overlaps(slot.interval, busy) for busy in occupied):
                if len(current) >= min_length:
                    runs.append(tuple(current))
                current = []
                continue
            current.append(slot)
        if len(current) >= min_length:
            runs.append(tuple(current))
    return runs


def _plays_role(activity: Activity, resource_id: str, role: ResourceRole) -> bool:
    if role is ResourceRole.LOCATION:
        return activity.location == resource_id
    if role is ResourceRole.SUPERVISOR:
        return activity.supervisor_id == resource_id
    return resource_id in activity.participant_ids


def occupied_intervals(
    activities: Iterable[Activity],
    resource_id: str,
    role: Optional[ResourceRole] = None,
) -> list[Interval]:
    """Select the intervals during which ``resource_id`` is busy.

    Args:
        activities: Activities already on the calendar.
        resource_id: Room name, supervisor id or participant id.
        role: Only count activities where the resource plays this part.
            When None, being the location, the supervisor or a participant
            all count, which can mix up a room and a person sharing a name.

    Returns:
        The matching intervals in activity order.
    """
    roles = (ResourceRole(role),) if role is not None else tuple(ResourceRole)
    return [
        activity.interval
        for activity in activities
        if any(_plays_role(activity, resource_id, r) for r in roles)
    ]
