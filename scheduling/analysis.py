"""Load summary of a teacher or room, with advice on how to rebalance it."""

from collections import Counter
from dataclasses import dataclass
from typing import Sequence

from .models import AvailabilityWindow, Interval, Weekday

PEAK_HOURS_LIMIT = 3

# Percent thresholds for advice on a resource's week.
LOW_UTILIZATION = 60.0
HIGH_UTILIZATION = 90.0
LOW_BACK_TO_BACK = 40.0

ADD_BOOKINGS = "Room for more bookings: less than 60% of the available time is used."
GROUP_BOOKINGS = "Schedule bookings back to back to cut idle time between them."
ADD_BREAKS = "Heavy load: over 90% of the available time is booked, consider adding breaks."


@dataclass(frozen=True)
class LoadSummary:
    available_minutes: int
    booked_minutes: int
    utilization: float  # percent of available time that is booked
    back_to_back_ratio: float  # percent of consecutive bookings with no gap
    peak_hours: tuple[str, ...]
    recommendations: tuple[str, ...] = ()


def _day_key(interval: Interval):
    return interval.date if interval.date is not None else Weekday(interval.day)


def _recommend(utilization: float, back_to_back_ratio: float, available: int, pairs: int) -> tuple[str, ...]:
    advice = []
    if available > 0 and utilization < LOW_UTILIZATION:
        advice.append(ADD_BOOKINGS)
    if pairs and back_to_back_ratio < LOW_BACK_TO_BACK:
        advice.append(GROUP_BOOKINGS)
    if utilization > HIGH_UTILIZATION:
        advice.append(ADD_BREAKS)
    return tuple(advice)


def analyze_load(windows: Sequence[AvailabilityWindow], booked: Sequence[Interval]) -> LoadSummary:
    """Summarize how much of a resource's availability is in use.

    Args:
        windows: Declared weekly availability of the resource.
        booked: Intervals the resource is already booked for.

    Returns:
        A LoadSummary. Utilization is 0 when nothing is available. Advice on
        low utilization needs some availability, and advice on gaps needs
        at least two bookings on one day.
    """
    available = sum(window.duration_minutes for window in windows)
    used = sum(interval.duration_minutes for interval in booked)
    utilization = (used / available) * 100 if available > 0 else 0.0

    ordered = sorted(
        booked,
        key=lambda i: (i.date.isoformat() if i.date else "", int(i.day), i.start.minutes),
    )
    pairs = 0
    back_to_back = 0
    for previous, current in zip(ordered, ordered[1:]):
        if _day_key(previous) != _day_key(current):
            continue
        pairs += 1
        if current.start == previous.end:
            back_to_back += 1
    ratio = (back_to_back / pairs) * 100 if pairs else 0.0

    hour_counts = Counter(f"{interval.start.hour:02d}:00" for interval in booked)
    peak = tuple(hour for hour, _ in hour_counts.most_common(PEAK_HOURS_LIMIT))

    return LoadSummary(
        available_minutes=available,
        booked_minutes=used,
        utilization=utilization,
        back_to_back_ratio=ratio,
        peak_hours=peak,
        recommendations=_recommend(utilization, ratio, available, pairs),
    )
