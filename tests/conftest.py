"""Shared fixtures for scheduling tests."""

from datetime import date

import pytest

from scheduling import Activity, ActivityKind, Interval


@pytest.fixture
def make_activity():
    """Factory for dated activities with sensible defaults."""

    def _make(
        id: str = "existing",
        group_id: str = "orchestra",
        day: date = date(2024, 3, 4),
        start: str = "19:00",
        end: str = "21:00",
        location: str = "Hall A",
        supervisor_id: str = "conductor-1",
        participants: tuple = (),
        kind: ActivityKind = ActivityKind.REHEARSAL,
    ) -> Activity:
        return Activity(
            id=id,
            group_id=group_id,
            interval=Interval.on(day, start, end),
            location=location,
            supervisor_id=supervisor_id,
            participant_ids=frozenset(participants),
            kind=kind,
        )

    return _make
