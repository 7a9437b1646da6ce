"""Container for a snapshot of scheduled activities and availability."""

from dataclasses import dataclass, field
from typing import Optional

from scheduling import (
    Activity,
    AvailabilityWindow,
    Interval,
    RecurrenceRequest,
    ResourceRole,
    occupied_intervals,
)


@dataclass(frozen=True)
class Roster:
    """Everything the engine needs from the data store, loaded in one read."""

    activities: tuple[Activity, ...] = field(default_factory=tuple)
    windows: tuple[AvailabilityWindow, ...] = field(default_factory=tuple)
    requests: tuple[RecurrenceRequest, ...] = field(default_factory=tuple)

    def windows_for(self, resource_id: str) -> list[AvailabilityWindow]:
        return [window for window in self.windows if window.resource_id == resource_id]

    def occupied_for(self, resource_id: str, role: Optional[ResourceRole] = None) -> list[Interval]:
        return occupied_intervals(self.activities, resource_id, role)
