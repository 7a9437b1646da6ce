"""iCalendar transformer for rehearsals and lessons."""

import hashlib
from datetime import date, datetime
from typing import Optional, Sequence
from zoneinfo import ZoneInfo

from icalendar import Calendar, Event, vRecur
from loguru import logger

from scheduling import Activity, Weekday
from scheduling.occurrences import first_occurrence
from .base import BaseTransformer


class ICalTransformer(BaseTransformer):
    """Transformer that converts activities to iCalendar format."""

    UID_DOMAIN = "ensemble-scheduler"

    def __init__(self, timezone: str = "Asia/Jerusalem", calendar_name: str = "Ensemble Schedule") -> None:
        """Initialize the iCalendar transformer.

        Args:
            timezone: IANA name of the zone the wall-clock times belong to.
            calendar_name: Display name written to X-WR-CALNAME.
        """
        self._calendar: Optional[Calendar] = None
        self._timezone = ZoneInfo(timezone)
        self._timezone_name = timezone
        self._calendar_name = calendar_name

    def _generate_uid(self, activity: Activity, first_date: date) -> str:
        """Generate a stable unique identifier for an activity.

        Args:
            activity: The activity being exported.
            first_date: Date of its first (or only) occurrence.

        Returns:
            Unique identifier string.
        """
        unique_string = (
            f"{activity.id}-{activity.group_id}-{first_date}-"
            f"{activity.interval.start}-{activity.interval.end}"
        )
        return hashlib.md5(unique_string.encode()).hexdigest() + f"@{self.UID_DOMAIN}"

    def _summary(self, activity: Activity) -> str:
        # Summary format: [lesson] Title
        return f"[{activity.kind.value}] {activity.display_title}"

    def transform(
        self,
        activities: Sequence[Activity],
        start_date: date,
        end_date: date
    ) -> Calendar:
        """Transform activities into iCalendar format.

        Dated activities become single events. Undated activities start on
        their first weekday on or after start_date and repeat weekly until
        end_date.

        Args:
            activities: Activities to export.
            start_date: First day of the exported period.
            end_date: Last day of the exported period.

        Returns:
            iCalendar Calendar object.
        """
        self._calendar = Calendar()
        self._calendar.add("prodid", "-//Ensemble Scheduler//ensemble-scheduler//EN")
        self._calendar.add("version", "2.0")
        self._calendar.add("calscale", "GREGORIAN")
        self._calendar.add("method", "PUBLISH")
        self._calendar.add("x-wr-calname", self._calendar_name)
        self._calendar.add("x-wr-timezone", self._timezone_name)

        skipped = 0
        for activity in activities:
            interval = activity.interval
            recurring = interval.date is None
            if recurring:
                first_date = first_occurrence(Weekday(interval.day), start_date)
            else:
                first_date = interval.date

            if first_date < start_date or first_date > end_date:
                skipped += 1
                continue

            start_datetime = datetime.combine(first_date, interval.start.to_time(), tzinfo=self._timezone)
            end_datetime = datetime.combine(first_date, interval.end.to_time(), tzinfo=self._timezone)

            ical_event = Event()
            ical_event.add("uid", self._generate_uid(activity, first_date))
            ical_event.add("dtstart", start_datetime)
            ical_event.add("dtend", end_datetime)
            ical_event.add("dtstamp", datetime.now(self._timezone))
            ical_event.add("summary", self._summary(activity))
            ical_event.add("categories", [activity.kind.value])

            if activity.location:
                ical_event.add("location", activity.location)

            if activity.supervisor_id:
                ical_event.add("description", activity.supervisor_id)

            if recurring:
                # RRULE UNTIL - the end time of the last possible occurrence
                until_datetime = datetime.combine(end_date, interval.end.to_time(), tzinfo=self._timezone)
                ical_event.add("rrule", vRecur({"freq": "weekly", "until": until_datetime}))

            self._calendar.add_component(ical_event)

        if skipped:
            logger.info(f"Skipped {skipped} activities outside {start_date}..{end_date}")
        return self._calendar

    def save(self, output_path: str) -> None:
        """Save the calendar to an .ics file.

        Args:
            output_path: Path to the output file.

        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        if self._calendar is None:
            raise RuntimeError("No calendar data. Call transform() first.")

        with open(output_path, "wb") as f:
            f.write(self._calendar.to_ical())
        logger.info(f"Calendar written to {output_path}")
