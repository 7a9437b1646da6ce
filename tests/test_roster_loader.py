"""Tests for loading roster snapshots from JSON."""

import json
from datetime import date

import pytest

from roster import RosterError, RosterLoader, parse_roster
from scheduling import ActivityKind, FormatError, InvalidIntervalError, ResourceRole, Weekday

ROSTER = {
    "activities": [
        {
            "id": "choir-1",
            "group_id": "choir",
            "date": "2024-03-11",
            "start": "19:30",
            "end": "21:00",
            "location": "Hall A",
            "supervisor_id": "conductor-2",
            "participant_ids": ["s1", "s9"],
        },
        {
            "id": "lesson-7",
            "group_id": "piano-s3",
            "day": "wednesday",
            "start": "14:00",
            "end": "14:45",
            "location": "Room 3",
            "supervisor_id": "teacher-1",
            "participant_ids": ["s3"],
            "kind": "lesson",
            "title": "Piano lesson",
        },
    ],
    "windows": [
        {"resource_id": "teacher-1", "day": "wednesday", "start": "13:00", "end": "17:00", "location": "Room 3"},
        {"resource_id": "teacher-2", "day": 4, "start": "09:00", "end": "11:00"},
    ],
    "requests": [
        {
            "group_id": "orchestra",
            "day": "monday",
            "start": "19:00",
            "end": "21:00",
            "from": "2024-03-04",
            "to": "2024-03-25",
            "exclusions": ["2024-03-18"],
            "location": "Hall A",
            "supervisor_id": "conductor-1",
            "participant_ids": ["s1", "s2"],
        }
    ],
}


class TestParseRoster:
    def test_parses_all_sections(self):
        roster = parse_roster(ROSTER)
        assert len(roster.activities) == 2
        assert len(roster.windows) == 2
        assert len(roster.requests) == 1

    def test_dated_activity(self):
        activity = parse_roster(ROSTER).activities[0]
        assert activity.interval.date == date(2024, 3, 11)
        assert activity.interval.day is Weekday.MONDAY
        assert activity.participant_ids == frozenset({"s1", "s9"})
        assert activity.kind is ActivityKind.REHEARSAL

    def test_weekly_activity(self):
        activity = parse_roster(ROSTER).activities[1]
        assert activity.interval.date is None
        assert activity.interval.day is Weekday.WEDNESDAY
        assert activity.kind is ActivityKind.LESSON
        assert activity.title == "Piano lesson"

    def test_request(self):
        request = parse_roster(ROSTER).requests[0]
        assert request.day is Weekday.MONDAY
        assert request.date_from == date(2024, 3, 4)
        assert request.exclusions == frozenset({date(2024, 3, 18)})

    def test_windows_for_and_occupied_for(self):
        roster = parse_roster(ROSTER)
        assert [str(w.start) for w in roster.windows_for("teacher-1")] == ["13:00"]
        assert roster.windows_for("teacher-2")[0].day is Weekday.FRIDAY
        assert roster.occupied_for("teacher-1") == [roster.activities[1].interval]
        assert roster.occupied_for("s1") == [roster.activities[0].interval]
        assert roster.occupied_for("teacher-1", ResourceRole.PARTICIPANT) == []
        assert roster.occupied_for("s1", ResourceRole.PARTICIPANT) == [roster.activities[0].interval]

    def test_empty_document(self):
        roster = parse_roster({})
        assert roster.activities == ()
        assert roster.windows == ()

    def test_missing_field(self):
        with pytest.raises(RosterError, match=r"activities\[0\]: missing required field 'group_id'"):
            parse_roster({"activities": [{"id": "x", "date": "2024-03-04", "start": "10:00", "end": "11:00"}]})

    def test_missing_date_and_day(self):
        with pytest.raises(RosterError, match="either 'date' or 'day'"):
            parse_roster({"activities": [{"id": "x", "group_id": "g", "start": "10:00", "end": "11:00"}]})

    def test_malformed_time(self):
        with pytest.raises(FormatError):
            parse_roster({"windows": [{"day": "monday", "start": "9:00", "end": "10:00"}]})

    def test_malformed_date(self):
        record = dict(ROSTER["requests"][0], **{"from": "04/03/2024"})
        with pytest.raises(FormatError):
            parse_roster({"requests": [record]})

    def test_inverted_interval(self):
        with pytest.raises(InvalidIntervalError):
            parse_roster({"windows": [{"day": "monday", "start": "11:00", "end": "10:00"}]})

    def test_day_contradicting_date(self):
        record = dict(ROSTER["activities"][0], day="tuesday")
        with pytest.raises(InvalidIntervalError):
            parse_roster({"activities": [record]})

    def test_unknown_kind(self):
        record = dict(ROSTER["activities"][0], kind="concert")
        with pytest.raises(RosterError, match="unknown kind 'concert'"):
            parse_roster({"activities": [record]})

    def test_section_must_be_list(self):
        with pytest.raises(RosterError):
            parse_roster({"activities": {"id": "x"}})

    def test_record_must_be_object(self):
        with pytest.raises(RosterError, match=r"windows\[0\]"):
            parse_roster({"windows": ["monday 09:00-10:00"]})

    def test_document_must_be_object(self):
        with pytest.raises(RosterError):
            parse_roster([])


class TestRosterLoader:
    def test_load_file(self, tmp_path):
        path = tmp_path / "roster.json"
        path.write_text(json.dumps(ROSTER), encoding="utf-8")
        roster = RosterLoader(path).load()
        assert len(roster.activities) == 2

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "roster.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(RosterError, match="invalid JSON"):
            RosterLoader(str(path)).load()

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            RosterLoader(tmp_path / "missing.json").load()
