"""Tests for availability slot synthesis."""

from datetime import date

import pytest

from scheduling import (
    AvailabilityWindow,
    Interval,
    InvalidDurationError,
    ResourceRole,
    TimeOfDay,
    Weekday,
    back_to_back_runs,
    choose,
    occupied_intervals,
    order_by_preference,
    suggest_alternatives,
    synthesize,
)


def window(day=Weekday.MONDAY, start="09:00", end="10:00", location="Room 3"):
    return AvailabilityWindow(day, TimeOfDay.parse(start), TimeOfDay.parse(end), location, "teacher-1")


def starts(slots):
    return [str(slot.start) for slot in slots]


class TestSynthesize:
    def test_fills_window_at_quarter_hours(self):
        slots = synthesize([window()], [], [], [30])
        assert starts(slots) == ["09:00", "09:15", "09:30"]
        assert [str(slot.end) for slot in slots] == ["09:30", "09:45", "10:00"]
        assert all(slot.duration_minutes == 30 for slot in slots)
        assert all(slot.location == "Room 3" for slot in slots)

    def test_occupied_interval_removes_overlapping_candidates(self):
        occupied = [Interval.weekly("monday", "09:20", "09:50")]
        assert synthesize([window()], occupied, [], [30]) == []

    def test_back_to_back_booking_keeps_candidate(self):
        occupied = [Interval.weekly("monday", "08:00", "09:00"), Interval.weekly("monday", "10:00", "11:00")]
        assert starts(synthesize([window()], occupied, [], [30])) == ["09:00", "09:15", "09:30"]

    def test_already_chosen_blocks_like_occupied(self):
        chosen = [Interval.weekly("monday", "09:00", "09:30")]
        assert starts(synthesize([window()], [], chosen, [30])) == ["09:30"]

    def test_other_weekday_does_not_block(self):
        occupied = [Interval.weekly("tuesday", "09:00", "10:00")]
        assert len(synthesize([window()], occupied, [], [30])) == 3

    def test_dated_booking_blocks_its_weekday(self):
        occupied = [Interval.on(date(2024, 3, 4), "09:00", "09:30")]
        assert starts(synthesize([window()], occupied, [], [30])) == ["09:30"]

    def test_durations_not_deduplicated(self):
        slots = synthesize([window()], [], [], [30, 45])
        assert [(str(s.start), s.duration_minutes) for s in slots] == [
            ("09:00", 30),
            ("09:15", 30),
            ("09:30", 30),
            ("09:00", 45),
            ("09:15", 45),
        ]

    def test_window_shorter_than_duration(self):
        assert synthesize([window(end="09:30")], [], [], [45, 60]) == []

    def test_multiple_windows_in_order(self):
        windows = [window(), window(day=Weekday.WEDNESDAY, start="14:00", end="15:00")]
        slots = synthesize(windows, [], [], [60])
        assert [(s.day, str(s.start)) for s in slots] == [(Weekday.MONDAY, "09:00"), (Weekday.WEDNESDAY, "14:00")]

    def test_custom_stride(self):
        assert starts(synthesize([window()], [], [], [30], stride=30)) == ["09:00", "09:30"]

    def test_window_ending_at_last_minute(self):
        slots = synthesize([window(start="23:00", end="23:59")], [], [], [30])
        assert starts(slots) == ["23:00", "23:15"]

    def test_inputs_not_mutated(self):
        occupied = [Interval.weekly("monday", "09:00", "09:30")]
        chosen = [Interval.weekly("monday", "09:30", "09:45")]
        synthesize([window()], occupied, chosen, [30])
        assert occupied == [Interval.weekly("monday", "09:00", "09:30")]
        assert chosen == [Interval.weekly("monday", "09:30", "09:45")]

    @pytest.mark.parametrize("durations", [[0], [30, -15]])
    def test_invalid_duration(self, durations):
        with pytest.raises(InvalidDurationError):
            synthesize([window()], [], [], durations)

    def test_invalid_stride(self):
        with pytest.raises(InvalidDurationError):
            synthesize([window()], [], [], [30], stride=0)


class TestChoose:
    def test_choose_then_resynthesize(self):
        first = synthesize([window()], [], [], [30])[0]
        chosen = choose(first)
        assert chosen == (first.interval,)
        assert starts(synthesize([window()], [], chosen, [30])) == ["09:30"]

    def test_choose_keeps_previous_choices(self):
        previous = (Interval.weekly("friday", "10:00", "10:30"),)
        slot = synthesize([window()], [], [], [30])[-1]
        assert choose(slot, previous) == previous + (slot.interval,)


class TestOccupiedIntervals:
    def test_selects_by_supervisor_location_and_participant(self, make_activity):
        activities = [
            make_activity(id="a", supervisor_id="teacher-1", location="Hall A"),
            make_activity(id="b", supervisor_id="teacher-2", location="Room 3", start="10:00", end="11:00"),
            make_activity(id="c", supervisor_id="teacher-2", location="Hall B", participants=("student-1",)),
            make_activity(id="d", supervisor_id="teacher-3", location="Hall C", start="12:00", end="13:00"),
        ]
        assert occupied_intervals(activities, "teacher-1") == [activities[0].interval]
        assert occupied_intervals(activities, "Room 3") == [activities[1].interval]
        assert occupied_intervals(activities, "student-1") == [activities[2].interval]
        assert occupied_intervals(activities, "nobody") == []

    def test_role_limits_matching(self, make_activity):
        activities = [
            make_activity(id="room", supervisor_id="teacher-2", location="dana"),
            make_activity(id="lesson", supervisor_id="dana", location="Room 3", start="10:00", end="11:00"),
            make_activity(id="ensemble", supervisor_id="teacher-2", location="Hall B", participants=("dana",)),
        ]
        assert len(occupied_intervals(activities, "dana")) == 3
        assert occupied_intervals(activities, "dana", ResourceRole.LOCATION) == [activities[0].interval]
        assert occupied_intervals(activities, "dana", ResourceRole.SUPERVISOR) == [activities[1].interval]
        assert occupied_intervals(activities, "dana", "participant") == [activities[2].interval]


class TestOrderByPreference:
    def test_preferred_starts_first_in_given_order(self):
        slots = synthesize([window()], [], [], [30])
        ordered = order_by_preference(slots, ["09:30", "09:15"])
        assert starts(ordered) == ["09:30", "09:15", "09:00"]

    def test_no_preferences_keeps_order(self):
        slots = synthesize([window()], [], [], [30])
        assert order_by_preference(slots) == slots


class TestSuggestAlternatives:
    def test_offers_free_slots_of_same_length(self, make_activity):
        conflicted = make_activity(id="lesson", start="09:00", end="09:30")
        windows = [window(), window(day=Weekday.TUESDAY, start="16:00", end="17:00")]
        occupied = [Interval.on(date(2024, 3, 4), "09:00", "09:30")]
        suggestions = suggest_alternatives(conflicted, windows, occupied)
        assert [str(slot) for slot in suggestions] == [
            "Monday 09:30-10:00 (30 min)",
            "Tuesday 16:00-16:30 (30 min)",
            "Tuesday 16:15-16:45 (30 min)",
        ]

    def test_never_offers_current_time(self, make_activity):
        conflicted = make_activity(id="lesson", start="09:00", end="09:30")
        suggestions = suggest_alternatives(conflicted, [window()], [], limit=5)
        assert starts(suggestions) == ["09:15", "09:30"]

    def test_preferred_times_and_limit(self, make_activity):
        conflicted = make_activity(id="lesson", start="09:00", end="09:30")
        windows = [window(), window(day=Weekday.TUESDAY, start="16:00", end="17:00")]
        suggestions = suggest_alternatives(conflicted, windows, [], preferred_times=["16:30"], limit=2)
        assert [(slot.day, str(slot.start)) for slot in suggestions] == [
            (Weekday.TUESDAY, "16:30"),
            (Weekday.MONDAY, "09:15"),
        ]

    def test_nothing_fits(self, make_activity):
        conflicted = make_activity(id="rehearsal", start="19:00", end="21:00")
        assert suggest_alternatives(conflicted, [window()], []) == []


class TestBackToBackRuns:
    def test_window_cut_into_consecutive_lessons(self):
        runs = back_to_back_runs([window(start="14:00", end="16:30")], [], duration=45)
        assert len(runs) == 1
        assert starts(runs[0]) == ["14:00", "14:45", "15:30"]
        assert all(later.start == earlier.end for earlier, later in zip(runs[0], runs[0][1:]))

    def test_booking_splits_run(self):
        occupied = [Interval.weekly("monday", "15:00", "15:30")]
        runs = back_to_back_runs([window(start="13:00", end="17:00")], occupied, duration=30)
        assert [starts(run) for run in runs] == [
            ["13:00", "13:30", "14:00", "14:30"],
            ["15:30", "16:00", "16:30"],
        ]

    def test_single_free_lesson_is_not_a_run(self):
        occupied = [Interval.weekly("monday", "09:45", "10:30")]
        assert back_to_back_runs([window(start="09:00", end="10:30")], occupied, duration=45) == []

    def test_invalid_duration(self):
        with pytest.raises(InvalidDurationError):
            back_to_back_runs([window()], [], duration=0)
