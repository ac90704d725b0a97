"""Tests for weekly pattern mining."""

import datetime
from types import SimpleNamespace

from whereabouts.engine.expansion import expand_pattern
from whereabouts.engine.mining import count_day_slots, extract_weekly_pattern
from whereabouts.schemas.pattern import DayOfWeek


def _slot(date: datetime.date, location_type: str, start: str, end: str) -> SimpleNamespace:
    return SimpleNamespace(date=date, location_type=location_type, time_start=start, time_end=end)


def _mondays(count: int, first: datetime.date = datetime.date(2024, 1, 1)) -> list[datetime.date]:
    return [first + datetime.timedelta(weeks=i) for i in range(count)]


class TestExtractWeeklyPattern:
    def test_no_slots_returns_none(self):
        assert extract_weekly_pattern([]) is None

    def test_majority_wins(self):
        mondays = _mondays(13)
        slots = ([_slot(d, "gym", "18:00", "19:00") for d in mondays[:3]] +
                 [_slot(d, "training", "07:00", "08:00") for d in mondays[3:]])
        monday = extract_weekly_pattern(slots).monday
        assert monday.key() == ("training", "07:00", "08:00")

    def test_tie_goes_to_first_seen(self):
        mondays = _mondays(4)
        slots = [_slot(mondays[0], "gym", "18:00", "19:00"), _slot(mondays[1], "home", "06:00", "07:00"),
                 _slot(mondays[2], "home", "06:00", "07:00"), _slot(mondays[3], "gym", "18:00", "19:00"), ]
        assert extract_weekly_pattern(slots).monday.location_type == "gym"

    def test_tie_ignores_input_order(self):
        mondays = _mondays(2)
        slots = [_slot(mondays[1], "home", "06:00", "07:00"), _slot(mondays[0], "gym", "18:00", "19:00")]
        assert extract_weekly_pattern(slots).monday.location_type == "gym"

    def test_days_without_slots_default_to_home(self):
        pattern = extract_weekly_pattern([_slot(datetime.date(2024, 1, 3), "gym", "12:00", "13:00")])
        assert pattern.wednesday.key() == ("gym", "12:00", "13:00")
        for day in DayOfWeek:
            if day is not DayOfWeek.WEDNESDAY:
                assert pattern.for_day(day).key() == ("home", "06:00", "07:00")

    def test_round_trip_of_expanded_pattern(self, weekly_pattern):
        slots = expand_pattern(weekly_pattern, datetime.date(2024, 4, 1), datetime.date(2024, 6, 30))
        assert extract_weekly_pattern(slots) == weekly_pattern


class TestCountDaySlots:
    def test_counts_per_weekday(self):
        slots = [_slot(d, "home", "06:00", "07:00") for d in _mondays(3)]
        counts = count_day_slots(slots)
        assert counts[DayOfWeek.MONDAY] == {("home", "06:00", "07:00"): 3}
        assert counts[DayOfWeek.TUESDAY] == {}
