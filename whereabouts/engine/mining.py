"""
Weekly pattern mining.

Infers a representative weekly pattern from a quarter's dated slots by a
per-weekday majority vote on ``(location_type, time_start, time_end)``.

Slots are scanned in ascending date order and each triple remembers the
order it was first seen; when two triples have the same count the one
seen first wins, so the result is deterministic for a given set of slots.
"""

from __future__ import annotations

import datetime
from typing import Iterable, Optional, Protocol

from whereabouts.schemas.pattern import (DEFAULT_LOCATION_TYPE, DEFAULT_TIME_END, DEFAULT_TIME_START, DayOfWeek,
                                         DaySlotPattern, LocationType, WeeklyPattern, )

SlotKey = tuple[str, str, str]


class DatedSlot(Protocol):
    date: datetime.date
    location_type: LocationType | str
    time_start: str
    time_end: str


def _default_day() -> DaySlotPattern:
    return DaySlotPattern(location_type=DEFAULT_LOCATION_TYPE.value, time_start=DEFAULT_TIME_START,
                          time_end=DEFAULT_TIME_END)


def count_day_slots(slots: Iterable[DatedSlot]) -> dict[DayOfWeek, dict[SlotKey, int]]:
    """Occurrences of each slot triple per weekday, in first-seen order."""
    counts: dict[DayOfWeek, dict[SlotKey, int]] = {day: {} for day in DayOfWeek}
    for slot in sorted(slots, key=lambda s: s.date):
        key = (LocationType(slot.location_type).value, slot.time_start, slot.time_end)
        bucket = counts[DayOfWeek.from_date(slot.date)]
        bucket[key] = bucket.get(key, 0) + 1
    return counts


def extract_weekly_pattern(slots: Iterable[DatedSlot]) -> Optional[WeeklyPattern]:
    """Return the majority weekly pattern, or ``None`` when there are no slots.

    Weekdays without any slot default to ``home 06:00-07:00``.
    """
    slots = list(slots)
    if not slots:
        return None

    days: dict[str, DaySlotPattern] = {}
    for day, bucket in count_day_slots(slots).items():
        if not bucket:
            days[day.value] = _default_day()
            continue
        # max() keeps the first key among equal counts
        location_type, time_start, time_end = max(bucket, key=bucket.get)
        days[day.value] = DaySlotPattern(location_type=location_type, time_start=time_start, time_end=time_end)

    return WeeklyPattern(**days)
