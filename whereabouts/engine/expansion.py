"""
Weekly pattern expansion.

Projects a weekly pattern onto every calendar date of a range, producing
exactly one :class:`DailySlotAssignment` per date in ascending order.

Competition days
----------------

A date inside any competition's inclusive window takes the competition's
details and its location type is forced to ``COMPETITION_DAY_LOCATION``
regardless of the weekday pattern.  Whether *training* is the intended
compliance semantics for competition days is an open policy question for
the compliance owner; the behaviour itself is fixed and covered by tests.
"""

from __future__ import annotations

import datetime
from typing import Mapping, Optional, Sequence

from whereabouts.engine.quarter_calendar import iter_dates
from whereabouts.schemas.competition import Competition
from whereabouts.schemas.daily_slot import DailySlotAssignment
from whereabouts.schemas.pattern import DayOfWeek, LocationRef, LocationType, WeeklyPattern

COMPETITION_DAY_LOCATION = LocationType.TRAINING


def find_competition(date: datetime.date, competitions: Sequence[Competition]) -> Optional[Competition]:
    """First competition (in input order) whose window contains *date*."""
    for competition in competitions:
        if competition.covers(date):
            return competition
    return None


def _expand_day(date: datetime.date, pattern: WeeklyPattern, competitions: Sequence[Competition],
                locations: Optional[Mapping[LocationType, LocationRef]], ) -> DailySlotAssignment:
    day = DayOfWeek.from_date(date)
    day_pattern = pattern.for_day(day)
    if day_pattern is None:
        raise ValueError(f"Weekly pattern has no slot for {day.label}")

    location_type = LocationType(day_pattern.location_type)
    competition = find_competition(date, competitions)
    ref = locations.get(location_type) if locations else None

    if competition is not None:
        # The pattern's own address is kept; only the displayed name becomes the venue
        return DailySlotAssignment(date=date, location_type=COMPETITION_DAY_LOCATION, time_start=day_pattern.time_start,
                                   time_end=day_pattern.time_end, is_competition=True, competition_id=competition.id,
                                   notes=f"Competition: {competition.name}",
                                   location_name=competition.location_address,
                                   location_address=ref.address if ref else None, )

    return DailySlotAssignment(date=date, location_type=location_type, time_start=day_pattern.time_start,
                               time_end=day_pattern.time_end, location_id=ref.location_id if ref else None,
                               location_name=ref.name if ref else None,
                               location_address=ref.address if ref else None, )


def expand_pattern(pattern: WeeklyPattern, start_date: datetime.date, end_date: datetime.date,
                   competitions: Sequence[Competition] = (),
                   locations: Optional[Mapping[LocationType, LocationRef]] = None, ) -> list[DailySlotAssignment]:
    """Expand *pattern* over ``[start_date, end_date]``.

    The pattern is expected to have passed validation; a missing or
    malformed day raises :class:`ValueError`.  Inputs are never mutated.

    Args:
        pattern: Weekly pattern with all seven days set.
        start_date: First date (inclusive).
        end_date: Last date (inclusive).  An empty list is returned when
            it precedes *start_date*.
        competitions: Competition windows overriding the pattern.
        locations: Optional concrete location per location type, copied
            onto non-competition days.

    Returns:
        One assignment per date, strictly ascending.
    """
    return [_expand_day(date, pattern, competitions, locations) for date in iter_dates(start_date, end_date)]
