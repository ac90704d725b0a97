"""
Weekly pattern schemas.

A weekly pattern declares, for each weekday, the single 60-minute slot and
location type an athlete can be found at.  :class:`DayOfWeek` is the one
weekday mapping shared by expansion, mining and validation.

Day patterns deliberately accept raw strings: malformed values must reach
the validation engine so they can be reported as structured issues rather
than rejected wholesale by the schema layer.
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Iterator, Optional

from pydantic import BaseModel, Field


class DayOfWeek(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def from_date(cls, date: datetime.date) -> DayOfWeek:
        """Weekday of *date* (``date.weekday()`` is 0 for Monday)."""
        return _DAYS_IN_ORDER[date.weekday()]

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def short_label(self) -> str:
        return self.label[:3]


_DAYS_IN_ORDER: list[DayOfWeek] = list(DayOfWeek)

WEEKDAYS: list[DayOfWeek] = _DAYS_IN_ORDER[:5]
WEEKEND: list[DayOfWeek] = _DAYS_IN_ORDER[5:]


class LocationType(str, Enum):
    HOME = "home"
    TRAINING = "training"
    GYM = "gym"


VALID_LOCATION_TYPES: list[str] = [lt.value for lt in LocationType]

DEFAULT_LOCATION_TYPE = LocationType.HOME
DEFAULT_TIME_START = "06:00"
DEFAULT_TIME_END = "07:00"


class DaySlotPattern(BaseModel):
    """One weekday's 60-minute slot."""

    location_type: Optional[str] = Field(None, description="home, training or gym")
    time_start: Optional[str] = Field(None, description="Slot start, HH:mm")
    time_end: Optional[str] = Field(None, description="Slot end, HH:mm (start + 60 minutes)")

    def key(self) -> tuple[Optional[str], Optional[str], Optional[str]]:
        return self.location_type, self.time_start, self.time_end


class WeeklyPattern(BaseModel):
    """A 7-day recurring schedule, one :class:`DaySlotPattern` per weekday."""

    monday: Optional[DaySlotPattern] = None
    tuesday: Optional[DaySlotPattern] = None
    wednesday: Optional[DaySlotPattern] = None
    thursday: Optional[DaySlotPattern] = None
    friday: Optional[DaySlotPattern] = None
    saturday: Optional[DaySlotPattern] = None
    sunday: Optional[DaySlotPattern] = None

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def for_day(self, day: DayOfWeek | str) -> Optional[DaySlotPattern]:
        return getattr(self, DayOfWeek(day).value)

    def for_date(self, date: datetime.date) -> Optional[DaySlotPattern]:
        return self.for_day(DayOfWeek.from_date(date))

    def days(self) -> Iterator[tuple[DayOfWeek, Optional[DaySlotPattern]]]:
        """Yield ``(day, pattern)`` pairs Monday through Sunday."""
        for day in DayOfWeek:
            yield day, self.for_day(day)

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def uniform(cls, location_type: LocationType | str = DEFAULT_LOCATION_TYPE, time_start: str = DEFAULT_TIME_START,
                time_end: str = DEFAULT_TIME_END, ) -> WeeklyPattern:
        """Return a pattern with the same slot on every day."""
        location = LocationType(location_type).value
        return cls(**{day.value: DaySlotPattern(location_type=location, time_start=time_start, time_end=time_end)
                      for day in DayOfWeek})

    def with_day_copied(self, source: DayOfWeek | str, targets: list[DayOfWeek | str]) -> WeeklyPattern:
        """Return a copy where every day in *targets* repeats *source*."""
        source_pattern = self.for_day(source)
        if source_pattern is None:
            return self
        update = {DayOfWeek(day).value: source_pattern.model_copy() for day in targets}
        return self.model_copy(update=update)

    # ------------------------------------------------------------------
    # Introspection helpers
    # ------------------------------------------------------------------

    def location_counts(self) -> dict[str, int]:
        """Number of days assigned to each location type."""
        counts = {lt: 0 for lt in VALID_LOCATION_TYPES}
        for _, pattern in self.days():
            if pattern and pattern.location_type in counts:
                counts[pattern.location_type] += 1
        return counts

    def is_uniform(self) -> bool:
        """True when all seven days use the same location type."""
        first = self.monday.location_type if self.monday else None
        if not first:
            return False
        return all(p is not None and p.location_type == first for _, p in self.days())

    def has_uniform_weekdays(self) -> bool:
        """True when Monday to Friday share location and times."""
        if self.monday is None:
            return False
        return all(self.for_day(d) is not None and self.for_day(d).key() == self.monday.key() for d in WEEKDAYS)

    def has_uniform_weekends(self) -> bool:
        if self.saturday is None or self.sunday is None:
            return False
        return self.saturday.key() == self.sunday.key()


class LocationRef(BaseModel):
    """Concrete location behind a location type."""

    location_type: LocationType
    location_id: Optional[str] = None
    name: Optional[str] = None
    address: Optional[str] = None


class LocationSchedule(BaseModel):
    """Declared open hours of a location, per weekday (HH:mm)."""

    monday_start: Optional[str] = None
    monday_end: Optional[str] = None
    tuesday_start: Optional[str] = None
    tuesday_end: Optional[str] = None
    wednesday_start: Optional[str] = None
    wednesday_end: Optional[str] = None
    thursday_start: Optional[str] = None
    thursday_end: Optional[str] = None
    friday_start: Optional[str] = None
    friday_end: Optional[str] = None
    saturday_start: Optional[str] = None
    saturday_end: Optional[str] = None
    sunday_start: Optional[str] = None
    sunday_end: Optional[str] = None

    def hours_for(self, day: DayOfWeek | str) -> tuple[Optional[str], Optional[str]]:
        day = DayOfWeek(day).value
        return getattr(self, f"{day}_start"), getattr(self, f"{day}_end")


class ValidatePatternRequest(BaseModel):
    """Pattern to check, optionally against declared location hours."""

    pattern: WeeklyPattern
    locations: Optional[dict[LocationType, LocationSchedule]] = None
