"""
Daily slot schemas.

:class:`DailySlotAssignment` is what pattern expansion produces for one
calendar date; the persisted row adds quarter/athlete ownership, the
completion flag and the modification counter.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from whereabouts.schemas.pattern import LocationType


class DailySlotAssignment(BaseModel):
    """One dated 60-minute obligation produced by expansion."""

    date: datetime.date
    location_type: LocationType
    time_start: str
    time_end: str
    is_competition: bool = False
    competition_id: Optional[str] = None
    notes: Optional[str] = None
    location_id: Optional[str] = None
    location_name: Optional[str] = None
    location_address: Optional[str] = None


class DailySlotWrite(BaseModel):
    """Body of a slot write; the date comes from the URL."""

    location_type: LocationType
    time_start: str = Field(..., description="HH:mm")
    time_end: str = Field(..., description="HH:mm, exactly 60 minutes after time_start")
    notes: Optional[str] = Field(None, max_length=1000)
    location_id: Optional[str] = None
    location_name: Optional[str] = None
    location_address: Optional[str] = None


class DailySlotUpsert(DailySlotWrite):
    """Schema for creating or replacing the slot of one date."""

    date: datetime.date


class DailySlotUpdate(BaseModel):
    """Schema for a partial slot update."""

    location_type: Optional[LocationType] = None
    time_start: Optional[str] = None
    time_end: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=1000)
    is_complete: Optional[bool] = None
    location_id: Optional[str] = None
    location_name: Optional[str] = None
    location_address: Optional[str] = None


class DailySlotResponse(BaseModel):
    id: int
    quarter_id: int
    athlete_id: str
    date: datetime.date
    location_type: LocationType
    time_start: str
    time_end: str
    is_competition: bool
    competition_id: Optional[str]
    notes: Optional[str]
    location_id: Optional[str]
    location_name: Optional[str]
    location_address: Optional[str]
    is_complete: bool
    modification_count: int
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True
