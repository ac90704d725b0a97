"""
Daily slot database model.

Stores the concrete 60-minute obligation for one calendar date of a
quarter.  The location is kept as an explicit ``location_type`` plus an
optional concrete reference, never encoded into an identifier string.
"""

import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from whereabouts.core.clock import utc_now

from whereabouts.schemas.pattern import LocationType


class DailySlot(SQLModel, table=True):
    """One dated slot.  ``date`` is unique within a quarter."""

    __tablename__ = "daily_slots"
    __table_args__ = (UniqueConstraint("quarter_id", "date", name="uq_daily_slot_quarter_date", ),)

    id: Optional[int] = Field(default=None, primary_key=True)
    quarter_id: int = Field(foreign_key="quarters.id", nullable=False, index=True)
    athlete_id: str = Field(nullable=False, max_length=128, index=True)
    date: datetime.date = Field(nullable=False, index=True)

    # 60-minute slot
    location_type: LocationType = Field(nullable=False)
    time_start: str = Field(nullable=False, max_length=5)
    time_end: str = Field(nullable=False, max_length=5)

    # Concrete location reference
    location_id: Optional[str] = Field(default=None, max_length=128)
    location_name: Optional[str] = Field(default=None, max_length=255)
    location_address: Optional[str] = Field(default=None, max_length=500)

    # Competition override
    is_competition: bool = Field(default=False, nullable=False)
    competition_id: Optional[str] = Field(default=None, max_length=128)
    notes: Optional[str] = Field(default=None, max_length=1000)

    is_complete: bool = Field(default=True, nullable=False)
    modification_count: int = Field(default=0, nullable=False)

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=utc_now)
    updated_at: datetime.datetime = Field(default_factory=utc_now)
