"""
Whereabouts quarter database model.

One row per (athlete, year, quarter).  The completion columns are
maintained by :class:`~whereabouts.services.completion_tracker.CompletionTracker`
after every slot mutation.
"""

import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from whereabouts.core.clock import utc_now

from whereabouts.schemas.quarter import QuarterName, QuarterStatus


class Quarter(SQLModel, table=True):
    """A 3-month whereabouts filing period for one athlete."""

    __tablename__ = "quarters"
    __table_args__ = (UniqueConstraint("athlete_id", "year", "quarter", name="uq_quarter_athlete_year_quarter", ),)

    id: Optional[int] = Field(default=None, primary_key=True)
    athlete_id: str = Field(nullable=False, max_length=128, index=True)
    year: int = Field(nullable=False)
    quarter: QuarterName = Field(nullable=False)

    # Calendar (see whereabouts.engine.quarter_calendar)
    start_date: datetime.date = Field(nullable=False)
    end_date: datetime.date = Field(nullable=False)
    filing_deadline: datetime.date = Field(nullable=False)
    total_days: int = Field(nullable=False)

    # Completion summary
    status: QuarterStatus = Field(default=QuarterStatus.DRAFT, nullable=False)
    completion_percentage: int = Field(default=0, nullable=False)
    days_completed: int = Field(default=0, nullable=False)

    copied_from_quarter_id: Optional[int] = Field(default=None, foreign_key="quarters.id")
    submitted_at: Optional[datetime.datetime] = Field(default=None)
    locked_at: Optional[datetime.datetime] = Field(default=None)

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=utc_now)
    updated_at: datetime.datetime = Field(default_factory=utc_now)
