"""
Quarter API schemas.
"""

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from whereabouts.schemas.competition import Competition
from whereabouts.schemas.pattern import WeeklyPattern


class QuarterName(str, Enum):
    Q1 = "Q1"
    Q2 = "Q2"
    Q3 = "Q3"
    Q4 = "Q4"


class QuarterStatus(str, Enum):
    DRAFT = "draft"
    INCOMPLETE = "incomplete"
    COMPLETE = "complete"
    SUBMITTED = "submitted"
    LOCKED = "locked"


# Statuses the completion tracker never changes
TERMINAL_STATUSES = frozenset({QuarterStatus.SUBMITTED, QuarterStatus.LOCKED})


class QuarterDates(BaseModel):
    """Calendar facts for a (year, quarter)."""

    start_date: datetime.date
    end_date: datetime.date
    filing_deadline: datetime.date
    total_days: int


class QuarterCreate(BaseModel):
    athlete_id: str = Field(..., min_length=1, max_length=128)
    year: int = Field(..., ge=2000, le=2100)
    quarter: QuarterName


class QuarterWithPatternCreate(QuarterCreate):
    """Schema for creating a quarter and expanding a pattern into it."""

    pattern: WeeklyPattern
    competitions: list[Competition] = []


class ApplyPatternRequest(BaseModel):
    athlete_id: str = Field(..., min_length=1, max_length=128)
    pattern: WeeklyPattern
    overwrite: bool = False
    competitions: list[Competition] = []


class CopyPatternRequest(BaseModel):
    athlete_id: str = Field(..., min_length=1, max_length=128)
    target_year: int = Field(..., ge=2000, le=2100)
    target_quarter: QuarterName


class QuarterResponse(BaseModel):
    """Schema for a quarter in API responses."""

    id: int
    athlete_id: str
    year: int
    quarter: QuarterName
    start_date: datetime.date
    end_date: datetime.date
    filing_deadline: datetime.date
    status: QuarterStatus
    completion_percentage: int
    days_completed: int
    total_days: int
    copied_from_quarter_id: Optional[int]
    submitted_at: Optional[datetime.datetime]
    locked_at: Optional[datetime.datetime]
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True
