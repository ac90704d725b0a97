"""
Weekly template API schemas.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from whereabouts.schemas.pattern import WeeklyPattern


class TemplateCreate(BaseModel):
    """Schema for saving a named weekly pattern."""

    athlete_id: str = Field(..., min_length=1, max_length=128)
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    pattern: WeeklyPattern
    is_default: bool = False


class ApplyTemplateRequest(BaseModel):
    athlete_id: str = Field(..., min_length=1, max_length=128)
    quarter_id: int
    overwrite: bool = False


class TemplateResponse(BaseModel):
    id: int
    athlete_id: str
    name: str
    description: Optional[str]
    pattern: WeeklyPattern
    usage_count: int
    is_default: bool
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True
