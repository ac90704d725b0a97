"""
Weekly template database model.

A named, reusable weekly pattern.  The pattern itself is stored as JSON
and validated at the service layer.
"""

import datetime
from typing import Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from whereabouts.core.clock import utc_now


class Template(SQLModel, table=True):
    """Saved weekly pattern.  At most one default per athlete."""

    __tablename__ = "templates"

    id: Optional[int] = Field(default=None, primary_key=True)
    athlete_id: str = Field(nullable=False, max_length=128, index=True)
    name: str = Field(nullable=False, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)

    pattern: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False), )

    usage_count: int = Field(default=0, nullable=False)
    is_default: bool = Field(default=False, nullable=False)

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=utc_now)
    updated_at: datetime.datetime = Field(default_factory=utc_now)
