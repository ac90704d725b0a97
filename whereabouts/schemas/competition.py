"""
Competition schema.

Competitions are owned elsewhere; the engine only reads them as an
override input when expanding a pattern.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class Competition(BaseModel):
    """A competition window, inclusive on both ends."""

    id: str
    name: str
    start_date: datetime.date
    end_date: datetime.date
    location_address: Optional[str] = Field(None, max_length=500)

    @model_validator(mode="after")
    def _check_window(self):
        if self.end_date < self.start_date:
            raise ValueError(f"Competition '{self.name}' ends ({self.end_date}) before it starts ({self.start_date})")
        return self

    def covers(self, date: datetime.date) -> bool:
        return self.start_date <= date <= self.end_date
