"""SQLModel database models."""

from whereabouts.models.quarter import Quarter
from whereabouts.models.daily_slot import DailySlot
from whereabouts.models.template import Template

__all__ = [
    "Quarter",
    "DailySlot",
    "Template",
]
