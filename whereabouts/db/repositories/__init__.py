"""Database repositories."""

from whereabouts.db.repositories.quarter import QuarterRepository
from whereabouts.db.repositories.daily_slot import DailySlotRepository
from whereabouts.db.repositories.template import TemplateRepository

__all__ = [
    "QuarterRepository",
    "DailySlotRepository",
    "TemplateRepository",
]
