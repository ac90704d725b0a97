"""
Base database configuration.

Import all models here so Alembic can detect them for migrations.
"""

# Import all models for Alembic autogenerate
from whereabouts.models.quarter import Quarter  # noqa: F401
from whereabouts.models.daily_slot import DailySlot  # noqa: F401
from whereabouts.models.template import Template  # noqa: F401
