"""Whereabouts core algorithms: quarter calendar, validation, expansion and mining."""

from whereabouts.engine.expansion import expand_pattern
from whereabouts.engine.mining import extract_weekly_pattern
from whereabouts.engine.quarter_calendar import calculate_quarter_dates
from whereabouts.engine.validation import validate_weekly_pattern

__all__ = ["calculate_quarter_dates", "expand_pattern", "extract_weekly_pattern", "validate_weekly_pattern"]
