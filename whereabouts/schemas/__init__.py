"""Pydantic schemas for request/response validation."""

from whereabouts.schemas.pattern import (
    DayOfWeek,
    LocationType,
    DaySlotPattern,
    WeeklyPattern,
    LocationRef,
    LocationSchedule,
    ValidatePatternRequest,
)
from whereabouts.schemas.competition import Competition
from whereabouts.schemas.validation import ValidationIssue, PatternValidationResult, LocationAvailability, SlotTimeCheck
from whereabouts.schemas.quarter import (
    QuarterName,
    QuarterStatus,
    QuarterDates,
    QuarterCreate,
    QuarterWithPatternCreate,
    ApplyPatternRequest,
    CopyPatternRequest,
    QuarterResponse,
)
from whereabouts.schemas.daily_slot import DailySlotAssignment, DailySlotWrite, DailySlotUpsert, DailySlotUpdate, DailySlotResponse
from whereabouts.schemas.template import TemplateCreate, ApplyTemplateRequest, TemplateResponse
from whereabouts.schemas.results import BatchWriteResult, ApplyPatternResult, QuarterWithSlots, SlotStats, ErrorInfo

__all__ = [
    "DayOfWeek",
    "LocationType",
    "DaySlotPattern",
    "WeeklyPattern",
    "LocationRef",
    "LocationSchedule",
    "ValidatePatternRequest",
    "Competition",
    "ValidationIssue",
    "PatternValidationResult",
    "LocationAvailability",
    "SlotTimeCheck",
    "QuarterName",
    "QuarterStatus",
    "QuarterDates",
    "QuarterCreate",
    "QuarterWithPatternCreate",
    "ApplyPatternRequest",
    "CopyPatternRequest",
    "QuarterResponse",
    "DailySlotAssignment",
    "DailySlotWrite",
    "DailySlotUpsert",
    "DailySlotUpdate",
    "DailySlotResponse",
    "TemplateCreate",
    "ApplyTemplateRequest",
    "TemplateResponse",
    "BatchWriteResult",
    "ApplyPatternResult",
    "QuarterWithSlots",
    "SlotStats",
    "ErrorInfo",
]
