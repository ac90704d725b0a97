"""
Operation result schemas.

Every HTTP response carries ``success`` and, on failure, an ``error``
object so clients can branch without inspecting status codes.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from whereabouts.schemas.daily_slot import DailySlotResponse
from whereabouts.schemas.pattern import WeeklyPattern
from whereabouts.schemas.quarter import QuarterDates, QuarterResponse
from whereabouts.schemas.template import TemplateResponse
from whereabouts.schemas.validation import PatternValidationResult


class BatchWriteResult(BaseModel):
    """Outcome of a chunked write.

    ``committed_count`` counts items in chunks that committed before the
    first failure; ``failed_at_chunk`` is the 1-based index of the chunk
    that failed, or ``None`` when every chunk committed.
    """

    committed_count: int = 0
    failed_at_chunk: Optional[int] = None
    error: Optional[str] = None
    chunk_sizes: list[int] = Field(default_factory=list, description="Sizes of the committed chunks, in order")

    @property
    def succeeded(self) -> bool:
        return self.failed_at_chunk is None


class ApplyPatternResult(BaseModel):
    slots_created: int = 0
    slots_updated: int = 0


class QuarterWithSlots(BaseModel):
    quarter: QuarterResponse
    slots_created: int


class SlotStats(BaseModel):
    completed_days: int
    completion_percentage: int
    missing_days: int
    competition_days: int
    location_breakdown: dict[str, int]


# ======================================================================
# Response envelopes
# ======================================================================


class ErrorInfo(BaseModel):
    code: str
    message: str
    details: dict[str, Any] = {}


class OperationResult(BaseModel):
    success: bool = True
    error: Optional[ErrorInfo] = None


class QuarterResult(OperationResult):
    quarter: QuarterResponse


class QuartersResult(OperationResult):
    quarters: list[QuarterResponse]


class QuarterWithSlotsResult(OperationResult):
    quarter: QuarterResponse
    slots_created: int


class ApplyPatternResponse(OperationResult):
    slots_created: int
    slots_updated: int


class PatternResult(OperationResult):
    pattern: Optional[WeeklyPattern] = None


class SlotResult(OperationResult):
    slot: DailySlotResponse


class SlotsResult(OperationResult):
    slots: list[DailySlotResponse]


class SlotStatsResult(OperationResult):
    stats: SlotStats
    missing_dates: list[str]


class PatternValidationResponse(OperationResult):
    validation: PatternValidationResult


class QuarterDatesResult(OperationResult):
    dates: QuarterDates


class TemplateResult(OperationResult):
    template: TemplateResponse


class TemplatesResult(OperationResult):
    templates: list[TemplateResponse]
