"""
Pattern and calendar endpoints. Stateless, no database access.
"""

from fastapi import APIRouter

from whereabouts.core.config import settings
from whereabouts.engine.quarter_calendar import calculate_quarter_dates
from whereabouts.engine.validation import validate_weekly_pattern
from whereabouts.schemas.pattern import ValidatePatternRequest
from whereabouts.schemas.quarter import QuarterName
from whereabouts.schemas.results import PatternValidationResponse, QuarterDatesResult

router = APIRouter()


@router.post("/patterns/validate", summary="Validate a weekly pattern.", response_model=PatternValidationResponse)
def validate_pattern(data: ValidatePatternRequest):
    """
    Always answers 200; an invalid pattern is reported in
    ``validation.is_valid`` and ``validation.errors``.
    """
    return PatternValidationResponse(validation=validate_weekly_pattern(data.pattern, data.locations))


@router.get("/calendar/{year}/{quarter}", summary="Start, end, filing deadline and day count of a quarter.",
            response_model=QuarterDatesResult, )
def get_quarter_dates(year: int, quarter: QuarterName):
    return QuarterDatesResult(dates=calculate_quarter_dates(year, quarter, settings.FILING_DEADLINE_RULE))
