"""
Quarter endpoints: creation, pattern application, pattern copy and queries.
"""

import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from whereabouts.api.dependencies import get_quarter_service
from whereabouts.core.errors import NotFoundError
from whereabouts.schemas.quarter import ApplyPatternRequest, CopyPatternRequest, QuarterCreate, QuarterWithPatternCreate
from whereabouts.schemas.results import (
    ApplyPatternResponse,
    PatternResult,
    QuarterResult,
    QuartersResult,
    QuarterWithSlotsResult,
    SlotStatsResult,
)
from whereabouts.services.quarter_service import QuarterService

router = APIRouter()


@router.post("", summary="Create an empty quarter.", response_model=QuarterResult,
             status_code=status.HTTP_201_CREATED, )
def create_quarter(data: QuarterCreate, service: QuarterService = Depends(get_quarter_service)):
    quarter = service.create_quarter(data.athlete_id, data.year, data.quarter)
    return QuarterResult(quarter=quarter)


@router.post("/with-pattern", summary="Create a quarter and fill it from a weekly pattern.",
             response_model=QuarterWithSlotsResult, status_code=status.HTTP_201_CREATED, )
def create_quarter_with_pattern(data: QuarterWithPatternCreate,
                                service: QuarterService = Depends(get_quarter_service)):
    """The pattern is validated before anything is written."""
    result = service.create_quarter_with_pattern(data.athlete_id, data.year, data.quarter, data.pattern,
                                                 data.competitions)
    return QuarterWithSlotsResult(quarter=result.quarter, slots_created=result.slots_created)


@router.get("", summary="List an athlete's quarters, most recent first.", response_model=QuartersResult)
def list_quarters(athlete_id: str = Query(..., min_length=1), service: QuarterService = Depends(get_quarter_service)):
    return QuartersResult(quarters=service.list_quarters(athlete_id))


@router.get("/current", summary="Get the athlete's quarter containing today.", response_model=QuarterResult)
def get_current_quarter(athlete_id: str = Query(..., min_length=1),
                        as_of: Optional[datetime.date] = Query(None, description="Reference date (defaults to today)"),
                        service: QuarterService = Depends(get_quarter_service), ):
    quarter = service.get_current_quarter(athlete_id, as_of)
    if quarter is None:
        raise NotFoundError("No quarter for the current period", details={"athlete_id": athlete_id})
    return QuarterResult(quarter=quarter)


@router.get("/{quarter_id}", summary="Get a quarter.", response_model=QuarterResult)
def get_quarter(quarter_id: int, service: QuarterService = Depends(get_quarter_service)):
    return QuarterResult(quarter=service.get_quarter(quarter_id))


@router.post("/{quarter_id}/apply-pattern", summary="Apply a weekly pattern to an existing quarter.",
             response_model=ApplyPatternResponse, )
def apply_pattern(quarter_id: int, data: ApplyPatternRequest, service: QuarterService = Depends(get_quarter_service)):
    """
    With ``overwrite`` every existing slot is replaced; otherwise only
    dates without a slot are filled.
    """
    result = service.apply_pattern_to_existing_quarter(quarter_id, data.athlete_id, data.pattern, data.overwrite,
                                                       data.competitions)
    return ApplyPatternResponse(slots_created=result.slots_created, slots_updated=result.slots_updated)


@router.get("/{quarter_id}/pattern", summary="Extract the majority weekly pattern of a quarter.",
            response_model=PatternResult, )
def extract_pattern(quarter_id: int, service: QuarterService = Depends(get_quarter_service)):
    pattern = service.extract_pattern_from_quarter(quarter_id)
    if pattern is None:
        raise NotFoundError("No slots found in quarter", details={"quarter_id": quarter_id})
    return PatternResult(pattern=pattern)


@router.post("/{quarter_id}/copy-pattern", summary="Create a new quarter from this quarter's pattern.",
             response_model=QuarterWithSlotsResult, status_code=status.HTTP_201_CREATED, )
def copy_pattern(quarter_id: int, data: CopyPatternRequest, service: QuarterService = Depends(get_quarter_service)):
    result = service.copy_quarter_pattern(quarter_id, data.target_year, data.target_quarter, data.athlete_id)
    return QuarterWithSlotsResult(quarter=result.quarter, slots_created=result.slots_created)


@router.get("/{quarter_id}/stats", summary="Completion statistics and missing dates.", response_model=SlotStatsResult)
def get_stats(quarter_id: int, service: QuarterService = Depends(get_quarter_service)):
    stats = service.get_slot_stats(quarter_id)
    missing = service.get_missing_dates(quarter_id)
    return SlotStatsResult(stats=stats, missing_dates=[d.isoformat() for d in missing])


@router.post("/{quarter_id}/submit", summary="Submit a quarter.", response_model=QuarterResult)
def submit_quarter(quarter_id: int, athlete_id: str = Query(..., min_length=1),
                   service: QuarterService = Depends(get_quarter_service), ):
    return QuarterResult(quarter=service.submit_quarter(quarter_id, athlete_id))
