"""
Daily slot endpoints.

Date-based upsert within a quarter, plus partial update by slot id.
"""

import datetime

from fastapi import APIRouter, Depends, Query

from whereabouts.api.dependencies import get_quarter_service
from whereabouts.schemas.daily_slot import DailySlotUpdate, DailySlotUpsert, DailySlotWrite
from whereabouts.schemas.results import SlotResult, SlotsResult
from whereabouts.services.quarter_service import QuarterService

router = APIRouter()


@router.get("/quarters/{quarter_id}/slots", summary="List a quarter's slots in date order.",
            response_model=SlotsResult, )
def list_slots(quarter_id: int, service: QuarterService = Depends(get_quarter_service)):
    return SlotsResult(slots=service.get_quarter_slots(quarter_id))


@router.put("/quarters/{quarter_id}/slots/{date}", summary="Create or replace the slot for a date.",
            response_model=SlotResult, )
def upsert_slot(quarter_id: int, date: datetime.date, data: DailySlotWrite,
                athlete_id: str = Query(..., min_length=1),
                service: QuarterService = Depends(get_quarter_service), ):
    """Replacing an existing slot increments its modification count."""
    slot = service.upsert_slot(quarter_id, athlete_id, DailySlotUpsert(date=date, **data.model_dump()))
    return SlotResult(slot=slot)


@router.patch("/slots/{slot_id}", summary="Partially update a slot.", response_model=SlotResult)
def update_slot(slot_id: int, data: DailySlotUpdate, athlete_id: str = Query(..., min_length=1),
                service: QuarterService = Depends(get_quarter_service), ):
    return SlotResult(slot=service.update_slot(slot_id, athlete_id, data))
