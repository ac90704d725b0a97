"""
Quarter service.

Entry points used by the HTTP layer: creating quarters (optionally from a
weekly pattern), applying a pattern to an existing quarter, mining a
pattern back out of a quarter and copying it into a new one, plus quarter
and slot queries.

Validation always runs before the first write.  Store errors are not
retried and surface to the caller unchanged.
"""

import datetime
from typing import Mapping, Optional, Sequence

from loguru import logger
from sqlmodel import Session

from whereabouts.core.clock import utc_now
from whereabouts.core.config import settings
from whereabouts.core.errors import NotFoundError, PartialBatchFailure, QuarterExistsError, ValidationError
from whereabouts.db.repositories.daily_slot import DailySlotRepository
from whereabouts.db.repositories.quarter import QuarterRepository
from whereabouts.engine.completion import slot_stats
from whereabouts.engine.expansion import expand_pattern
from whereabouts.engine.mining import extract_weekly_pattern
from whereabouts.engine.quarter_calendar import calculate_quarter_dates, find_missing_dates, quarter_for_date
from whereabouts.engine.validation import ensure_valid_pattern
from whereabouts.models.quarter import Quarter
from whereabouts.schemas.competition import Competition
from whereabouts.schemas.daily_slot import DailySlotResponse, DailySlotUpdate, DailySlotUpsert
from whereabouts.schemas.pattern import LocationRef, LocationType, WeeklyPattern
from whereabouts.schemas.quarter import QuarterName, QuarterResponse, QuarterStatus
from whereabouts.schemas.results import ApplyPatternResult, QuarterWithSlots, SlotStats
from whereabouts.services.completion_tracker import CompletionTracker
from whereabouts.services.slot_persistence import SlotPersistenceCoordinator


class QuarterService:
    """Service for quarter filing business logic."""

    def __init__(self, session: Session, chunk_size: Optional[int] = None):
        self.quarter_repo = QuarterRepository(session)
        self.slot_repo = DailySlotRepository(session)
        self.tracker = CompletionTracker(session)
        self.slots = SlotPersistenceCoordinator(session, chunk_size=chunk_size, tracker=self.tracker)

    # ------------------------------------------------------------------
    # Quarters
    # ------------------------------------------------------------------

    def create_quarter(self, athlete_id: str, year: int, quarter: QuarterName,
                       copied_from_quarter_id: Optional[int] = None, ) -> QuarterResponse:
        return self._to_response(self._create_quarter(athlete_id, year, quarter, copied_from_quarter_id))

    def get_quarter(self, quarter_id: int) -> QuarterResponse:
        return self._to_response(self._get_quarter(quarter_id))

    def list_quarters(self, athlete_id: str) -> list[QuarterResponse]:
        return [self._to_response(q) for q in self.quarter_repo.get_all_by_athlete(athlete_id)]

    def get_current_quarter(self, athlete_id: str, today: Optional[datetime.date] = None) -> Optional[QuarterResponse]:
        year, quarter = quarter_for_date(today or datetime.date.today())
        entry = self.quarter_repo.get_by_athlete_and_period(athlete_id, year, quarter)
        return self._to_response(entry) if entry else None

    def submit_quarter(self, quarter_id: int, athlete_id: str) -> QuarterResponse:
        """Mark the quarter submitted.  The completion tracker leaves it alone from then on."""
        quarter = self._get_owned_quarter(quarter_id, athlete_id)
        now = utc_now()
        quarter.status = QuarterStatus.SUBMITTED
        quarter.submitted_at = now
        quarter.updated_at = now
        quarter = self.quarter_repo.update(quarter)
        logger.info(f"Quarter {quarter_id} submitted")
        return self._to_response(quarter)

    # ------------------------------------------------------------------
    # Pattern operations
    # ------------------------------------------------------------------

    def create_quarter_with_pattern(self, athlete_id: str, year: int, quarter: QuarterName, pattern: WeeklyPattern,
                                    competitions: Sequence[Competition] = (),
                                    locations: Optional[Mapping[LocationType, LocationRef]] = None,
                                    copied_from_quarter_id: Optional[int] = None, ) -> QuarterWithSlots:
        """Create a quarter and fill every day from *pattern*.

        Raises:
            ValidationError: the pattern is invalid; nothing was written.
            QuarterExistsError: the athlete already has this quarter.
            PartialBatchFailure: slot creation stopped part way; the quarter
                and the committed chunks remain.
        """
        logger.info(f"Creating quarter with pattern: {athlete_id} {year} {QuarterName(quarter).value}")
        ensure_valid_pattern(pattern)

        entry = self._create_quarter(athlete_id, year, quarter, copied_from_quarter_id)
        assignments = expand_pattern(pattern, entry.start_date, entry.end_date, competitions, locations)
        result = self.slots.bulk_create(entry.id, athlete_id, assignments)
        if not result.succeeded:
            raise PartialBatchFailure("Quarter created but slot creation stopped part way", result,
                                      extra={"quarter_id": entry.id})

        return QuarterWithSlots(quarter=self._to_response(entry), slots_created=result.committed_count)

    def apply_pattern_to_existing_quarter(self, quarter_id: int, athlete_id: str, pattern: WeeklyPattern,
                                          overwrite: bool = False, competitions: Sequence[Competition] = (),
                                          locations: Optional[Mapping[LocationType, LocationRef]] = None, ) -> ApplyPatternResult:
        logger.info(f"Applying pattern to quarter {quarter_id}, overwrite={overwrite}")
        quarter = self._get_owned_quarter(quarter_id, athlete_id)
        return self.slots.apply_pattern(quarter, pattern, overwrite, competitions, locations)

    def extract_pattern_from_quarter(self, quarter_id: int) -> Optional[WeeklyPattern]:
        """Majority weekly pattern of the quarter's slots; ``None`` if it has none."""
        self._get_quarter(quarter_id)
        pattern = extract_weekly_pattern(self.slot_repo.get_by_quarter(quarter_id))
        if pattern is None:
            logger.info(f"Quarter {quarter_id} has no slots to extract a pattern from")
        return pattern

    def copy_quarter_pattern(self, source_quarter_id: int, target_year: int, target_quarter: QuarterName,
                             athlete_id: str, ) -> QuarterWithSlots:
        """Create a new quarter from the pattern mined out of *source_quarter_id*."""
        logger.info(f"Copying pattern from quarter {source_quarter_id} to {target_year} "
                    f"{QuarterName(target_quarter).value}")
        self._get_owned_quarter(source_quarter_id, athlete_id)
        pattern = self.extract_pattern_from_quarter(source_quarter_id)
        if pattern is None:
            raise NotFoundError("No slots found in quarter", details={"quarter_id": source_quarter_id})

        return self.create_quarter_with_pattern(athlete_id, target_year, target_quarter, pattern,
                                                copied_from_quarter_id=source_quarter_id)

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------

    def get_quarter_slots(self, quarter_id: int) -> list[DailySlotResponse]:
        self._get_quarter(quarter_id)
        return [DailySlotResponse.model_validate(s) for s in self.slot_repo.get_by_quarter(quarter_id)]

    def upsert_slot(self, quarter_id: int, athlete_id: str, data: DailySlotUpsert) -> DailySlotResponse:
        quarter = self._get_owned_quarter(quarter_id, athlete_id)
        if not quarter.start_date <= data.date <= quarter.end_date:
            raise ValidationError(f"{data.date} is outside {quarter.year} {quarter.quarter.value} "
                                  f"({quarter.start_date} to {quarter.end_date})")
        slot = self.slots.upsert_slot(quarter_id, athlete_id, data)
        return DailySlotResponse.model_validate(slot)

    def update_slot(self, slot_id: int, athlete_id: str, data: DailySlotUpdate) -> DailySlotResponse:
        slot = self.slot_repo.get_by_id(slot_id)
        if not slot or slot.athlete_id != athlete_id:
            raise NotFoundError("Slot not found", details={"slot_id": slot_id})
        return DailySlotResponse.model_validate(self.slots.update_slot(slot_id, data))

    def get_missing_dates(self, quarter_id: int) -> list[datetime.date]:
        quarter = self._get_quarter(quarter_id)
        return find_missing_dates(self.slot_repo.get_dates_by_quarter(quarter_id), quarter.start_date,
                                  quarter.end_date)

    def get_slot_stats(self, quarter_id: int) -> SlotStats:
        quarter = self._get_quarter(quarter_id)
        return slot_stats(self.slot_repo.get_by_quarter(quarter_id), quarter.total_days)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _create_quarter(self, athlete_id: str, year: int, quarter: QuarterName,
                        copied_from_quarter_id: Optional[int] = None, ) -> Quarter:
        quarter = QuarterName(quarter)
        if self.quarter_repo.get_by_athlete_and_period(athlete_id, year, quarter):
            raise QuarterExistsError(f"{year} {quarter.value} already exists for athlete",
                                     details={"athlete_id": athlete_id, "year": year, "quarter": quarter.value})

        dates = calculate_quarter_dates(year, quarter, settings.FILING_DEADLINE_RULE)
        entry = Quarter(athlete_id=athlete_id, year=year, quarter=quarter, start_date=dates.start_date,
                        end_date=dates.end_date, filing_deadline=dates.filing_deadline, total_days=dates.total_days,
                        status=QuarterStatus.DRAFT, completion_percentage=0, days_completed=0,
                        copied_from_quarter_id=copied_from_quarter_id, )
        entry = self.quarter_repo.create(entry)
        logger.info(f"Quarter created: {entry.id}")
        return entry

    def _get_quarter(self, quarter_id: int) -> Quarter:
        quarter = self.quarter_repo.get_by_id(quarter_id)
        if not quarter:
            raise NotFoundError("Quarter not found", details={"quarter_id": quarter_id})
        return quarter

    def _get_owned_quarter(self, quarter_id: int, athlete_id: str) -> Quarter:
        quarter = self.quarter_repo.get_by_id(quarter_id)
        if not quarter or quarter.athlete_id != athlete_id:
            raise NotFoundError("Quarter not found", details={"quarter_id": quarter_id})
        return quarter

    @staticmethod
    def _to_response(quarter: Quarter) -> QuarterResponse:
        return QuarterResponse.model_validate(quarter)
