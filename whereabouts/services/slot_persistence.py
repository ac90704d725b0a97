"""
Slot persistence coordinator.

Writes daily slots under the store's hard per-transaction item cap.

**Chunked writes**::

    chunks = slots split into runs of at most chunk_size items
    for each chunk, in order:      # never concurrently
        commit chunk atomically
        on failure: stop, report committed_count so far

There is no cross-chunk atomicity.  If chunk *k* fails, chunks
``1..k-1`` stay committed and the :class:`BatchWriteResult` says so; the
caller reconciles instead of assuming all-or-nothing.

Every public mutation ends with a completion recompute, including one
that stopped part way.
"""

from typing import Callable, Iterator, Mapping, Optional, Sequence, TypeVar

from loguru import logger
from sqlmodel import Session

from whereabouts.core.clock import utc_now
from whereabouts.core.config import settings
from whereabouts.core.errors import NotFoundError, PartialBatchFailure, StoreError, ValidationError
from whereabouts.db.repositories.daily_slot import DailySlotRepository
from whereabouts.engine.expansion import expand_pattern
from whereabouts.engine.validation import ensure_valid_pattern, validate_slot_duration, validate_time_range
from whereabouts.models.daily_slot import DailySlot
from whereabouts.models.quarter import Quarter
from whereabouts.schemas.competition import Competition
from whereabouts.schemas.daily_slot import DailySlotAssignment, DailySlotUpdate, DailySlotUpsert
from whereabouts.schemas.pattern import LocationRef, LocationType, WeeklyPattern
from whereabouts.schemas.results import ApplyPatternResult, BatchWriteResult
from whereabouts.services.completion_tracker import CompletionTracker

T = TypeVar("T")


def chunked(items: Sequence[T], size: int) -> Iterator[list[T]]:
    """Yield consecutive runs of at most *size* items."""
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


class SlotPersistenceCoordinator:
    """Create, overwrite and upsert daily slots for a quarter."""

    def __init__(self, session: Session, chunk_size: Optional[int] = None,
                 tracker: Optional[CompletionTracker] = None, ):
        self.slot_repo = DailySlotRepository(session)
        self.tracker = tracker or CompletionTracker(session)
        self.chunk_size = chunk_size or settings.BATCH_WRITE_LIMIT
        if not 1 <= self.chunk_size <= settings.BATCH_WRITE_LIMIT:
            raise ValueError(f"chunk_size must be between 1 and {settings.BATCH_WRITE_LIMIT}, got {self.chunk_size}")

    # ------------------------------------------------------------------
    # Chunked writes
    # ------------------------------------------------------------------

    def bulk_create(self, quarter_id: int, athlete_id: str,
                    slots: Sequence[DailySlotAssignment], ) -> BatchWriteResult:
        """Insert *slots* in sequential chunks and recompute completion.

        New rows are complete and have ``modification_count = 0``.
        """
        logger.info(f"Bulk creating {len(slots)} slots for quarter {quarter_id}")
        result = self._create_chunked(quarter_id, athlete_id, slots)
        self.tracker.recompute(quarter_id)
        return result

    def delete_quarter_slots(self, quarter_id: int) -> BatchWriteResult:
        """Delete every slot of the quarter in sequential chunks."""
        result = self._delete_chunked(quarter_id)
        self.tracker.recompute(quarter_id)
        return result

    def apply_pattern(self, quarter: Quarter, pattern: WeeklyPattern, overwrite: bool,
                      competitions: Sequence[Competition] = (),
                      locations: Optional[Mapping[LocationType, LocationRef]] = None, ) -> ApplyPatternResult:
        """Expand *pattern* over the quarter and persist it.

        With ``overwrite`` every existing slot is deleted and the full
        expansion is created (``slots_updated`` counts the replaced rows).
        Otherwise only dates without a slot are created and existing slots
        are left untouched.

        Raises:
            ValidationError: the pattern is invalid; nothing was written.
            PartialBatchFailure: a chunk failed; earlier chunks remain.
        """
        ensure_valid_pattern(pattern)
        assignments = expand_pattern(pattern, quarter.start_date, quarter.end_date, competitions, locations)

        slots_updated = 0
        if overwrite:
            deleted = self._delete_chunked(quarter.id)
            if not deleted.succeeded:
                self.tracker.recompute(quarter.id)
                raise PartialBatchFailure("Overwrite stopped while deleting existing slots", deleted,
                                          extra={"phase": "delete"})
            slots_updated = deleted.committed_count
            to_create = assignments
        else:
            existing_dates = self.slot_repo.get_dates_by_quarter(quarter.id)
            to_create = [a for a in assignments if a.date not in existing_dates]

        created = self._create_chunked(quarter.id, quarter.athlete_id, to_create)
        self.tracker.recompute(quarter.id)

        if not created.succeeded:
            raise PartialBatchFailure("Slot creation stopped part way", created,
                                      extra={"phase": "create", "slots_updated": slots_updated})

        logger.info(f"Pattern applied to quarter {quarter.id}: {created.committed_count} created, "
                    f"{slots_updated} updated")
        return ApplyPatternResult(slots_created=created.committed_count, slots_updated=slots_updated)

    # ------------------------------------------------------------------
    # Single-slot writes
    # ------------------------------------------------------------------

    def upsert_slot(self, quarter_id: int, athlete_id: str, data: DailySlotUpsert) -> DailySlot:
        """Create the slot for ``data.date`` or update the existing one.

        An update increments ``modification_count``; an insert starts it
        at zero.  A manual edit of a competition day keeps the row's
        ``is_competition`` / ``competition_id`` tag; only the fields of
        *data* are replaced.
        """
        validate_time_range(data.time_start, data.time_end)
        if not validate_slot_duration(data.time_start, data.time_end):
            raise ValidationError("Time slot must be exactly 60 minutes")

        existing = self.slot_repo.get_by_quarter_and_date(quarter_id, data.date)
        if existing:
            for field, value in data.model_dump(exclude={"date"}).items():
                setattr(existing, field, value)
            existing.is_complete = True
            existing.modification_count += 1
            existing.updated_at = utc_now()
            slot = self.slot_repo.update(existing)
            logger.info(f"Updated slot {data.date} of quarter {quarter_id} "
                        f"(modification #{slot.modification_count})")
        else:
            slot = self.slot_repo.create(
                DailySlot(quarter_id=quarter_id, athlete_id=athlete_id, is_complete=True, modification_count=0,
                          **data.model_dump()))
            logger.info(f"Created slot {data.date} of quarter {quarter_id}")

        self.tracker.recompute(quarter_id)
        return slot

    def update_slot(self, slot_id: int, data: DailySlotUpdate) -> DailySlot:
        """Apply a partial update to one slot and bump its modification count."""
        slot = self.slot_repo.get_by_id(slot_id)
        if not slot:
            raise NotFoundError("Slot not found", details={"slot_id": slot_id})

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        time_start = changes.get("time_start", slot.time_start)
        time_end = changes.get("time_end", slot.time_end)
        if "time_start" in changes or "time_end" in changes:
            validate_time_range(time_start, time_end)
            if not validate_slot_duration(time_start, time_end):
                raise ValidationError("Time slot must be exactly 60 minutes")

        for field, value in changes.items():
            setattr(slot, field, value)
        slot.modification_count += 1
        slot.updated_at = utc_now()
        slot = self.slot_repo.update(slot)

        self.tracker.recompute(slot.quarter_id)
        return slot

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _create_chunked(self, quarter_id: int, athlete_id: str,
                        slots: Sequence[DailySlotAssignment], ) -> BatchWriteResult:
        def write(chunk: list[DailySlotAssignment]) -> int:
            rows = [DailySlot(quarter_id=quarter_id, athlete_id=athlete_id, is_complete=True, modification_count=0,
                              **assignment.model_dump()) for assignment in chunk]
            return self.slot_repo.create_many(rows)

        return self._write_chunks(slots, write, label="create")

    def _delete_chunked(self, quarter_id: int) -> BatchWriteResult:
        slot_ids = [slot.id for slot in self.slot_repo.get_by_quarter(quarter_id)]
        if slot_ids:
            logger.info(f"Deleting {len(slot_ids)} existing slots of quarter {quarter_id}")
        return self._write_chunks(slot_ids, self.slot_repo.delete_many, label="delete")

    def _write_chunks(self, items: Sequence[T], write: Callable[[list[T]], int], label: str) -> BatchWriteResult:
        result = BatchWriteResult()
        for index, chunk in enumerate(chunked(items, self.chunk_size), start=1):
            try:
                write(chunk)
            except StoreError as e:
                logger.error(f"Chunk {index} ({label}, {len(chunk)} items) failed after "
                             f"{result.committed_count} committed: {e}")
                result.failed_at_chunk = index
                result.error = str(e)
                return result
            result.committed_count += len(chunk)
            result.chunk_sizes.append(len(chunk))
            logger.info(f"Committed {label} chunk {index}, {len(chunk)} items")
        return result
