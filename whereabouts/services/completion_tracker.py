"""
Quarter completion tracker.

Recomputes a quarter's completion summary from its persisted slots after
every slot mutation.

**Recompute rule**::

    days_completed        = COUNT(slots WHERE is_complete)
    completion_percentage = round(days_completed / total_days * 100)
    status                = draft | incomplete | complete
                            (submitted / locked are left untouched)

The recompute is best-effort: a failure is logged and never undoes the
slot write that triggered it.  There is no locking either; with two
concurrent writers the last recompute wins.
"""

from typing import Optional

from loguru import logger
from sqlmodel import Session

from whereabouts.core.clock import utc_now
from whereabouts.db.repositories.daily_slot import DailySlotRepository
from whereabouts.db.repositories.quarter import QuarterRepository
from whereabouts.engine.completion import completion_percentage, next_status
from whereabouts.models.quarter import Quarter


class CompletionTracker:
    """Keeps ``days_completed``, ``completion_percentage`` and ``status`` current."""

    def __init__(self, session: Session):
        self.quarter_repo = QuarterRepository(session)
        self.slot_repo = DailySlotRepository(session)

    def recompute(self, quarter_id: int) -> Optional[Quarter]:
        """Recompute and persist the summary of *quarter_id*.

        Returns the updated quarter, or ``None`` if the quarter does not
        exist or the recompute failed.
        """
        try:
            return self._recompute(quarter_id)
        except Exception:
            logger.exception(f"Completion recompute failed for quarter {quarter_id}")
            return None

    def _recompute(self, quarter_id: int) -> Optional[Quarter]:
        quarter = self.quarter_repo.get_by_id(quarter_id)
        if quarter is None:
            logger.warning(f"Completion recompute skipped: quarter {quarter_id} not found")
            return None

        days_completed = self.slot_repo.count_complete(quarter_id)
        percentage = completion_percentage(days_completed, quarter.total_days)
        status = next_status(quarter.status, days_completed, percentage)

        quarter.days_completed = days_completed
        quarter.completion_percentage = percentage
        quarter.status = status
        quarter.updated_at = utc_now()
        quarter = self.quarter_repo.update(quarter)

        logger.debug(f"Quarter {quarter_id}: {days_completed}/{quarter.total_days} days "
                     f"({percentage}%), status={status.value}")
        return quarter
