"""
Daily slot repository.

``create_many`` and ``delete_many`` each commit exactly one transaction;
callers are responsible for keeping the item count under the store's
per-transaction cap.
"""

import datetime
from typing import Optional, Sequence

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from whereabouts.core.errors import StoreError
from whereabouts.db.repositories.base import commit_or_raise
from whereabouts.models.daily_slot import DailySlot


class DailySlotRepository:
    """Repository for DailySlot database operations."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, slot_id: int) -> Optional[DailySlot]:
        return self.session.get(DailySlot, slot_id)

    def get_by_quarter(self, quarter_id: int) -> list[DailySlot]:
        statement = (select(DailySlot).where(DailySlot.quarter_id == quarter_id).order_by(DailySlot.date))
        return list(self.session.exec(statement).all())

    def get_by_quarter_and_date(self, quarter_id: int, date: datetime.date) -> Optional[DailySlot]:
        statement = select(DailySlot).where(DailySlot.quarter_id == quarter_id, DailySlot.date == date, )
        return self.session.exec(statement).first()

    def get_dates_by_quarter(self, quarter_id: int) -> set[datetime.date]:
        statement = select(DailySlot.date).where(DailySlot.quarter_id == quarter_id)
        return set(self.session.exec(statement).all())

    def count_complete(self, quarter_id: int) -> int:
        statement = (select(func.count()).select_from(DailySlot).where(DailySlot.quarter_id == quarter_id,
                                                                       DailySlot.is_complete == True,  # noqa: E712
                                                                       ))
        return self.session.exec(statement).first() or 0

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def create(self, slot: DailySlot) -> DailySlot:
        self.session.add(slot)
        commit_or_raise(self.session, f"create slot for {slot.date}")
        self.session.refresh(slot)
        return slot

    def update(self, slot: DailySlot) -> DailySlot:
        self.session.add(slot)
        commit_or_raise(self.session, f"update slot for {slot.date}")
        self.session.refresh(slot)
        return slot

    def create_many(self, slots: Sequence[DailySlot]) -> int:
        """Insert *slots* in a single transaction.  Returns the count written."""
        self.session.add_all(slots)
        commit_or_raise(self.session, f"commit {len(slots)} slots")
        return len(slots)

    def delete_many(self, slot_ids: Sequence[int]) -> int:
        """Delete the given slots in a single transaction."""
        statement = select(DailySlot).where(col(DailySlot.id).in_(slot_ids))
        try:
            for slot in self.session.exec(statement).all():
                self.session.delete(slot)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StoreError(f"Failed to load {len(slot_ids)} slots for deletion", original=e) from e
        commit_or_raise(self.session, f"delete {len(slot_ids)} slots")
        return len(slot_ids)
