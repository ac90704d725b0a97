"""Tests for the best-effort completion recompute."""

import datetime

from whereabouts.core.errors import StoreError
from whereabouts.db.repositories.daily_slot import DailySlotRepository
from whereabouts.db.repositories.quarter import QuarterRepository
from whereabouts.engine.expansion import expand_pattern
from whereabouts.engine.quarter_calendar import calculate_quarter_dates
from whereabouts.models.daily_slot import DailySlot
from whereabouts.models.quarter import Quarter
from whereabouts.schemas.quarter import QuarterName, QuarterStatus
from whereabouts.services.completion_tracker import CompletionTracker


def _quarter(session, status=QuarterStatus.DRAFT) -> Quarter:
    dates = calculate_quarter_dates(2024, QuarterName.Q3)
    entry = Quarter(athlete_id="athlete-1", year=2024, quarter=QuarterName.Q3, start_date=dates.start_date,
                    end_date=dates.end_date, filing_deadline=dates.filing_deadline, total_days=dates.total_days,
                    status=status, )
    return QuarterRepository(session).create(entry)


def _fill(session, quarter: Quarter, pattern, days: int) -> None:
    end = quarter.start_date + datetime.timedelta(days=days - 1)
    rows = [DailySlot(quarter_id=quarter.id, athlete_id=quarter.athlete_id, **a.model_dump())
            for a in expand_pattern(pattern, quarter.start_date, end)]
    DailySlotRepository(session).create_many(rows)


class TestRecompute:
    def test_empty_quarter_is_draft(self, session):
        quarter = _quarter(session)
        result = CompletionTracker(session).recompute(quarter.id)
        assert result.days_completed == 0
        assert result.completion_percentage == 0
        assert result.status == QuarterStatus.DRAFT

    def test_half_filled_is_incomplete(self, session, weekly_pattern):
        quarter = _quarter(session)  # Q3 has 92 days
        _fill(session, quarter, weekly_pattern, 46)

        result = CompletionTracker(session).recompute(quarter.id)

        assert result.days_completed == 46
        assert result.completion_percentage == 50
        assert result.status == QuarterStatus.INCOMPLETE

    def test_fully_filled_is_complete(self, session, weekly_pattern):
        quarter = _quarter(session)
        _fill(session, quarter, weekly_pattern, 92)

        result = CompletionTracker(session).recompute(quarter.id)

        assert result.completion_percentage == 100
        assert result.status == QuarterStatus.COMPLETE

    def test_incomplete_slots_not_counted(self, session, weekly_pattern):
        quarter = _quarter(session)
        _fill(session, quarter, weekly_pattern, 10)
        slot = DailySlotRepository(session).get_by_quarter(quarter.id)[0]
        slot.is_complete = False
        DailySlotRepository(session).update(slot)

        assert CompletionTracker(session).recompute(quarter.id).days_completed == 9

    def test_submitted_status_untouched(self, session, weekly_pattern):
        quarter = _quarter(session, status=QuarterStatus.SUBMITTED)
        _fill(session, quarter, weekly_pattern, 92)

        result = CompletionTracker(session).recompute(quarter.id)

        assert result.days_completed == 92
        assert result.status == QuarterStatus.SUBMITTED

    def test_missing_quarter_returns_none(self, session):
        assert CompletionTracker(session).recompute(12345) is None

    def test_store_failure_is_swallowed(self, session, weekly_pattern, monkeypatch):
        quarter = _quarter(session)
        _fill(session, quarter, weekly_pattern, 5)
        tracker = CompletionTracker(session)

        def broken_update(_quarter):
            raise StoreError("simulated store outage")

        monkeypatch.setattr(tracker.quarter_repo, "update", broken_update)

        assert tracker.recompute(quarter.id) is None
        assert len(DailySlotRepository(session).get_by_quarter(quarter.id)) == 5

    def test_unexpected_error_is_swallowed(self, session, weekly_pattern, monkeypatch):
        quarter = _quarter(session)
        _fill(session, quarter, weekly_pattern, 5)
        tracker = CompletionTracker(session)

        def broken_count(_quarter_id):
            raise ValueError("unexpected stored status")

        monkeypatch.setattr(tracker.slot_repo, "count_complete", broken_count)

        assert tracker.recompute(quarter.id) is None
        assert QuarterRepository(session).get_by_id(quarter.id).days_completed == 0
