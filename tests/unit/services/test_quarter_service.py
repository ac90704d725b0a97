"""Tests for the quarter service entry points."""

import datetime

import pytest

from whereabouts.core.errors import NotFoundError, PartialBatchFailure, QuarterExistsError, StoreError, ValidationError
from whereabouts.db.repositories.daily_slot import DailySlotRepository
from whereabouts.schemas.competition import Competition
from whereabouts.schemas.daily_slot import DailySlotUpsert
from whereabouts.schemas.pattern import LocationType, WeeklyPattern
from whereabouts.schemas.quarter import QuarterName, QuarterStatus
from whereabouts.services.quarter_service import QuarterService

ATHLETE = "athlete-1"


@pytest.fixture
def service(session):
    return QuarterService(session)


class TestCreateQuarter:
    def test_creates_draft_with_calendar(self, service):
        quarter = service.create_quarter(ATHLETE, 2024, QuarterName.Q1)
        assert quarter.status == QuarterStatus.DRAFT
        assert quarter.total_days == 91
        assert quarter.filing_deadline == datetime.date(2023, 12, 15)

    def test_duplicate_rejected(self, service):
        service.create_quarter(ATHLETE, 2024, QuarterName.Q1)
        with pytest.raises(QuarterExistsError):
            service.create_quarter(ATHLETE, 2024, "Q1")

    def test_same_period_other_athlete_allowed(self, service):
        service.create_quarter(ATHLETE, 2024, QuarterName.Q1)
        assert service.create_quarter("athlete-2", 2024, QuarterName.Q1).athlete_id == "athlete-2"

    def test_list_most_recent_first(self, service):
        service.create_quarter(ATHLETE, 2024, QuarterName.Q1)
        service.create_quarter(ATHLETE, 2024, QuarterName.Q3)
        service.create_quarter(ATHLETE, 2023, QuarterName.Q4)
        assert [(q.year, q.quarter) for q in service.list_quarters(ATHLETE)] == [
            (2024, QuarterName.Q3), (2024, QuarterName.Q1), (2023, QuarterName.Q4)]

    def test_current_quarter(self, service):
        created = service.create_quarter(ATHLETE, 2024, QuarterName.Q2)
        assert service.get_current_quarter(ATHLETE, today=datetime.date(2024, 5, 1)).id == created.id
        assert service.get_current_quarter(ATHLETE, today=datetime.date(2024, 8, 1)) is None

    def test_get_unknown_quarter(self, service):
        with pytest.raises(NotFoundError):
            service.get_quarter(42)


class TestCreateQuarterWithPattern:
    def test_every_day_filled(self, service, weekly_pattern):
        result = service.create_quarter_with_pattern(ATHLETE, 2024, QuarterName.Q1, weekly_pattern)

        assert result.slots_created == 91
        quarter = service.get_quarter(result.quarter.id)
        assert quarter.days_completed == 91
        assert quarter.completion_percentage == 100
        assert quarter.status == QuarterStatus.COMPLETE
        assert service.get_missing_dates(quarter.id) == []

    def test_invalid_pattern_creates_nothing(self, service):
        pattern = WeeklyPattern.uniform().model_copy(update={"friday": None})
        with pytest.raises(ValidationError):
            service.create_quarter_with_pattern(ATHLETE, 2024, QuarterName.Q1, pattern)
        assert service.list_quarters(ATHLETE) == []

    def test_competitions_applied(self, service, weekly_pattern):
        competition = Competition(id="c1", name="Indoor Open", start_date=datetime.date(2024, 2, 10),
                                  end_date=datetime.date(2024, 2, 11), location_address="Arena")
        result = service.create_quarter_with_pattern(ATHLETE, 2024, QuarterName.Q1, weekly_pattern, [competition])

        stats = service.get_slot_stats(result.quarter.id)
        assert stats.competition_days == 2
        assert stats.location_breakdown["training"] == 65 + 2

    def test_partial_failure_keeps_quarter(self, session, weekly_pattern, monkeypatch):
        service = QuarterService(session, chunk_size=40)
        original = service.slots.slot_repo.create_many
        calls = {"n": 0}

        def flaky(rows):
            calls["n"] += 1
            if calls["n"] == 2:
                raise StoreError("simulated store outage")
            return original(rows)

        monkeypatch.setattr(service.slots.slot_repo, "create_many", flaky)

        with pytest.raises(PartialBatchFailure) as exc_info:
            service.create_quarter_with_pattern(ATHLETE, 2024, QuarterName.Q1, weekly_pattern)

        quarter_id = exc_info.value.details["quarter_id"]
        assert exc_info.value.committed_count == 40
        assert service.get_quarter(quarter_id).days_completed == 40
        assert len(service.get_missing_dates(quarter_id)) == 51


class TestApplyPatternToExistingQuarter:
    def test_apply_to_empty_quarter(self, service, weekly_pattern):
        quarter = service.create_quarter(ATHLETE, 2024, QuarterName.Q2)
        result = service.apply_pattern_to_existing_quarter(quarter.id, ATHLETE, weekly_pattern)
        assert result.slots_created == 91
        assert result.slots_updated == 0

    def test_other_athlete_cannot_apply(self, service, weekly_pattern):
        quarter = service.create_quarter(ATHLETE, 2024, QuarterName.Q2)
        with pytest.raises(NotFoundError):
            service.apply_pattern_to_existing_quarter(quarter.id, "intruder", weekly_pattern)


class TestExtractAndCopy:
    def test_extract_from_empty_quarter(self, service):
        quarter = service.create_quarter(ATHLETE, 2024, QuarterName.Q1)
        assert service.extract_pattern_from_quarter(quarter.id) is None

    def test_extract_majority(self, service, weekly_pattern):
        created = service.create_quarter_with_pattern(ATHLETE, 2024, QuarterName.Q1, weekly_pattern)
        # Move three Mondays to the gym; ten remain at training
        for date in (datetime.date(2024, 1, 1), datetime.date(2024, 1, 8), datetime.date(2024, 1, 15)):
            service.upsert_slot(created.quarter.id, ATHLETE,
                                DailySlotUpsert(date=date, location_type=LocationType.GYM, time_start="18:00",
                                                time_end="19:00"))

        pattern = service.extract_pattern_from_quarter(created.quarter.id)
        assert pattern.monday.key() == ("training", "07:00", "08:00")
        assert pattern == weekly_pattern

    def test_copy_into_next_quarter(self, service, weekly_pattern):
        source = service.create_quarter_with_pattern(ATHLETE, 2024, QuarterName.Q1, weekly_pattern)

        copied = service.copy_quarter_pattern(source.quarter.id, 2024, QuarterName.Q2, ATHLETE)

        assert copied.slots_created == 91
        assert copied.quarter.copied_from_quarter_id == source.quarter.id
        assert service.extract_pattern_from_quarter(copied.quarter.id) == weekly_pattern

    def test_copy_from_empty_quarter(self, service):
        source = service.create_quarter(ATHLETE, 2024, QuarterName.Q1)
        with pytest.raises(NotFoundError, match="No slots found"):
            service.copy_quarter_pattern(source.id, 2024, QuarterName.Q2, ATHLETE)
        assert len(service.list_quarters(ATHLETE)) == 1


class TestSlotsAndSubmission:
    def test_upsert_outside_quarter_rejected(self, service):
        quarter = service.create_quarter(ATHLETE, 2024, QuarterName.Q1)
        with pytest.raises(ValidationError, match="outside"):
            service.upsert_slot(quarter.id, ATHLETE,
                                DailySlotUpsert(date=datetime.date(2024, 4, 1), location_type=LocationType.HOME,
                                                time_start="06:00", time_end="07:00"))

    def test_slots_listed_in_date_order(self, service, weekly_pattern):
        created = service.create_quarter_with_pattern(ATHLETE, 2024, QuarterName.Q1, weekly_pattern)
        slots = service.get_quarter_slots(created.quarter.id)
        assert [s.date for s in slots] == sorted(s.date for s in slots)

    def test_submit_freezes_status(self, service, session, weekly_pattern):
        created = service.create_quarter_with_pattern(ATHLETE, 2024, QuarterName.Q1, weekly_pattern)
        submitted = service.submit_quarter(created.quarter.id, ATHLETE)
        assert submitted.status == QuarterStatus.SUBMITTED
        assert submitted.submitted_at is not None

        slot = DailySlotRepository(session).get_by_quarter(created.quarter.id)[0]
        service.upsert_slot(created.quarter.id, ATHLETE,
                            DailySlotUpsert(date=slot.date, location_type=LocationType.GYM, time_start="18:00",
                                            time_end="19:00"))
        assert service.get_quarter(created.quarter.id).status == QuarterStatus.SUBMITTED
