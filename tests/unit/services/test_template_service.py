"""Tests for saved weekly templates."""

import pytest

from whereabouts.core.errors import NotFoundError, ValidationError
from whereabouts.schemas.pattern import LocationType, WeeklyPattern
from whereabouts.schemas.quarter import QuarterName
from whereabouts.schemas.template import TemplateCreate
from whereabouts.services.quarter_service import QuarterService
from whereabouts.services.template_service import TemplateService

ATHLETE = "athlete-1"


@pytest.fixture
def service(session):
    return TemplateService(session)


def _create(pattern: WeeklyPattern, name: str = "Base week", **kwargs) -> TemplateCreate:
    return TemplateCreate(athlete_id=kwargs.pop("athlete_id", ATHLETE), name=name, pattern=pattern, **kwargs)


class TestSaveTemplate:
    def test_save_and_get(self, service, weekly_pattern):
        saved = service.save_template(_create(weekly_pattern, description="Term time"))
        fetched = service.get_template(saved.id, ATHLETE)
        assert fetched.pattern == weekly_pattern
        assert fetched.usage_count == 0
        assert fetched.description == "Term time"

    def test_invalid_pattern_rejected(self, service):
        with pytest.raises(ValidationError):
            service.save_template(_create(WeeklyPattern.uniform().model_copy(update={"monday": None})))
        assert service.list_templates(ATHLETE) == []

    def test_only_one_default(self, service, weekly_pattern):
        first = service.save_template(_create(weekly_pattern, "First", is_default=True))
        second = service.save_template(_create(weekly_pattern, "Second", is_default=True))

        assert not service.get_template(first.id, ATHLETE).is_default
        assert service.get_template(second.id, ATHLETE).is_default

    def test_other_athlete_cannot_read(self, service, weekly_pattern):
        saved = service.save_template(_create(weekly_pattern))
        with pytest.raises(NotFoundError):
            service.get_template(saved.id, "athlete-2")

    def test_delete(self, service, weekly_pattern):
        saved = service.save_template(_create(weekly_pattern))
        service.delete_template(saved.id, ATHLETE)
        with pytest.raises(NotFoundError):
            service.get_template(saved.id, ATHLETE)


class TestApplyTemplate:
    def test_apply_fills_quarter_and_counts_usage(self, session, service, weekly_pattern):
        quarter = QuarterService(session).create_quarter(ATHLETE, 2024, QuarterName.Q3)
        saved = service.save_template(_create(weekly_pattern))

        result = service.apply_template(saved.id, ATHLETE, quarter.id)

        assert result.slots_created == 92
        assert service.get_template(saved.id, ATHLETE).usage_count == 1

    def test_list_orders_by_usage(self, session, service, weekly_pattern):
        quarter = QuarterService(session).create_quarter(ATHLETE, 2024, QuarterName.Q3)
        rarely = service.save_template(_create(weekly_pattern, "Rarely"))
        often = service.save_template(_create(WeeklyPattern.uniform(LocationType.GYM, "18:00", "19:00"), "Often"))
        service.apply_template(often.id, ATHLETE, quarter.id, overwrite=True)
        service.apply_template(often.id, ATHLETE, quarter.id, overwrite=True)

        assert [t.name for t in service.list_templates(ATHLETE)] == ["Often", "Rarely"]
        assert rarely.usage_count == 0
