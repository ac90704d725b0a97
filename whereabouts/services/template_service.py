"""
Template service.

Named weekly patterns an athlete can save and re-apply to any quarter.
"""

from typing import Optional

from loguru import logger
from sqlmodel import Session

from whereabouts.core.clock import utc_now
from whereabouts.core.errors import NotFoundError
from whereabouts.db.repositories.template import TemplateRepository
from whereabouts.engine.validation import ensure_valid_pattern
from whereabouts.models.template import Template
from whereabouts.schemas.results import ApplyPatternResult
from whereabouts.schemas.template import TemplateCreate, TemplateResponse
from whereabouts.services.quarter_service import QuarterService


class TemplateService:
    """Service for saved weekly templates."""

    def __init__(self, session: Session, chunk_size: Optional[int] = None):
        self.repository = TemplateRepository(session)
        self.quarters = QuarterService(session, chunk_size=chunk_size)

    def list_templates(self, athlete_id: str) -> list[TemplateResponse]:
        """Templates of *athlete_id*, most used first."""
        return [self._to_response(t) for t in self.repository.get_all_by_athlete(athlete_id)]

    def get_template(self, template_id: int, athlete_id: str) -> TemplateResponse:
        return self._to_response(self._get_owned_template(template_id, athlete_id))

    def save_template(self, data: TemplateCreate) -> TemplateResponse:
        """
        Save a weekly pattern under a name.

        Saving a default template clears the flag on the athlete's other
        templates first.

        Raises:
            ValidationError: If the pattern is invalid
        """
        ensure_valid_pattern(data.pattern)

        if data.is_default:
            cleared = self.repository.unset_defaults(data.athlete_id)
            if cleared:
                logger.info(f"Cleared default flag on {cleared} template(s) for {data.athlete_id}")

        template = Template(athlete_id=data.athlete_id, name=data.name, description=data.description,
                            pattern=data.pattern.model_dump(mode="json"), usage_count=0,
                            is_default=data.is_default, )
        template = self.repository.create(template)
        logger.info(f"Template saved: {template.id} ({template.name})")
        return self._to_response(template)

    def delete_template(self, template_id: int, athlete_id: str) -> None:
        self._get_owned_template(template_id, athlete_id)
        self.repository.delete(template_id)
        logger.info(f"Template deleted: {template_id}")

    def apply_template(self, template_id: int, athlete_id: str, quarter_id: int,
                       overwrite: bool = False, ) -> ApplyPatternResult:
        """Apply a saved template to a quarter and bump its usage count."""
        template = self._get_owned_template(template_id, athlete_id)
        pattern = self._to_response(template).pattern

        result = self.quarters.apply_pattern_to_existing_quarter(quarter_id, athlete_id, pattern, overwrite)

        template.usage_count += 1
        template.updated_at = utc_now()
        self.repository.update(template)
        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_owned_template(self, template_id: int, athlete_id: str) -> Template:
        template = self.repository.get_by_id(template_id)
        if not template or template.athlete_id != athlete_id:
            raise NotFoundError("Template not found", details={"template_id": template_id})
        return template

    @staticmethod
    def _to_response(template: Template) -> TemplateResponse:
        return TemplateResponse.model_validate(template)
