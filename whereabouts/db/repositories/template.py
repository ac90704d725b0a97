"""Weekly template repository."""

from typing import Optional

from sqlalchemy import desc
from sqlmodel import Session, select

from whereabouts.core.clock import utc_now
from whereabouts.db.repositories.base import commit_or_raise
from whereabouts.models.template import Template


class TemplateRepository:
    """Repository for Template database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, template: Template) -> Template:
        self.session.add(template)
        commit_or_raise(self.session, "create template")
        self.session.refresh(template)
        return template

    def get_by_id(self, template_id: int) -> Optional[Template]:
        return self.session.get(Template, template_id)

    def get_all_by_athlete(self, athlete_id: str) -> list[Template]:
        statement = (select(Template).where(Template.athlete_id == athlete_id).order_by(desc(Template.usage_count),
                                                                                        Template.id))
        return list(self.session.exec(statement).all())

    def get_defaults_by_athlete(self, athlete_id: str) -> list[Template]:
        statement = select(Template).where(Template.athlete_id == athlete_id,
                                           Template.is_default == True,  # noqa: E712
                                           )
        return list(self.session.exec(statement).all())

    def unset_defaults(self, athlete_id: str) -> int:
        """Clear ``is_default`` on every template of *athlete_id* in one commit."""
        defaults = self.get_defaults_by_athlete(athlete_id)
        if not defaults:
            return 0
        now = utc_now()
        for template in defaults:
            template.is_default = False
            template.updated_at = now
            self.session.add(template)
        commit_or_raise(self.session, "unset default templates")
        return len(defaults)

    def update(self, template: Template) -> Template:
        self.session.add(template)
        commit_or_raise(self.session, "update template")
        self.session.refresh(template)
        return template

    def delete(self, template_id: int) -> bool:
        template = self.get_by_id(template_id)
        if template:
            self.session.delete(template)
            commit_or_raise(self.session, "delete template")
            return True
        return False
