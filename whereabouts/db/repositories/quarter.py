"""Quarter repository."""

from typing import Optional

from sqlalchemy import desc
from sqlmodel import Session, select

from whereabouts.db.repositories.base import commit_or_raise
from whereabouts.models.quarter import Quarter
from whereabouts.schemas.quarter import QuarterName


class QuarterRepository:
    """Repository for Quarter database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, quarter: Quarter) -> Quarter:
        self.session.add(quarter)
        commit_or_raise(self.session, "create quarter")
        self.session.refresh(quarter)
        return quarter

    def get_by_id(self, quarter_id: int) -> Optional[Quarter]:
        return self.session.get(Quarter, quarter_id)

    def get_by_athlete_and_period(self, athlete_id: str, year: int, quarter: QuarterName, ) -> Optional[Quarter]:
        statement = select(Quarter).where(Quarter.athlete_id == athlete_id, Quarter.year == year,
                                          Quarter.quarter == quarter, )
        return self.session.exec(statement).first()

    def get_all_by_athlete(self, athlete_id: str) -> list[Quarter]:
        statement = (select(Quarter).where(Quarter.athlete_id == athlete_id).order_by(desc(Quarter.start_date)))
        return list(self.session.exec(statement).all())

    def update(self, quarter: Quarter) -> Quarter:
        self.session.add(quarter)
        commit_or_raise(self.session, "update quarter")
        self.session.refresh(quarter)
        return quarter
