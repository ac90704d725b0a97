"""Shared fixtures.

Everything runs against an in-memory SQLite database; ``DATABASE_URL`` is
set before the package is imported so the module-level engine never
tries to reach PostgreSQL.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

import whereabouts.db.base  # noqa: F401
from whereabouts.schemas.pattern import DaySlotPattern, WeeklyPattern


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def weekly_pattern() -> WeeklyPattern:
    """Training on weekdays, home at the weekend."""
    training = DaySlotPattern(location_type="training", time_start="07:00", time_end="08:00")
    home = DaySlotPattern(location_type="home", time_start="06:00", time_end="07:00")
    return WeeklyPattern(monday=training, tuesday=training, wednesday=training, thursday=training, friday=training,
                         saturday=home, sunday=home, )
