"""
Database initialization.

Creates all tables.
"""

from loguru import logger
from sqlmodel import SQLModel

from whereabouts.db.session import engine


def init_db() -> None:
    """
    Initialize database schema.

    Creates the quarters, daily_slots and templates tables if missing.
    """

    # Import all models so SQLModel.metadata has them
    import whereabouts.db.base  # noqa: F401

    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Database initialization complete!")


if __name__ == "__main__":
    init_db()
