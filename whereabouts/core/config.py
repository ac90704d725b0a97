"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).
"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "Whereabouts quarterly filing engine."
    VERSION: str = "0.1.0"
    AUTHORS: List[str] = ["Whereabouts maintainers"]
    PROJECT_URL: str = ""

    DEBUG: bool = False

    # Database
    DATABASE_USER: str = "postgres"
    DATABASE_PASSWORD: str = ""
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432
    DATABASE_DBNAME: str = "whereabouts"

    # Full URL override (e.g. sqlite:///./whereabouts.db). Composed from the
    # DATABASE_* parts when unset.
    DATABASE_URL: Optional[str] = None

    # Hard per-transaction item cap of the slot store
    BATCH_WRITE_LIMIT: int = 500

    # See whereabouts.engine.quarter_calendar.FilingDeadlineRule
    FILING_DEADLINE_RULE: str = "fifteenth_of_prior_month"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (f"postgresql://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}@{self.DATABASE_HOST}"
                f":{self.DATABASE_PORT}"
                f"/{self.DATABASE_DBNAME}")


# Global settings instance
settings = Settings()
