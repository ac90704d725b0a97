"""
Database initialization script.

Creates the quarters, daily_slots and templates tables.

Usage:
    python scripts/init_db.py
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

from loguru import logger

from whereabouts.core.config import settings
from whereabouts.core.logger import setup_logger
from whereabouts.db.init_db import init_db

if __name__ == "__main__":
    setup_logger(level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)
    logger.info("Whereabouts database initialization")

    try:
        init_db()
    except Exception:
        logger.exception("Database initialization failed")
        sys.exit(1)

    logger.info("Database initialized")
    sys.exit(0)
