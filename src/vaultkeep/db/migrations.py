"""
Database schema initialization.

Reads schema.sql and applies it. Every statement is CREATE ... IF NOT EXISTS,
so this runs on every startup.
"""

import logging
from pathlib import Path

from .connection import Database

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schema.sql"


def initialize_schema(db: Database) -> bool:
    """
    Create tables and indexes from schema.sql.

    Args:
        db: Database instance

    Returns:
        True if successful

    Raises:
        FileNotFoundError: If schema.sql not found
        StoreFailure: If schema creation fails
    """
    if not SCHEMA_PATH.exists():
        logger.error(f"Schema file not found: {SCHEMA_PATH}")
        raise FileNotFoundError(f"Schema file not found: {SCHEMA_PATH}")

    schema_sql = SCHEMA_PATH.read_text(encoding="utf-8")
    db.executescript(schema_sql)

    logger.info("Database schema initialized successfully")
    return True
