"""
SQLite database access for the request path.

Each query opens a fresh connection inside a worker thread
(``asyncio.to_thread``) so the event loop only ever awaits store I/O.
Connections run in WAL mode with a busy timeout and foreign keys on.
"""

import asyncio
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..core.errors import StoreFailure

logger = logging.getLogger(__name__)


class Database:
    """
    Async facade over a SQLite file.

    Attributes:
        db_path: Path to the SQLite database file
        busy_timeout_ms: How long a writer waits on a locked database
    """

    def __init__(self, db_path: Union[str, Path], busy_timeout_ms: int = 5000):
        self.db_path = Path(db_path)
        self.busy_timeout_ms = busy_timeout_ms
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def connect(self):
        """
        Open a connection with WAL mode and safe PRAGMAs.

        Usage:
            with db.connect() as conn:
                conn.execute(...)

        Yields:
            sqlite3.Connection with rows as sqlite3.Row
        """
        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute(f"PRAGMA busy_timeout={int(self.busy_timeout_ms)}")
            conn.execute("PRAGMA foreign_keys=ON")
            conn.row_factory = sqlite3.Row
            yield conn
        finally:
            conn.close()

    def _run(self, query: str, args: tuple, mode: str) -> Any:
        try:
            with self.connect() as conn:
                cursor = conn.execute(query, args)
                if mode == "all":
                    return [dict(row) for row in cursor.fetchall()]
                if mode == "one":
                    row = cursor.fetchone()
                    return dict(row) if row is not None else None
                conn.commit()
                return cursor.rowcount
        except sqlite3.IntegrityError:
            # Callers translate constraint violations (e.g. duplicate username)
            raise
        except sqlite3.Error as e:
            logger.error(f"Store query failed: {e}")
            raise StoreFailure(f"Store failure: {e}") from e

    async def fetch(self, query: str, *args) -> List[Dict[str, Any]]:
        """
        Execute SELECT query and return all rows.

        Raises:
            StoreFailure: If the query fails
        """
        return await asyncio.to_thread(self._run, query, args, "all")

    async def fetchrow(self, query: str, *args) -> Optional[Dict[str, Any]]:
        """
        Execute SELECT query and return first row (or None).

        Raises:
            StoreFailure: If the query fails
        """
        return await asyncio.to_thread(self._run, query, args, "one")

    async def execute(self, query: str, *args) -> int:
        """
        Execute INSERT/UPDATE/DELETE query.

        Returns:
            Number of rows affected

        Raises:
            StoreFailure: If the query fails
            sqlite3.IntegrityError: On constraint violations
        """
        return await asyncio.to_thread(self._run, query, args, "write")

    def executescript(self, script: str) -> None:
        """Run a multi-statement script synchronously (schema bootstrap)."""
        try:
            with self.connect() as conn:
                conn.executescript(script)
                conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Schema script failed: {e}")
            raise StoreFailure(f"Store failure: {e}") from e


# Global instance
_db: Optional[Database] = None


def create_database(db_path: Union[str, Path]) -> Database:
    """
    Create the global database and bootstrap its schema.

    Args:
        db_path: SQLite file (parent directories are created)

    Returns:
        Initialized Database instance
    """
    from .migrations import initialize_schema

    global _db
    _db = Database(db_path)
    initialize_schema(_db)
    logger.info(f"Database ready: {_db.db_path}")
    return _db


def close_database() -> None:
    """Drop the global database reference (connections are per call)."""
    global _db
    _db = None
