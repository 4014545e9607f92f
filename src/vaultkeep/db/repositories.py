"""
Data access objects (repositories) for database entities.

Provides async CRUD operations for:
- Users
- Password entries
- Sessions

Repositories return plain dicts; the vault layer turns them into records.
"""

import logging
import sqlite3
from typing import Any, Dict, List, Optional

from ..core.errors import Conflict

logger = logging.getLogger(__name__)


class UserRepository:
    """User data access object."""

    def __init__(self, db):
        """Initialize with database instance."""
        self.db = db

    async def create(
        self,
        user_id: str,
        username: str,
        password_hash: str,
        created_at: str,
        display_name: Optional[str] = None,
    ) -> str:
        """
        Insert a new user.

        Raises:
            Conflict: If the username is already taken
            StoreFailure: If the insert fails
        """
        try:
            await self.db.execute(
                """
                INSERT INTO users (id, username, password_hash, display_name, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                user_id,
                username,
                password_hash,
                display_name,
                created_at,
            )
        except sqlite3.IntegrityError as e:
            raise Conflict(f"Username already taken: {username}") from e

        logger.info(f"User created: {user_id} ({username})")
        return user_id

    async def get_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Get user by ID."""
        return await self.db.fetchrow("SELECT * FROM users WHERE id = ?", user_id)

    async def get_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        """Get user by exact (case-sensitive) username."""
        return await self.db.fetchrow(
            "SELECT * FROM users WHERE username = ?",
            username,
        )


class PasswordRepository:
    """Password entry data access object."""

    COLUMNS = "id, name, entry_username, entry_secret, description, url, owner_id, created_at"

    def __init__(self, db):
        """Initialize with database instance."""
        self.db = db

    async def create(self, entry: Dict[str, Any]) -> str:
        """
        Insert a new entry.

        Args:
            entry: Dict with every column of the passwords table

        Returns:
            Entry ID
        """
        try:
            await self.db.execute(
                f"INSERT INTO passwords ({self.COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                entry["id"],
                entry["name"],
                entry["entry_username"],
                entry["entry_secret"],
                entry["description"],
                entry["url"],
                entry["owner_id"],
                entry["created_at"],
            )
        except sqlite3.IntegrityError as e:
            # owner_id no longer references a user
            raise Conflict(f"Cannot create entry: {e}") from e
        return entry["id"]

    async def get_owned(self, entry_id: str, owner_id: str) -> Optional[Dict[str, Any]]:
        """Get entry by ID only if it belongs to owner_id."""
        return await self.db.fetchrow(
            f"SELECT {self.COLUMNS} FROM passwords WHERE id = ? AND owner_id = ?",
            entry_id,
            owner_id,
        )

    async def list_by_owner(self, owner_id: str) -> List[Dict[str, Any]]:
        """List entries belonging to owner_id."""
        return await self.db.fetch(
            f"SELECT {self.COLUMNS} FROM passwords WHERE owner_id = ? ORDER BY created_at, rowid",
            owner_id,
        )

    async def find_by_name(self, name: str, owner_id: str) -> List[Dict[str, Any]]:
        """
        Exact, case-sensitive match on name within one owner's entries.

        SQLite's ``=`` uses BINARY collation for TEXT, so "Bank" != "bank".
        """
        return await self.db.fetch(
            f"SELECT {self.COLUMNS} FROM passwords WHERE name = ? AND owner_id = ? "
            "ORDER BY created_at, rowid",
            name,
            owner_id,
        )

    async def replace_fields(self, entry_id: str, owner_id: str, fields: Dict[str, str]) -> bool:
        """
        Replace the mutable fields of an owned entry.

        id, owner_id and created_at are never written here.

        Returns:
            True if a row was updated
        """
        count = await self.db.execute(
            """
            UPDATE passwords
            SET name = ?, entry_username = ?, entry_secret = ?, description = ?, url = ?
            WHERE id = ? AND owner_id = ?
            """,
            fields["name"],
            fields["entry_username"],
            fields["entry_secret"],
            fields["description"],
            fields["url"],
            entry_id,
            owner_id,
        )
        return count > 0

    async def delete_owned(self, entry_id: str, owner_id: str) -> bool:
        """Delete an owned entry. Returns True if a row was removed."""
        count = await self.db.execute(
            "DELETE FROM passwords WHERE id = ? AND owner_id = ?",
            entry_id,
            owner_id,
        )
        return count > 0


class SessionRepository:
    """Login session data access object."""

    def __init__(self, db):
        """Initialize with database instance."""
        self.db = db

    async def create(self, token_hash: str, user_id: str, created_at: str, expires_at: str) -> None:
        await self.db.execute(
            """
            INSERT INTO sessions (token_hash, user_id, created_at, expires_at)
            VALUES (?, ?, ?, ?)
            """,
            token_hash,
            user_id,
            created_at,
            expires_at,
        )

    async def get(self, token_hash: str) -> Optional[Dict[str, Any]]:
        return await self.db.fetchrow(
            "SELECT * FROM sessions WHERE token_hash = ?",
            token_hash,
        )

    async def delete(self, token_hash: str) -> bool:
        count = await self.db.execute(
            "DELETE FROM sessions WHERE token_hash = ?",
            token_hash,
        )
        return count > 0

    async def delete_expired(self, now: str) -> int:
        """Remove sessions whose expires_at is before now. Returns count."""
        count = await self.db.execute(
            "DELETE FROM sessions WHERE expires_at < ?",
            now,
        )
        if count:
            logger.info(f"Removed {count} expired sessions")
        return count


class RepositoryFactory:
    """
    Factory for creating repository instances.

    Usage:
        repos = RepositoryFactory(db)
        user_id = await repos.users.create(...)
        entry = await repos.passwords.get_by_id(entry_id)
    """

    def __init__(self, db):
        """Initialize with database instance."""
        self.db = db
        self.users = UserRepository(db)
        self.passwords = PasswordRepository(db)
        self.sessions = SessionRepository(db)
