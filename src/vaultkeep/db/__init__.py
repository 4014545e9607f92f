"""
Database module for VaultKeep.

Provides SQLite access, schema bootstrap and repositories.

Usage:
    # Startup
    db = create_database("data/vaultkeep.db")

    # Create repository factory
    repos = RepositoryFactory(db)

    # Use repositories
    await repos.users.create(user_id, "alice", password_hash, created_at)
    user = await repos.users.get_by_username("alice")

    # Shutdown
    close_database()
"""

from .connection import (
    Database,
    create_database,
    close_database,
)
from .migrations import initialize_schema
from .repositories import (
    UserRepository,
    PasswordRepository,
    SessionRepository,
    RepositoryFactory,
)

__all__ = [
    "Database",
    "create_database",
    "close_database",
    "initialize_schema",
    "UserRepository",
    "PasswordRepository",
    "SessionRepository",
    "RepositoryFactory",
]
