# Vault Module - User Directory
#
# Read-only user lookups. Supplies the owner identity for vault entries
# and the public profile view (no login required for profiles).

from typing import Optional

from ..core.errors import NotFound
from ..db.repositories import UserRepository
from .models import User


class UserDirectory:
    """Looks up registered users."""

    def __init__(self, users: UserRepository):
        self.users = users

    async def find_by_username(self, username: str) -> User:
        """
        Exact, case-sensitive username lookup.

        Raises:
            NotFound: If no such user
        """
        row = await self.users.get_by_username(username)
        if row is None:
            raise NotFound(f"User not found: {username}")
        return User.from_row(row)

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Return the user with this id, or None."""
        row = await self.users.get_by_id(user_id)
        return User.from_row(row) if row else None
