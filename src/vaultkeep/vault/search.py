# Vault Module - Search
#
# Exact-match lookup by entry name: case-sensitive, no substring or fuzzy
# matching, and only within the principal's own entries.

from typing import List

from ..core.errors import ValidationFailure
from ..db.repositories import PasswordRepository
from .models import PasswordEntry, User


class SearchIndex:
    """Query-time filter over vault entries."""

    def __init__(self, passwords: PasswordRepository):
        self.passwords = passwords

    async def query(self, principal: User, term: str) -> List[PasswordEntry]:
        """
        Entries owned by principal whose name equals term exactly.

        Raises:
            ValidationFailure: Empty term
        """
        if term is None or term == "":
            raise ValidationFailure("Search query is required")
        rows = await self.passwords.find_by_name(term, principal.id)
        return [PasswordEntry.from_row(row) for row in rows]
