# Vault Module - Credential Vault
#
# CRUD over password entries, always scoped to the requesting principal:
# an entry owned by someone else behaves exactly like a missing one.
#
# Entry secrets are stored as given (no encryption at rest).
# Concurrent updates are last-write-wins; there is no version check.

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Union

import structlog
from pydantic import ValidationError

from ..core.errors import NotFound, ValidationFailure
from ..db.repositories import PasswordRepository
from .models import EntryFields, PasswordEntry, User

logger = structlog.get_logger(__name__)

FieldsInput = Union[EntryFields, Dict[str, Any]]


def parse_entry_fields(fields: FieldsInput) -> EntryFields:
    """
    Validate caller input into EntryFields.

    Accepts either field names (entry_username/entry_secret) or the form
    names (username/password).

    Raises:
        ValidationFailure: If name or password is missing or blank
    """
    if isinstance(fields, EntryFields):
        return fields
    try:
        return EntryFields.model_validate(dict(fields))
    except ValidationError as e:
        problems = ", ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ValidationFailure(f"Invalid password entry ({problems})") from e


class CredentialVault:
    """
    Manages password entries for authenticated principals.

    Every operation takes the principal AuthGate allowed; reads and writes
    are filtered by ``owner_id == principal.id``.
    """

    def __init__(self, passwords: PasswordRepository):
        self.passwords = passwords

    async def create(self, principal: User, fields: FieldsInput) -> PasswordEntry:
        """
        Store a new entry owned by principal.

        Args:
            principal: Allowed principal
            fields: name, username, password, description, url

        Returns:
            The stored PasswordEntry (its id is what the caller redirects to)

        Raises:
            ValidationFailure: Missing name or password
            StoreFailure: The store call failed (nothing is persisted)
        """
        data = parse_entry_fields(fields)
        entry = PasswordEntry(
            id=str(uuid.uuid4()),
            name=data.name,
            entry_username=data.entry_username,
            entry_secret=data.entry_secret,
            description=data.description,
            url=data.url,
            owner_id=principal.id,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        await self.passwords.create(entry.to_dict())

        logger.info("entry_created", entry_id=entry.id, owner_id=principal.id)
        return entry

    async def get(self, principal: User, entry_id: str) -> PasswordEntry:
        """
        Fetch one entry.

        Raises:
            NotFound: Absent, or owned by another user
        """
        row = await self.passwords.get_owned(entry_id, principal.id)
        if row is None:
            raise NotFound("Password entry not found")
        return PasswordEntry.from_row(row)

    async def list(self, principal: User) -> List[PasswordEntry]:
        """All entries owned by principal, oldest first."""
        rows = await self.passwords.list_by_owner(principal.id)
        return [PasswordEntry.from_row(row) for row in rows]

    async def update(self, principal: User, entry_id: str, fields: FieldsInput) -> PasswordEntry:
        """
        Replace name, username, password, description and url wholesale.

        id, owner_id and created_at are left untouched.

        Raises:
            ValidationFailure: Missing name or password
            NotFound: Absent, or owned by another user
        """
        data = parse_entry_fields(fields)
        replacement = {
            "name": data.name,
            "entry_username": data.entry_username,
            "entry_secret": data.entry_secret,
            "description": data.description,
            "url": data.url,
        }
        updated = await self.passwords.replace_fields(entry_id, principal.id, replacement)
        if not updated:
            raise NotFound("Password entry not found")

        logger.info("entry_updated", entry_id=entry_id, owner_id=principal.id)
        return await self.get(principal, entry_id)

    async def delete(self, principal: User, entry_id: str) -> None:
        """
        Permanently remove an entry.

        Raises:
            NotFound: Absent, or owned by another user
        """
        deleted = await self.passwords.delete_owned(entry_id, principal.id)
        if not deleted:
            raise NotFound("Password entry not found")

        logger.info("entry_deleted", entry_id=entry_id, owner_id=principal.id)
