# Vault Module - Data Models
#
# Records persisted by the store:
#   User          - account that owns vault entries
#   PasswordEntry - a single stored credential
#
# Request-scoped values:
#   RequestContext - the resolved session for one request
#   EntryFields    - validated caller input for create/update
#   Allowed/Denied - AuthGate decisions

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field, field_validator


# ---------------------------------------------------------------------------
# Persisted records
# ---------------------------------------------------------------------------


@dataclass
class User:
    """Registered account.

    ``password_hash`` never leaves the service; use ``to_public()`` for
    anything shown to other users.
    """

    id: str
    username: str
    password_hash: str
    created_at: str  # ISO 8601
    display_name: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "User":
        return cls(
            id=row["id"],
            username=row["username"],
            password_hash=row["password_hash"],
            created_at=row["created_at"],
            display_name=row.get("display_name"),
        )

    def to_public(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "display_name": self.display_name,
            "created_at": self.created_at,
        }


@dataclass
class PasswordEntry:
    """Stored credential.

    ``owner_id`` and ``created_at`` are fixed at creation; the remaining
    fields are replaced wholesale on update. ``entry_secret`` is stored
    as given.
    """

    id: str
    name: str
    entry_username: str
    entry_secret: str
    description: str
    url: str
    owner_id: str
    created_at: str  # ISO 8601

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "PasswordEntry":
        return cls(
            id=row["id"],
            name=row["name"],
            entry_username=row["entry_username"] or "",
            entry_secret=row["entry_secret"],
            description=row["description"] or "",
            url=row["url"] or "",
            owner_id=row["owner_id"],
            created_at=row["created_at"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Caller input
# ---------------------------------------------------------------------------


class EntryFields(BaseModel):
    """Mutable fields of a PasswordEntry, as supplied on create/update.

    ``name`` and ``entry_secret`` are required; the rest default to "".
    Form keys follow the HTML forms: ``username`` and ``password`` map to
    ``entry_username`` and ``entry_secret``.
    """

    name: str = Field(..., min_length=1, max_length=200)
    entry_username: str = Field("", alias="username")
    entry_secret: str = Field(..., min_length=1, alias="password")
    description: str = ""
    url: str = ""

    model_config = {"populate_by_name": True}

    @field_validator("entry_username", "description", "url", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("name", mode="after")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value


# ---------------------------------------------------------------------------
# Session / gate values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RequestContext:
    """Resolved session for a single request."""

    principal: Optional[User] = None

    @property
    def logged_in(self) -> bool:
        return self.principal is not None

    @classmethod
    def anonymous(cls) -> "RequestContext":
        return cls(principal=None)


@dataclass(frozen=True)
class Allowed:
    principal: User


@dataclass(frozen=True)
class Denied:
    reason: str = "not logged in"


AuthDecision = Union[Allowed, Denied]
