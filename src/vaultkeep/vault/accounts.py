# Vault Module - Accounts
#
# Registration and credential checks. Produces the users that sessions are
# opened for; the session itself is handled by SessionResolver.

import re
import uuid
from datetime import datetime, timezone
from typing import Optional

import structlog

from ..core.errors import ValidationFailure
from ..core.passwords import PasswordHasher, check_password_strength
from ..db.repositories import UserRepository
from .models import User

logger = structlog.get_logger(__name__)

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{1,64}$")


class AccountService:
    """Creates accounts and verifies login credentials."""

    def __init__(self, users: UserRepository, hasher: type = PasswordHasher):
        self.users = users
        self.hasher = hasher

    async def register(
        self,
        username: str,
        password: str,
        display_name: Optional[str] = None,
    ) -> User:
        """
        Register a new account.

        Args:
            username: Unique, case-sensitive login name
            password: Plaintext password (hashed before storage)
            display_name: Optional profile name

        Returns:
            The created User

        Raises:
            ValidationFailure: Bad username or weak password
            Conflict: Username already taken
        """
        username = (username or "").strip()
        if not USERNAME_PATTERN.match(username):
            raise ValidationFailure(
                "Username must be 1-64 characters of letters, digits, '_', '.' or '-'"
            )

        is_valid, error_msg = check_password_strength(password or "")
        if not is_valid:
            raise ValidationFailure(error_msg)

        user = User(
            id=str(uuid.uuid4()),
            username=username,
            password_hash=self.hasher.hash(password),
            created_at=datetime.now(timezone.utc).isoformat(),
            display_name=(display_name or "").strip() or None,
        )
        await self.users.create(
            user_id=user.id,
            username=user.username,
            password_hash=user.password_hash,
            created_at=user.created_at,
            display_name=user.display_name,
        )

        logger.info("user_registered", user_id=user.id, username=user.username)
        return user

    async def authenticate(self, username: str, password: str) -> Optional[User]:
        """
        Check a username/password pair.

        Returns:
            The User on success, None on any mismatch
        """
        row = await self.users.get_by_username((username or "").strip())
        if row is None:
            logger.info("login_failed", reason="unknown_user")
            return None

        user = User.from_row(row)
        if not self.hasher.verify(password or "", user.password_hash):
            logger.info("login_failed", reason="bad_password", user_id=user.id)
            return None

        logger.info("login_succeeded", user_id=user.id)
        return user
