# Vault Module - Session Resolver
#
# Cookie token -> RequestContext. Tokens are random 256-bit values handed to
# the browser once; only their SHA-256 digest is stored, so a leaked
# sessions table cannot be replayed.

import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import structlog

from ..db.repositories import SessionRepository
from .directory import UserDirectory
from .models import RequestContext, User

logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def hash_token(token: str) -> str:
    """SHA-256 hex digest of a session token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class SessionResolver:
    """
    Issues, resolves and revokes login sessions.

    Args:
        sessions: Session repository
        directory: User lookups for the session owner
        ttl_hours: Session lifetime
        clock: Current-time source (UTC)
    """

    def __init__(
        self,
        sessions: SessionRepository,
        directory: UserDirectory,
        ttl_hours: int = 24,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.sessions = sessions
        self.directory = directory
        self.ttl = timedelta(hours=ttl_hours)
        self.clock = clock

    async def resolve(self, token: Optional[str]) -> RequestContext:
        """
        Resolve a session token to a request context.

        Missing, unknown or expired tokens yield an anonymous context.
        Expired sessions are removed when seen.
        """
        if not token:
            return RequestContext.anonymous()

        token_hash = hash_token(token)
        row = await self.sessions.get(token_hash)
        if row is None:
            return RequestContext.anonymous()

        if datetime.fromisoformat(row["expires_at"]) <= self.clock():
            await self.sessions.delete(token_hash)
            logger.info("session_expired", user_id=row["user_id"])
            return RequestContext.anonymous()

        user = await self.directory.get_by_id(row["user_id"])
        if user is None:
            return RequestContext.anonymous()

        return RequestContext(principal=user)

    async def open_session(self, user: User) -> str:
        """
        Start a session for user.

        Returns:
            The plaintext token to hand to the client
        """
        token = secrets.token_urlsafe(32)
        now = self.clock()
        await self.sessions.create(
            token_hash=hash_token(token),
            user_id=user.id,
            created_at=now.isoformat(timespec="seconds"),
            expires_at=(now + self.ttl).isoformat(timespec="seconds"),
        )
        await self.sessions.delete_expired(now.isoformat(timespec="seconds"))
        logger.info("session_opened", user_id=user.id)
        return token

    async def close_session(self, token: Optional[str]) -> bool:
        """Revoke a session. Returns True if one was removed."""
        if not token:
            return False
        removed = await self.sessions.delete(hash_token(token))
        if removed:
            logger.info("session_closed")
        return removed
