"""Tests for AuthGate, SessionResolver, AccountService and PasswordHasher."""

from datetime import datetime, timedelta, timezone

import pytest

from vaultkeep.core.errors import Conflict, NotFound, ValidationFailure
from vaultkeep.core.passwords import PasswordHasher, check_password_strength
from vaultkeep.vault import AuthGate, SessionResolver
from vaultkeep.vault.models import Allowed, Denied, RequestContext, User
from vaultkeep.vault.sessions import hash_token


def _user(**overrides):
    data = dict(id="u1", username="alice", password_hash="x", created_at="2026-01-01T00:00:00+00:00")
    data.update(overrides)
    return User(**data)


class TestAuthGate:

    def test_logged_in_context_allowed(self):
        alice = _user()
        decision = AuthGate().authorize(RequestContext(principal=alice))
        assert isinstance(decision, Allowed)
        assert decision.principal is alice

    def test_anonymous_context_denied(self):
        decision = AuthGate().authorize(RequestContext.anonymous())
        assert isinstance(decision, Denied)

    def test_request_context_logged_in_flag(self):
        assert RequestContext.anonymous().logged_in is False
        assert RequestContext(principal=_user()).logged_in is True


class TestPasswordHasher:

    def test_hash_and_verify(self):
        encoded = PasswordHasher.hash("correct-horse-1")
        assert encoded.startswith("pbkdf2_sha256$")
        assert "correct-horse-1" not in encoded
        assert PasswordHasher.verify("correct-horse-1", encoded) is True
        assert PasswordHasher.verify("wrong", encoded) is False

    def test_salted(self):
        assert PasswordHasher.hash("same") != PasswordHasher.hash("same")

    @pytest.mark.parametrize("encoded", ["", "garbage", "md5$1$a$b", "pbkdf2_sha256$x$y$z"])
    def test_malformed_hash_never_verifies(self, encoded):
        assert PasswordHasher.verify("anything", encoded) is False

    def test_strength(self):
        assert check_password_strength("short")[0] is False
        assert check_password_strength("        ")[0] is False
        assert check_password_strength("long-enough") == (True, "")


class TestAccountService:

    @pytest.mark.asyncio
    async def test_register_and_authenticate(self, services):
        user = await services.accounts.register("alice", "correct-horse-1", display_name="Alice")

        assert user.username == "alice"
        assert user.display_name == "Alice"
        assert user.password_hash != "correct-horse-1"

        authed = await services.accounts.authenticate("alice", "correct-horse-1")
        assert authed is not None and authed.id == user.id

    @pytest.mark.asyncio
    async def test_bad_credentials(self, services):
        await services.accounts.register("alice", "correct-horse-1")
        assert await services.accounts.authenticate("alice", "wrong-password") is None
        assert await services.accounts.authenticate("nobody", "correct-horse-1") is None

    @pytest.mark.asyncio
    async def test_username_is_case_sensitive(self, services):
        await services.accounts.register("alice", "correct-horse-1")
        assert await services.accounts.authenticate("Alice", "correct-horse-1") is None
        # A differently-cased name is a different account
        await services.accounts.register("Alice", "correct-horse-1")

    @pytest.mark.asyncio
    async def test_duplicate_username_conflict(self, services):
        await services.accounts.register("alice", "correct-horse-1")
        with pytest.raises(Conflict):
            await services.accounts.register("alice", "another-pass-2")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("username", ["", "has space", "x" * 65, "semi;colon"])
    async def test_bad_username_rejected(self, services, username):
        with pytest.raises(ValidationFailure):
            await services.accounts.register(username, "correct-horse-1")

    @pytest.mark.asyncio
    async def test_weak_password_rejected(self, services):
        with pytest.raises(ValidationFailure):
            await services.accounts.register("alice", "short")


class TestUserDirectory:

    @pytest.mark.asyncio
    async def test_find_by_username(self, services):
        user = await services.accounts.register("alice", "correct-horse-1")
        found = await services.directory.find_by_username("alice")
        assert found.id == user.id

    @pytest.mark.asyncio
    async def test_unknown_username_not_found(self, services):
        with pytest.raises(NotFound):
            await services.directory.find_by_username("alice")

    @pytest.mark.asyncio
    async def test_get_by_id_missing_returns_none(self, services):
        assert await services.directory.get_by_id("missing") is None


class TestSessionResolver:

    @pytest.mark.asyncio
    async def test_open_and_resolve(self, services):
        user = await services.accounts.register("alice", "correct-horse-1")
        token = await services.sessions.open_session(user)

        context = await services.sessions.resolve(token)
        assert context.logged_in
        assert context.principal.id == user.id

    @pytest.mark.asyncio
    async def test_only_token_hash_is_stored(self, services):
        user = await services.accounts.register("alice", "correct-horse-1")
        token = await services.sessions.open_session(user)

        rows = await services.db.fetch("SELECT token_hash FROM sessions")
        assert [r["token_hash"] for r in rows] == [hash_token(token)]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", [None, "", "unknown-token"])
    async def test_missing_or_unknown_token_is_anonymous(self, services, token):
        context = await services.sessions.resolve(token)
        assert context.logged_in is False

    @pytest.mark.asyncio
    async def test_close_session(self, services):
        user = await services.accounts.register("alice", "correct-horse-1")
        token = await services.sessions.open_session(user)

        assert await services.sessions.close_session(token) is True
        assert (await services.sessions.resolve(token)).logged_in is False
        assert await services.sessions.close_session(token) is False

    @pytest.mark.asyncio
    async def test_expired_session_is_anonymous_and_removed(self, services):
        user = await services.accounts.register("alice", "correct-horse-1")
        now = [datetime(2026, 1, 1, tzinfo=timezone.utc)]
        resolver = SessionResolver(
            services.sessions.sessions,
            services.directory,
            ttl_hours=1,
            clock=lambda: now[0],
        )
        token = await resolver.open_session(user)
        assert (await resolver.resolve(token)).logged_in

        now[0] += timedelta(hours=2)
        assert (await resolver.resolve(token)).logged_in is False
        assert await services.db.fetch("SELECT * FROM sessions") == []
