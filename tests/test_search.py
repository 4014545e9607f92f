"""Tests for SearchIndex exact-match queries."""

import pytest

from vaultkeep.core.errors import ValidationFailure


async def _setup(services):
    alice = await services.accounts.register("alice", "correct-horse-1")
    bob = await services.accounts.register("bob", "correct-horse-1")
    await services.vault.create(alice, {"name": "bank", "password": "a1"})
    await services.vault.create(alice, {"name": "bank", "password": "a2"})
    await services.vault.create(alice, {"name": "banking", "password": "a3"})
    await services.vault.create(bob, {"name": "bank", "password": "b1"})
    return alice, bob


class TestSearchIndex:

    @pytest.mark.asyncio
    async def test_exact_match(self, services):
        alice, _ = await _setup(services)
        results = await services.search.query(alice, "bank")
        assert sorted(e.entry_secret for e in results) == ["a1", "a2"]

    @pytest.mark.asyncio
    async def test_case_sensitive(self, services):
        alice, _ = await _setup(services)
        assert await services.search.query(alice, "Bank") == []
        assert await services.search.query(alice, "BANK") == []

    @pytest.mark.asyncio
    async def test_substring_does_not_match(self, services):
        alice, _ = await _setup(services)
        assert await services.search.query(alice, "ban") == []
        results = await services.search.query(alice, "banking")
        assert [e.entry_secret for e in results] == ["a3"]

    @pytest.mark.asyncio
    async def test_scoped_to_principal(self, services):
        """Legacy search matched every user's entries; only own entries match now."""
        _, bob = await _setup(services)
        results = await services.search.query(bob, "bank")
        assert [e.entry_secret for e in results] == ["b1"]

    @pytest.mark.asyncio
    async def test_empty_term_rejected(self, services):
        alice, _ = await _setup(services)
        with pytest.raises(ValidationFailure):
            await services.search.query(alice, "")
