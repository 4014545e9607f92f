"""
Shared pytest fixtures for the VaultKeep test suite.

Autouse fixtures below isolate every test from the live application data:
  - Settings         -> temp SQLite file per test
  - VaultServices    -> rebuilt over that temp file
  - Password hashing -> low PBKDF2 iteration count (speed only)
"""

import pytest
from fastapi.testclient import TestClient

from vaultkeep.api.dependencies import VaultServices, set_services
from vaultkeep.core.config import Settings, set_settings
from vaultkeep.core.passwords import PasswordHasher
from vaultkeep.db.connection import create_database


@pytest.fixture(autouse=True)
def _fast_hashing(monkeypatch):
    """600k PBKDF2 rounds per signup/login would dominate the suite runtime."""
    monkeypatch.setattr(PasswordHasher, "PBKDF2_ITERATIONS", 1_000)


@pytest.fixture
def settings(tmp_path):
    return Settings(env="development", db_path=tmp_path / "vaultkeep.db")


@pytest.fixture(autouse=True)
def services(settings):
    """Point the settings and service singletons at a temp database."""
    set_settings(settings)
    db = create_database(settings.db_path)
    svc = VaultServices(db, session_ttl_hours=settings.session_ttl_hours)
    set_services(svc)

    yield svc

    set_services(None)
    set_settings(None)


def _signup(client: TestClient, username: str, password: str = "correct-horse-1"):
    resp = client.post(
        "/signup",
        data={"username": username, "password": password},
        follow_redirects=False,
    )
    assert resp.status_code == 302, resp.text
    return resp


@pytest.fixture
def anon_client():
    """TestClient with no session cookie."""
    from vaultkeep.api.main import app

    return TestClient(app)


@pytest.fixture
def alice_client():
    """TestClient logged in as alice."""
    from vaultkeep.api.main import app

    client = TestClient(app)
    _signup(client, "alice")
    return client


@pytest.fixture
def bob_client():
    """TestClient logged in as bob (separate cookie jar)."""
    from vaultkeep.api.main import app

    client = TestClient(app)
    _signup(client, "bob")
    return client
