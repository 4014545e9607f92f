# API Services - wiring between routes and the vault core
#
# Route modules call into one VaultServices object instead of building
# repositories themselves, so tests can swap in a temp database with
# set_services().

from typing import Optional

from ..core.config import get_settings
from ..db.connection import Database, create_database
from ..db.repositories import RepositoryFactory
from ..vault import (
    AccountService,
    AuthGate,
    CredentialVault,
    SearchIndex,
    SessionResolver,
    UserDirectory,
)


class VaultServices:
    """Holds the vault components built over one Database."""

    def __init__(self, db: Database, session_ttl_hours: int = 24):
        self.db = db
        repos = RepositoryFactory(db)
        self.directory = UserDirectory(repos.users)
        self.accounts = AccountService(repos.users)
        self.sessions = SessionResolver(
            repos.sessions, self.directory, ttl_hours=session_ttl_hours
        )
        self.gate = AuthGate()
        self.vault = CredentialVault(repos.passwords)
        self.search = SearchIndex(repos.passwords)


_services: Optional[VaultServices] = None


def get_services() -> VaultServices:
    """Get or create the VaultServices singleton from settings."""
    global _services
    if _services is None:
        settings = get_settings()
        db = create_database(settings.db_path)
        _services = VaultServices(db, session_ttl_hours=settings.session_ttl_hours)
    return _services


def set_services(services: Optional[VaultServices]):
    """Allow DI for testing."""
    global _services
    _services = services
