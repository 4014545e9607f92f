# Vault Module - Credential Vault Core
#
# Session resolution, the authentication gate, and the ownership-scoped
# CRUD and search logic over password entries.

from .accounts import AccountService
from .auth_gate import AuthGate
from .directory import UserDirectory
from .models import (
    Allowed,
    AuthDecision,
    Denied,
    EntryFields,
    PasswordEntry,
    RequestContext,
    User,
)
from .search import SearchIndex
from .sessions import SessionResolver
from .vault_manager import CredentialVault

__all__ = [
    "AccountService",
    "AuthGate",
    "UserDirectory",
    "SessionResolver",
    "CredentialVault",
    "SearchIndex",
    "Allowed",
    "Denied",
    "AuthDecision",
    "EntryFields",
    "PasswordEntry",
    "RequestContext",
    "User",
]
