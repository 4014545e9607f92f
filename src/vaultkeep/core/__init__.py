# Core Module - Shared Utilities
#
# Core module provides shared functionality across all VaultKeep modules:
# - Configuration
# - Structured logging
# - Error taxonomy
# - Account password hashing

from .config import Settings, get_settings, set_settings
from .errors import (
    Conflict,
    LoginRequired,
    NotFound,
    StoreFailure,
    ValidationFailure,
    VaultError,
)
from .logging_setup import configure_logging, get_logger
from .passwords import PasswordHasher, check_password_strength

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    "set_settings",
    # Logging
    "configure_logging",
    "get_logger",
    # Errors
    "VaultError",
    "NotFound",
    "ValidationFailure",
    "Conflict",
    "StoreFailure",
    "LoginRequired",
    # Passwords
    "PasswordHasher",
    "check_password_strength",
]
