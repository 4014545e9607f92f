# VaultKeep - Main Package
#
# Personal credential vault: a session-gated web service for storing,
# updating and searching named password entries.

__version__ = "0.1.0"
__author__ = "VaultKeep Team"
__description__ = "Personal credential vault web service"

from .core import Settings, get_settings

__all__ = [
    "__version__",
    "Settings",
    "get_settings",
]
