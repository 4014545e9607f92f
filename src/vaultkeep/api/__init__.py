# VaultKeep - Web API
#
# FastAPI routes for the credential vault: auth pages, public profiles
# and the session-gated vault pages.

from .main import app, start_api_server
from .dependencies import VaultServices, get_services, set_services

__all__ = [
    "app",
    "start_api_server",
    "VaultServices",
    "get_services",
    "set_services",
]
