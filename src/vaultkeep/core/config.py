# Core Module - Configuration
#
# Settings are read from the environment (optionally from a .env file via
# python-dotenv) once and shared through a module-level singleton, the same
# get/set pattern the route modules use for their services.

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

ENV_PRODUCTION = "production"
ENV_DEVELOPMENT = "development"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Runtime configuration for the VaultKeep service.

    Attributes:
        env: "development" or "production". Production hides error detail
             and marks the session cookie secure.
        db_path: SQLite database file.
        session_cookie: Name of the cookie carrying the session token.
        session_ttl_hours: Session lifetime.
        host: Bind address for the HTTP server.
        port: Bind port for the HTTP server.
        log_level: Root log level name.
        log_json: Render logs as JSON lines instead of console output.
    """

    env: str = ENV_DEVELOPMENT
    db_path: Path = Path("data/vaultkeep.db")
    session_cookie: str = "vaultkeep_session"
    session_ttl_hours: int = 24
    host: str = "127.0.0.1"
    port: int = 5000
    log_level: str = "INFO"
    log_json: bool = False

    @property
    def is_production(self) -> bool:
        return self.env == ENV_PRODUCTION

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Settings":
        """Build settings from VAULTKEEP_* environment variables.

        Without an explicit dotenv_path, a .env is looked up from the
        working directory upwards.
        """
        load_dotenv(dotenv_path or find_dotenv(usecwd=True))

        env = os.getenv("VAULTKEEP_ENV", ENV_DEVELOPMENT).strip().lower()
        return cls(
            env=env,
            db_path=Path(os.getenv("VAULTKEEP_DB_PATH", "data/vaultkeep.db")),
            session_cookie=os.getenv("VAULTKEEP_SESSION_COOKIE", "vaultkeep_session"),
            session_ttl_hours=int(os.getenv("VAULTKEEP_SESSION_TTL_HOURS", "24")),
            host=os.getenv("VAULTKEEP_HOST", "127.0.0.1"),
            port=int(os.getenv("VAULTKEEP_PORT", "5000")),
            log_level=os.getenv("VAULTKEEP_LOG_LEVEL", "INFO").upper(),
            log_json=_env_bool("VAULTKEEP_LOG_JSON", env == ENV_PRODUCTION),
        )


# ── Singleton ────────────────────────────────────────────────────────

_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the singleton Settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def set_settings(settings: Optional[Settings]) -> None:
    """Replace the singleton (for testing)."""
    global _settings
    _settings = settings
