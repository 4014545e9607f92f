"""Tests for Settings loading and the settings/services singletons."""

from pathlib import Path

import pytest

from vaultkeep.core.config import Settings, get_settings, set_settings

ENV_VARS = [
    "VAULTKEEP_ENV",
    "VAULTKEEP_DB_PATH",
    "VAULTKEEP_SESSION_COOKIE",
    "VAULTKEEP_SESSION_TTL_HOURS",
    "VAULTKEEP_HOST",
    "VAULTKEEP_PORT",
    "VAULTKEEP_LOG_LEVEL",
    "VAULTKEEP_LOG_JSON",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a stray .env in the working directory out of the picture
    monkeypatch.chdir(tmp_path)


class TestSettings:

    def test_defaults(self, clean_env):
        settings = Settings.from_env()
        assert settings.env == "development"
        assert settings.db_path == Path("data/vaultkeep.db")
        assert settings.session_cookie == "vaultkeep_session"
        assert settings.session_ttl_hours == 24
        assert settings.port == 5000
        assert settings.is_production is False
        assert settings.log_json is False

    def test_from_environment(self, clean_env, monkeypatch, tmp_path):
        monkeypatch.setenv("VAULTKEEP_ENV", "Production")
        monkeypatch.setenv("VAULTKEEP_DB_PATH", str(tmp_path / "v.db"))
        monkeypatch.setenv("VAULTKEEP_SESSION_TTL_HOURS", "2")
        monkeypatch.setenv("VAULTKEEP_PORT", "8080")
        monkeypatch.setenv("VAULTKEEP_LOG_LEVEL", "debug")

        settings = Settings.from_env()
        assert settings.is_production is True
        assert settings.db_path == tmp_path / "v.db"
        assert settings.session_ttl_hours == 2
        assert settings.port == 8080
        assert settings.log_level == "DEBUG"
        # JSON logs default on in production
        assert settings.log_json is True

    def test_log_json_override(self, clean_env, monkeypatch):
        monkeypatch.setenv("VAULTKEEP_ENV", "production")
        monkeypatch.setenv("VAULTKEEP_LOG_JSON", "false")
        assert Settings.from_env().log_json is False

    def test_dotenv_file(self, clean_env, tmp_path):
        env_file = tmp_path / "custom.env"
        env_file.write_text("VAULTKEEP_SESSION_COOKIE=sid\n", encoding="utf-8")
        try:
            assert Settings.from_env(str(env_file)).session_cookie == "sid"
        finally:
            import os
            os.environ.pop("VAULTKEEP_SESSION_COOKIE", None)

    def test_dotenv_in_working_directory(self, clean_env, tmp_path):
        (tmp_path / ".env").write_text("VAULTKEEP_SESSION_COOKIE=cwd_sid\n", encoding="utf-8")
        try:
            assert Settings.from_env().session_cookie == "cwd_sid"
        finally:
            import os
            os.environ.pop("VAULTKEEP_SESSION_COOKIE", None)


class TestSingleton:

    def test_set_and_get(self, tmp_path):
        instance = Settings(db_path=tmp_path / "x.db")
        set_settings(instance)
        assert get_settings() is instance


class TestLogging:

    @pytest.fixture(autouse=True)
    def _restore_logging(self):
        import logging
        import structlog
        import vaultkeep.core.logging_setup as logging_mod

        root = logging.getLogger()
        old_level = root.level
        yield
        for handler in list(root.handlers):
            if getattr(handler, "_vaultkeep", False):
                root.removeHandler(handler)
        root.setLevel(old_level)
        structlog.reset_defaults()
        logging_mod._configured = False

    def test_json_output(self, capsys):
        from vaultkeep.core.logging_setup import configure_logging, get_logger

        configure_logging(level="INFO", json_output=True, force=True)
        get_logger("vaultkeep.test").info("entry_created", entry_id="abc")

        err = capsys.readouterr().err
        assert '"event": "entry_created"' in err
        assert '"entry_id": "abc"' in err
        assert '"level": "info"' in err

    def test_configure_is_idempotent(self):
        import logging
        from vaultkeep.core.logging_setup import configure_logging

        configure_logging(force=True)
        configure_logging()
        ours = [h for h in logging.getLogger().handlers if getattr(h, "_vaultkeep", False)]
        assert len(ours) == 1
