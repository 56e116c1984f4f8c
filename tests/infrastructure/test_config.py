"""Tests for settings and logging configuration."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError as SettingsError

from pricebook.infrastructure.config import Settings
from pricebook.infrastructure.logging_config import configure_logging


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("DATABASE_URL", "CATALOG_PATH", "CALL_TIMEOUT", "LOG_LEVEL"):
            monkeypatch.delenv(f"PRICEBOOK_{name}", raising=False)
        settings = Settings(_env_file=None)
        assert settings.database_url == "sqlite:///data/pricebook.db"
        assert settings.catalog_path == Path("data/products.json")
        assert settings.call_timeout == 5.0
        assert settings.log_level == "WARNING"

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("PRICEBOOK_CALL_TIMEOUT", "0.5")
        monkeypatch.setenv("PRICEBOOK_LOG_LEVEL", "debug")
        settings = Settings(_env_file=None)
        assert settings.call_timeout == 0.5
        assert settings.log_level == "DEBUG"

    def test_rejects_non_positive_timeout(self, monkeypatch):
        monkeypatch.setenv("PRICEBOOK_CALL_TIMEOUT", "0")
        with pytest.raises(SettingsError):
            Settings(_env_file=None)

    def test_rejects_unknown_log_level(self, monkeypatch):
        monkeypatch.setenv("PRICEBOOK_LOG_LEVEL", "chatty")
        with pytest.raises(SettingsError):
            Settings(_env_file=None)


class TestConfigureLogging:

    def test_idempotent(self):
        root = logging.getLogger()
        before = len(root.handlers)
        try:
            configure_logging("INFO")
            configure_logging("DEBUG")
            assert len(root.handlers) == before + 1
            assert root.level == logging.DEBUG
        finally:
            for handler in list(root.handlers):
                if handler.get_name() == "pricebook-console":
                    root.removeHandler(handler)
            root.setLevel(logging.WARNING)
