"""
Unit tests for settings and logging configuration.
"""

import logging

import pytest
from pydantic import ValidationError as PydanticValidationError

from captable.config.settings import Settings
from captable.config.logging_config import EasternFormatter
from captable.domain.models import TransactionKind


class TestSettings:
    """Tests for Settings validation and defaults."""

    def test_defaults(self):
        settings = Settings(database_url="sqlite:///:memory:")

        assert settings.enforce_authorized_shares is False
        assert settings.split_trigger_kind == TransactionKind.WITHDRAWAL
        assert settings.split_class_a_terms == ["class a", "common stock", "ordinary shares"]
        assert settings.get_database_url() == "sqlite:///:memory:"

    def test_environment_prefix(self, monkeypatch):
        """
        GIVEN CAPTABLE_ENFORCE_AUTHORIZED_SHARES=true in the environment
        WHEN settings load
        THEN the cap check is switched on
        """
        monkeypatch.setenv("CAPTABLE_ENFORCE_AUTHORIZED_SHARES", "true")

        assert Settings(database_url="sqlite:///:memory:").enforce_authorized_shares is True

    def test_terms_are_normalized(self):
        settings = Settings(split_base_terms=["  Unit ", "", "Units"])

        assert settings.split_base_terms == ["unit", "units"]

    def test_empty_terms_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(split_class_a_terms=["  "])

    def test_unknown_log_level_rejected(self):
        with pytest.raises(PydanticValidationError):
            Settings(log_level="chatty")

    def test_data_dir_database_url(self, tmp_path):
        settings = Settings(data_dir=tmp_path)

        assert settings.get_database_url() == f"sqlite:///{tmp_path / 'captable.db'}"


class TestEasternFormatter:
    """Log timestamps are rendered in US/Eastern."""

    def test_utc_instant_rendered_in_eastern(self):
        record = logging.LogRecord("captable", logging.INFO, __file__, 1, "posted", None, None)
        # 2024-03-02 02:30:00 UTC
        record.created = 1709346600.0

        assert EasternFormatter().formatTime(record) == "2024-03-01 21:30:00 EST"
