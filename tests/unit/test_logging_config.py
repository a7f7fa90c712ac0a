"""Tests for structured logging helpers."""

import logging
from unittest.mock import patch

from galleryguard.logging_config import (
    configure_structured_logging,
    get_log_level,
    is_development_environment,
    log_protection_violation,
    log_security_event,
)


class TestLoggingConfig:
    def test_log_level_from_env(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert get_log_level() == logging.DEBUG

    def test_unknown_log_level_defaults_to_info(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "verbose")
        assert get_log_level() == logging.INFO

    def test_production_is_not_development(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        assert is_development_environment() is False

    def test_configure_production_uses_json(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        with patch("galleryguard.logging_config.structlog.configure") as mock_configure:
            configure_structured_logging()

        processors = mock_configure.call_args.kwargs["processors"]
        assert type(processors[-1]).__name__ == "JSONRenderer"


class TestSecurityLogging:
    def test_security_event(self):
        with patch("galleryguard.logging_config.get_logger") as mock_get_logger:
            log_security_event("tab_hidden", gallery_id=1)

        mock_get_logger.assert_called_once_with("galleryguard.security")
        mock_get_logger.return_value.warning.assert_called_once_with(
            "security_event", event_type="tab_hidden", gallery_id=1
        )

    def test_protection_violation(self):
        with patch("galleryguard.logging_config.log_security_event") as mock_event:
            log_protection_violation("client_violation", gallery_id=1, image_index=0)

        mock_event.assert_called_once_with(
            "protection_violation", signal="client_violation", gallery_id=1, image_index=0
        )
