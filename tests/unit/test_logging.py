"""
Unit tests for structured logging setup.
"""

import structlog

from attest.logging import bind_context, clear_context, get_logger, setup_logging
from attest.logging.logger import _censor_sensitive


class TestCensoring:
    """Tests for log redaction."""

    def test_secrets_redacted(self) -> None:
        event = _censor_sensitive(None, "info", {"event": "x", "api_key": "k", "rpc_token": "t"})

        assert event["api_key"] == "***REDACTED***"
        assert event["rpc_token"] == "***REDACTED***"
        assert event["event"] == "x"

    def test_personal_data_redacted(self) -> None:
        event = _censor_sensitive(
            None,
            "info",
            {"event": "x", "name": ["DUPONT"], "passport_number": "12AB34567", "logger_name": "a"},
        )

        assert event["name"] == "***REDACTED***"
        assert event["passport_number"] == "***REDACTED***"
        assert event["logger_name"] == "a"

    def test_nested_redaction(self) -> None:
        event = _censor_sensitive(None, "info", {"event": "x", "subject": {"date_of_birth": "01-01-90"}})

        assert event["subject"]["date_of_birth"] == "***REDACTED***"


class TestSetup:
    """Tests for logger configuration."""

    def test_setup_and_get_logger(self) -> None:
        setup_logging(log_level="DEBUG", json_logs=True, service_name="verification-test")

        logger = get_logger(__name__)
        logger.info("test_event", value=1)

        assert structlog.is_configured()

    def test_context_binding(self) -> None:
        bind_context(request_id="abc")

        assert structlog.contextvars.get_contextvars()["request_id"] == "abc"

        clear_context()
        assert structlog.contextvars.get_contextvars() == {}
