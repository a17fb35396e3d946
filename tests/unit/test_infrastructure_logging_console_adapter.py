"""Unit tests for ConsoleAdapter (structured console logging).

Tests cover:
- LoggerProtocol methods forward message and context
- Exception details flattened into error_type / error_message
- Context binding
- Renderer choice (JSON vs console), service binding
- Secret-bearing fields redacted before rendering
"""

from unittest.mock import MagicMock, patch

import pytest

from authsession.infrastructure.logging import ConsoleAdapter
from authsession.infrastructure.logging.console_adapter import REDACTED, redact_secrets

STRUCTLOG = "authsession.infrastructure.logging.console_adapter.structlog"


@pytest.mark.unit
class TestConsoleAdapterLogging:
    @pytest.mark.parametrize("level", ["debug", "info", "warning"])
    def test_forwards_message_and_context(self, level):
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            getattr(adapter, level)("refresh_token_rotated", user_id=7)

            getattr(mock_logger, level).assert_called_once_with(
                "refresh_token_rotated", user_id=7
            )

    @pytest.mark.parametrize("level", ["error", "critical"])
    def test_flattens_exception(self, level):
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            getattr(adapter, level)(
                "storage_unavailable", error=RuntimeError("db down"), operation="login"
            )

            getattr(mock_logger, level).assert_called_once_with(
                "storage_unavailable",
                operation="login",
                error_type="RuntimeError",
                error_message="db down",
            )

    def test_error_without_exception(self):
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            ConsoleAdapter().error("sweep_failed", table="otps")

            mock_logger.error.assert_called_once_with("sweep_failed", table="otps")

    def test_bind_returns_new_adapter(self):
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            bound_logger = MagicMock()
            mock_logger.bind.return_value = bound_logger
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            bound = adapter.bind(user_id=7)
            bound.info("otp_issued")

            assert bound is not adapter
            mock_logger.bind.assert_called_once_with(user_id=7)
            bound_logger.info.assert_called_once_with("otp_issued")


@pytest.mark.unit
class TestConsoleAdapterConfiguration:
    def test_json_renderer_when_requested(self):
        with patch(STRUCTLOG) as mock_structlog:
            ConsoleAdapter(use_json=True)

            processors = mock_structlog.configure.call_args.kwargs["processors"]
            assert mock_structlog.processors.JSONRenderer.return_value in processors

    def test_console_renderer_by_default(self):
        with patch(STRUCTLOG) as mock_structlog:
            ConsoleAdapter()

            processors = mock_structlog.configure.call_args.kwargs["processors"]
            assert mock_structlog.dev.ConsoleRenderer.return_value in processors

    def test_service_is_bound_when_given(self):
        with patch(STRUCTLOG) as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter(service="authsession")
            adapter.info("authsession_started")

            mock_logger.bind.assert_called_once_with(service="authsession")
            mock_logger.bind.return_value.info.assert_called_once_with(
                "authsession_started"
            )

    def test_redaction_runs_before_rendering(self):
        with patch(STRUCTLOG) as mock_structlog:
            ConsoleAdapter(use_json=True)

            processors = mock_structlog.configure.call_args.kwargs["processors"]
            assert processors.index(redact_secrets) == len(processors) - 2


@pytest.mark.unit
class TestRedactSecrets:
    def test_secret_fields_are_masked(self):
        event_dict = {
            "event": "otp_delivery",
            "user_id": 7,
            "code": "4821",
            "refresh_token": "opaque",
            "token_hash": "a" * 64,
        }

        result = redact_secrets(None, "info", event_dict)

        assert result == {
            "event": "otp_delivery",
            "user_id": 7,
            "code": REDACTED,
            "refresh_token": REDACTED,
            "token_hash": REDACTED,
        }

    def test_other_fields_untouched(self):
        event_dict = {"event": "session_revoked", "user_id": 7, "reason": "logout"}

        assert redact_secrets(None, "info", dict(event_dict)) == event_dict
