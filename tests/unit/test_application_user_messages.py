"""Unit tests for user-facing error messages."""

import pytest

from authsession.application.errors import StorageError, public_message
from authsession.core.enums import ErrorCode
from authsession.core.errors import (
    AuthenticationError,
    ConflictError,
    StorageUnavailableError,
)
from authsession.domain.errors import CredentialError, CredentialType


@pytest.mark.unit
class TestPublicMessage:
    def test_otp_failures_read_the_same(self):
        messages = {
            public_message(CredentialError.mismatch(CredentialType.OTP)),
            public_message(CredentialError.expired(CredentialType.OTP)),
            public_message(CredentialError.not_found(CredentialType.OTP)),
            public_message(
                ConflictError(
                    code=ErrorCode.RESOURCE_CONFLICT,
                    message="OTP already consumed by a concurrent request",
                    resource_type=CredentialType.OTP.value,
                )
            ),
        }

        assert len(messages) == 1

    def test_reset_token_failures_read_the_same(self):
        used = CredentialError.already_used(CredentialType.PASSWORD_RESET_TOKEN)
        expired = CredentialError.expired(CredentialType.PASSWORD_RESET_TOKEN)
        conflict = ConflictError(
            code=ErrorCode.RESOURCE_CONFLICT,
            message="Password reset token consumed by a concurrent request",
            resource_type=CredentialType.PASSWORD_RESET_TOKEN.value,
        )

        assert public_message(used) == public_message(expired)
        assert public_message(conflict) == public_message(expired)

    def test_invalid_credentials(self):
        error = AuthenticationError(
            code=ErrorCode.INVALID_CREDENTIALS, message="user 7 wrong password"
        )

        assert public_message(error) == "Invalid login credentials."

    def test_log_message_never_leaks(self):
        error = AuthenticationError(
            code=ErrorCode.TOKEN_INVALID, message="Account is inactive or deleted"
        )

        assert "inactive" not in public_message(error)

    def test_storage_error(self):
        error = StorageError.from_exception(
            "login", StorageUnavailableError("connection refused", operation="commit")
        )

        assert error.details == {"stage": "commit"}
        assert error.retryable is True
        assert "try again" in public_message(error)

    def test_storage_error_without_stage(self):
        error = StorageError.from_exception("login", StorageUnavailableError("down"))

        assert error.details is None
