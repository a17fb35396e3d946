"""Server-side biometric vault.

A server process has no device keychain. This adapter keeps the
BiometricTokenVaultProtocol contract (nothing is ever stored) and logs clear
requests so logout-all shows up next to the revocation in the logs. Mobile
clients plug in their keychain-backed vault instead.
"""

from authsession.domain.protocols.logger_protocol import LoggerProtocol


class NullBiometricVault:
    """BiometricTokenVaultProtocol implementation that stores nothing."""

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    async def save_biometric_token(self, token: str) -> bool:
        self._logger.debug("biometric_vault_unavailable", operation="save")
        return False

    async def get_biometric_token(self, prompt: str) -> str | None:
        return None

    async def has_biometric_token(self) -> bool:
        return False

    async def clear_biometric_token(self) -> bool:
        self._logger.info("biometric_token_cleared")
        return True
