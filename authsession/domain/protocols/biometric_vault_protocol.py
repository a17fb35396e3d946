"""Biometric token vault protocol (device-side collaborator).

On mobile clients the current refresh token is stored under platform
biometric protection. The engine only ever asks the vault to forget it when
all sessions are revoked.
"""

from typing import Protocol


class BiometricTokenVaultProtocol(Protocol):
    """Secure on-device storage of a refresh token."""

    async def save_biometric_token(self, token: str) -> bool:
        """Store token behind biometric protection. Returns success."""
        ...

    async def get_biometric_token(self, prompt: str) -> str | None:
        """Prompt for biometrics and return the stored token, None if absent or denied."""
        ...

    async def has_biometric_token(self) -> bool:
        ...

    async def clear_biometric_token(self) -> bool:
        """Forget the stored token. Returns True once nothing is stored."""
        ...
