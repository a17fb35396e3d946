"""Biometric vault adapters."""

from authsession.infrastructure.biometric.null_biometric_vault import (
    NullBiometricVault,
)

__all__ = ["NullBiometricVault"]
