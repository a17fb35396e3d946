"""Application DTOs.

Usage:
    from authsession.application.dtos import LoginCredentials, TokenPair
"""

from authsession.application.dtos.auth_dtos import (
    IssuedOtp,
    IssuedRefreshToken,
    IssuedResetToken,
    LoginCredentials,
    SweepReport,
    TokenPair,
)

__all__ = [
    "IssuedOtp",
    "IssuedRefreshToken",
    "IssuedResetToken",
    "LoginCredentials",
    "SweepReport",
    "TokenPair",
]
