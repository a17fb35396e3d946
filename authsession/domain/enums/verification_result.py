"""Outcome of a successful OTP verification."""

from enum import Enum


class VerificationResult(str, Enum):
    VERIFIED = "verified"
