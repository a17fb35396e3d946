"""Secret hashing protocol for OTPs and opaque tokens.

Short-lived secrets (OTP codes, refresh tokens, reset tokens) are stored as a
deterministic one-way digest so they can be looked up by hash. Passwords do
NOT go through this port; they use PasswordHashingProtocol (bcrypt).

Architecture:
    - Domain defines protocol (port)
    - Infrastructure implements adapter (Sha256SecretHasher)
"""

from typing import Protocol


class SecretHasherProtocol(Protocol):
    """Deterministic, fixed-length, one-way digest."""

    def hash(self, plaintext: str) -> str:
        """Digest a secret.

        Args:
            plaintext: Secret to digest.

        Returns:
            Fixed-length lowercase hex digest. Equal inputs give equal digests.
        """
        ...

    def matches(self, plaintext: str, digest: str) -> bool:
        """Check a candidate against a stored digest in constant time."""
        ...
