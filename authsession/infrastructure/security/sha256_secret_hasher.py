"""SHA-256 secret hasher (adapter).

Implements SecretHasherProtocol for OTP codes, refresh tokens and reset
tokens.

Security:
    - Unsalted SHA-256 hex digest (64 chars), matching the stored column
      width of existing rows
    - Acceptable for high-entropy tokens; weak for 4-digit OTPs, whose whole
      code space can be enumerated offline from a leaked digest
    - TODO: switch to HMAC-SHA256 keyed by a server secret once existing OTP
      and reset rows have been migrated or expired
"""

import hashlib
import hmac


class Sha256SecretHasher:
    """Deterministic SHA-256 digest of short-lived secrets.

    Example:
        >>> hasher = Sha256SecretHasher()
        >>> len(hasher.hash("4821"))
        64
        >>> hasher.matches("4821", hasher.hash("4821"))
        True
    """

    def hash(self, plaintext: str) -> str:
        return hashlib.sha256(plaintext.encode("utf-8")).hexdigest()

    def matches(self, plaintext: str, digest: str) -> bool:
        return hmac.compare_digest(self.hash(plaintext), digest)
