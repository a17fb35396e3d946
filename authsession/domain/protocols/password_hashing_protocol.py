"""Password hashing protocol for domain layer.

Login verification and password reset delegate to this port. The algorithm
(bcrypt) is chosen by the infrastructure adapter, not by the engine.

Architecture:
    - Domain defines protocol (port)
    - Infrastructure implements adapter (BcryptPasswordService)
"""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Password hashing and verification interface.

    Usage:
        password_hash = password_service.hash_password("SecurePass123!")
        is_valid = password_service.verify_password("SecurePass123!", password_hash)
    """

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password (random salt per call)."""
        ...

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a hash.

        Returns:
            True if password matches hash, False otherwise (including a
            malformed hash; never raises).
        """
        ...
