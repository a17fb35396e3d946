"""Bcrypt password hashing service (adapter).

Implements PasswordHashingProtocol. Used by login (verification) and by
password reset (hashing the new password).

Security:
    - Bcrypt with configurable cost factor (12 by default, ~250ms per hash)
    - Random salt per hash
    - Constant-time verification

Performance:
    Hashing blocks for the whole cost; async callers run it in an executor.
"""

import bcrypt

from authsession.core.constants import BCRYPT_ROUNDS_DEFAULT


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Usage:
        password_service = BcryptPasswordService(cost_factor=12)
        password_hash = password_service.hash_password("SecurePass123!")
        is_valid = password_service.verify_password("SecurePass123!", password_hash)
    """

    def __init__(self, cost_factor: int = BCRYPT_ROUNDS_DEFAULT) -> None:
        """Initialize bcrypt password service.

        Args:
            cost_factor: Bcrypt cost factor (4-31). Each +1 doubles the
                computation time. Low values are only meant for tests.

        Raises:
            ValueError: If cost_factor is outside bcrypt's supported range.
        """
        if not 4 <= cost_factor <= 31:
            msg = "Cost factor must be between 4 and 31"
            raise ValueError(msg)

        self._cost_factor = cost_factor

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password using bcrypt.

        Args:
            password: Plaintext password to hash.

        Returns:
            Hashed password string (bcrypt format: $2b$12$...), 60 characters.
        """
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        password_hash = bcrypt.hashpw(password.encode("utf-8"), salt)
        return password_hash.decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a bcrypt hash.

        Args:
            password: Plaintext password to verify.
            password_hash: Hashed password from database.

        Returns:
            True if password matches hash, False otherwise (including an
            empty or malformed hash).
        """
        if not password_hash:
            return False
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8")
            )
        except (ValueError, AttributeError):
            return False
