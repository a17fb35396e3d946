"""User domain entity for authentication.

Pure business logic, no framework dependencies. Only the authentication-related
slice of a user is modelled here; profile data is owned elsewhere.
"""

from dataclasses import dataclass
from datetime import datetime

from authsession.domain.enums import OtpPurpose, UserRole


@dataclass(slots=True, kw_only=True)
class User:
    """User domain entity with authentication business rules.

    Business Rules:
        - A user is reachable by email, by mobile number, or both
        - Deleted or deactivated users cannot authenticate
        - Users who never finished signup are rejected after the password check
        - OTP verification flips the matching verified flag

    Attributes:
        id: Unique user identifier.
        email: Email address (lowercased), None for mobile-only users.
        mobile: Full mobile number with country code (``+15551234567``).
        password_hash: Bcrypt hash; empty until signup completes.
        role: TUTOR, STUDENT or ADMIN.
        is_email_verified: Email ownership proven by OTP.
        is_mobile_verified: Mobile ownership proven by OTP.
        is_signup_complete: Signup flow finished.
        is_active: Account enabled.
        is_deleted: Soft-deleted account.
        last_login_at: Timestamp of the last successful login.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.

    Example:
        >>> user = User(
        ...     id=1,
        ...     email="tutor@example.com",
        ...     mobile=None,
        ...     password_hash="$2b$12$...",
        ...     role=UserRole.TUTOR,
        ...     created_at=now,
        ...     updated_at=now,
        ... )
        >>> user.can_authenticate()
        True
    """

    id: int
    email: str | None
    mobile: str | None
    password_hash: str
    role: UserRole
    created_at: datetime
    updated_at: datetime
    is_email_verified: bool = False
    is_mobile_verified: bool = False
    is_signup_complete: bool = True
    is_active: bool = True
    is_deleted: bool = False
    last_login_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.email and not self.mobile:
            raise ValueError("User requires an email or a mobile number")
        if self.is_signup_complete and not self.password_hash:
            raise ValueError("User with completed signup requires a password hash")

    def can_authenticate(self) -> bool:
        """Check if the account may log in or refresh tokens at all.

        Returns:
            bool: True when active and not deleted.
        """
        return self.is_active and not self.is_deleted

    def mark_verified(self, purpose: OtpPurpose) -> bool:
        """Apply a successful OTP verification to the verified flags.

        Args:
            purpose: Purpose of the verified OTP.

        Returns:
            bool: True if a flag was changed.
        """
        if purpose.verifies_email and not self.is_email_verified:
            self.is_email_verified = True
            return True
        if purpose.verifies_mobile and not self.is_mobile_verified:
            self.is_mobile_verified = True
            return True
        return False
