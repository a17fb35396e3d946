"""Access token protocol.

Short-lived signed credentials carrying ``{sub, role, iat, exp}``. Expiry is
judged against the injected clock, not the host's wall clock.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from authsession.core.errors import DomainError
from authsession.core.result import Result
from authsession.domain.enums import UserRole


@dataclass(frozen=True, slots=True, kw_only=True)
class AccessTokenClaims:
    """Verified access token payload.

    Attributes:
        user_id: Subject.
        role: Role at issuance.
        issued_at: ``iat`` claim.
        expires_at: ``exp`` claim.
        token_id: ``jti`` claim.
    """

    user_id: int
    role: UserRole
    issued_at: datetime
    expires_at: datetime
    token_id: str


class AccessTokenProtocol(Protocol):
    """Mint and verify access tokens."""

    @property
    def lifetime_seconds(self) -> int:
        """Validity window of minted tokens in seconds."""
        ...

    def generate_access_token(self, *, user_id: int, role: UserRole, now: datetime) -> str:
        """Mint a token valid from ``now`` for the configured lifetime."""
        ...

    def validate_access_token(
        self, token: str, *, now: datetime
    ) -> Result[AccessTokenClaims, DomainError]:
        """Verify signature and expiry.

        Returns:
            Success with claims, or Failure with TOKEN_INVALID / TOKEN_EXPIRED.
        """
        ...
