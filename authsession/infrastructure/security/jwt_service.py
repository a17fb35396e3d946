"""JWT access token service (adapter).

Implements AccessTokenProtocol using PyJWT with HMAC-SHA256.

Security:
    - HMAC-SHA256 (HS256) algorithm
    - 256-bit secret key minimum
    - 15-minute token expiration by default
    - Unique JWT ID (jti) per token

Expiry is checked against the caller-supplied ``now`` (the engine clock)
rather than PyJWT's wall-clock check, so token lifetimes are testable.
"""

from datetime import UTC, datetime, timedelta

import jwt
from jwt.exceptions import InvalidTokenError
from uuid_extensions import uuid7

from authsession.core.enums import ErrorCode
from authsession.core.errors import AuthenticationError, DomainError
from authsession.core.result import Failure, Result, Success
from authsession.domain.enums import UserRole
from authsession.domain.errors import AuthMessages
from authsession.domain.protocols import AccessTokenClaims

_REQUIRED_CLAIMS = ["sub", "role", "iat", "exp", "jti"]


def _invalid() -> Failure[DomainError]:
    return Failure(
        error=AuthenticationError(
            code=ErrorCode.TOKEN_INVALID,
            message=AuthMessages.INVALID_TOKEN,
        )
    )


class JWTService:
    """JWT access token generation and validation service.

    Usage:
        token = jwt_service.generate_access_token(
            user_id=7, role=UserRole.TUTOR, now=clock.now()
        )
        result = jwt_service.validate_access_token(token, now=clock.now())
    """

    def __init__(
        self,
        secret_key: str,
        expiration_minutes: int = 15,
        algorithm: str = "HS256",
    ) -> None:
        """Initialize JWT service.

        Args:
            secret_key: Secret key for signing. MUST be at least 32 bytes.
            expiration_minutes: Token lifetime in minutes (default: 15).
            algorithm: HMAC algorithm name.

        Raises:
            ValueError: If secret_key is too short (< 32 bytes).
        """
        if len(secret_key) < 32:
            msg = "JWT secret key must be at least 32 bytes (256 bits)"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._expiration_minutes = expiration_minutes
        self._algorithm = algorithm

    @property
    def lifetime_seconds(self) -> int:
        return self._expiration_minutes * 60

    def generate_access_token(
        self, *, user_id: int, role: UserRole, now: datetime
    ) -> str:
        """Generate JWT access token.

        Args:
            user_id: Subject.
            role: User role claim.
            now: Issuance time.

        Returns:
            JWT access token string (header.payload.signature).
        """
        expires_at = now + timedelta(minutes=self._expiration_minutes)

        payload = {
            "sub": str(user_id),
            "role": role.value,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": str(uuid7()),
        }

        token: str = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token

    def validate_access_token(
        self, token: str, *, now: datetime
    ) -> Result[AccessTokenClaims, DomainError]:
        """Validate JWT access token and extract claims.

        Args:
            token: JWT access token string.
            now: Instant to judge expiry against.

        Returns:
            Success with AccessTokenClaims, Failure(TOKEN_EXPIRED) when the
            signature is valid but ``exp`` has passed, Failure(TOKEN_INVALID)
            for anything else.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": _REQUIRED_CLAIMS},
            )
            claims = AccessTokenClaims(
                user_id=int(payload["sub"]),
                role=UserRole(payload["role"]),
                issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=UTC),
                expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=UTC),
                token_id=str(payload["jti"]),
            )
        except (InvalidTokenError, ValueError, TypeError):
            return _invalid()

        if now >= claims.expires_at:
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_EXPIRED,
                    message=AuthMessages.EXPIRED_TOKEN,
                )
            )
        return Success(value=claims)
