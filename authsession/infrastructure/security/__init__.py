"""Security adapters: secret digests, password hashing, access tokens."""

from authsession.infrastructure.security.bcrypt_password_service import (
    BcryptPasswordService,
)
from authsession.infrastructure.security.jwt_service import JWTService
from authsession.infrastructure.security.sha256_secret_hasher import (
    Sha256SecretHasher,
)

__all__ = ["BcryptPasswordService", "JWTService", "Sha256SecretHasher"]
