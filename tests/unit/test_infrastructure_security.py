"""Unit tests for security adapters.

Tests cover:
- Sha256SecretHasher: deterministic 64-char digests, constant-time matching
- BcryptPasswordService: hash/verify round trip, cost validation, bad hashes
- JWTService: claims, expiry judged against the supplied instant, tampering
"""

from datetime import timedelta

import jwt
import pytest

from authsession.core.enums import ErrorCode
from authsession.core.result import Failure, Success
from authsession.domain.enums import UserRole
from authsession.infrastructure.security import (
    BcryptPasswordService,
    JWTService,
    Sha256SecretHasher,
)
from tests.utils.fakes import T0

SECRET = "s" * 32


@pytest.mark.unit
class TestSha256SecretHasher:
    def test_digest_is_deterministic_hex(self):
        hasher = Sha256SecretHasher()

        digest = hasher.hash("4821")

        assert digest == hasher.hash("4821")
        assert len(digest) == 64
        int(digest, 16)

    def test_known_vector(self):
        assert Sha256SecretHasher().hash("abc") == (
            "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        )

    def test_matches(self):
        hasher = Sha256SecretHasher()
        digest = hasher.hash("4821")

        assert hasher.matches("4821", digest) is True
        assert hasher.matches("0000", digest) is False


@pytest.mark.unit
class TestBcryptPasswordService:
    def test_hash_and_verify(self):
        service = BcryptPasswordService(cost_factor=4)

        password_hash = service.hash_password("SecurePass123!")

        assert password_hash.startswith("$2b$04$")
        assert service.verify_password("SecurePass123!", password_hash) is True
        assert service.verify_password("wrong", password_hash) is False

    def test_hashes_are_salted(self):
        service = BcryptPasswordService(cost_factor=4)

        assert service.hash_password("same") != service.hash_password("same")

    @pytest.mark.parametrize("cost", [3, 32])
    def test_rejects_cost_out_of_range(self, cost):
        with pytest.raises(ValueError, match="between 4 and 31"):
            BcryptPasswordService(cost_factor=cost)

    @pytest.mark.parametrize("password_hash", ["", "not-a-bcrypt-hash"])
    def test_malformed_hash_never_verifies(self, password_hash):
        service = BcryptPasswordService(cost_factor=4)

        assert service.verify_password("anything", password_hash) is False


@pytest.mark.unit
class TestJWTService:
    def test_rejects_short_secret(self):
        with pytest.raises(ValueError, match="at least 32 bytes"):
            JWTService(secret_key="short")

    def test_round_trip_claims(self):
        service = JWTService(secret_key=SECRET, expiration_minutes=15)

        token = service.generate_access_token(user_id=7, role=UserRole.TUTOR, now=T0)
        result = service.validate_access_token(token, now=T0 + timedelta(minutes=1))

        assert isinstance(result, Success)
        claims = result.value
        assert claims.user_id == 7
        assert claims.role is UserRole.TUTOR
        assert claims.issued_at == T0
        assert claims.expires_at == T0 + timedelta(minutes=15)
        assert claims.token_id

    def test_lifetime_seconds(self):
        assert JWTService(secret_key=SECRET, expiration_minutes=15).lifetime_seconds == 900

    def test_each_token_has_unique_jti(self):
        service = JWTService(secret_key=SECRET)

        first = service.generate_access_token(user_id=7, role=UserRole.TUTOR, now=T0)
        second = service.generate_access_token(user_id=7, role=UserRole.TUTOR, now=T0)

        assert first != second

    def test_expired_token(self):
        service = JWTService(secret_key=SECRET, expiration_minutes=15)
        token = service.generate_access_token(user_id=7, role=UserRole.ADMIN, now=T0)

        result = service.validate_access_token(token, now=T0 + timedelta(minutes=15))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_EXPIRED

    def test_wrong_signature(self):
        token = JWTService(secret_key="x" * 32).generate_access_token(
            user_id=7, role=UserRole.TUTOR, now=T0
        )

        result = JWTService(secret_key=SECRET).validate_access_token(token, now=T0)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID

    def test_missing_claims(self):
        token = jwt.encode({"sub": "7"}, SECRET, algorithm="HS256")

        result = JWTService(secret_key=SECRET).validate_access_token(token, now=T0)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID

    def test_garbage_token(self):
        result = JWTService(secret_key=SECRET).validate_access_token(
            "not.a.jwt", now=T0
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID
