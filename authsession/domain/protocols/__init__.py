"""Domain protocols (ports).

Usage:
    from authsession.domain.protocols import ClockProtocol, UnitOfWorkFactory
"""

from authsession.domain.protocols.access_token_protocol import (
    AccessTokenClaims,
    AccessTokenProtocol,
)
from authsession.domain.protocols.biometric_vault_protocol import (
    BiometricTokenVaultProtocol,
)
from authsession.domain.protocols.clock_protocol import ClockProtocol
from authsession.domain.protocols.credential_delivery_protocol import (
    CredentialDeliveryProtocol,
)
from authsession.domain.protocols.event_bus_protocol import (
    EventBusProtocol,
    EventHandler,
)
from authsession.domain.protocols.logger_protocol import LoggerProtocol
from authsession.domain.protocols.otp_repository import OtpRepository
from authsession.domain.protocols.password_hashing_protocol import (
    PasswordHashingProtocol,
)
from authsession.domain.protocols.password_reset_token_repository import (
    PasswordResetTokenRepository,
)
from authsession.domain.protocols.refresh_token_repository import (
    RefreshTokenRepository,
)
from authsession.domain.protocols.secret_hasher_protocol import SecretHasherProtocol
from authsession.domain.protocols.unit_of_work import UnitOfWork, UnitOfWorkFactory
from authsession.domain.protocols.user_repository import UserRepository

__all__ = [
    "AccessTokenClaims",
    "AccessTokenProtocol",
    "BiometricTokenVaultProtocol",
    "ClockProtocol",
    "CredentialDeliveryProtocol",
    "EventBusProtocol",
    "EventHandler",
    "LoggerProtocol",
    "OtpRepository",
    "PasswordHashingProtocol",
    "PasswordResetTokenRepository",
    "RefreshTokenRepository",
    "SecretHasherProtocol",
    "UnitOfWork",
    "UnitOfWorkFactory",
    "UserRepository",
]
