# mypy: disable-error-code="arg-type"
"""Composition root.

Builds every adapter and service once per process from an explicit Settings
instance and hands them out by reference. Nothing here is initialized lazily
on first use: tests build their own container (or wire services by hand)
instead of patching module-level singletons.

Usage:
    settings = get_settings()
    container = build_container(settings)
    result = await container.facade.login(credentials)
    ...
    await container.close()
"""

from dataclasses import dataclass
from functools import partial

from authsession.application.services import (
    AuthSessionFacade,
    OtpService,
    PasswordResetService,
    RefreshTokenStore,
    RetentionSweeper,
    SessionActivityTracker,
    SessionStatsAggregator,
)
from authsession.core.config import Settings
from authsession.domain.events.registry import EVENT_REGISTRY, handler_method_name
from authsession.domain.protocols import (
    AccessTokenProtocol,
    BiometricTokenVaultProtocol,
    ClockProtocol,
    CredentialDeliveryProtocol,
    EventBusProtocol,
    LoggerProtocol,
    PasswordHashingProtocol,
    SecretHasherProtocol,
    UnitOfWorkFactory,
)
from authsession.infrastructure.biometric import NullBiometricVault
from authsession.infrastructure.delivery import LoggingCredentialDelivery
from authsession.infrastructure.events import InMemoryEventBus, LoggingEventHandler
from authsession.infrastructure.logging import ConsoleAdapter
from authsession.infrastructure.persistence import Database, SqlAlchemyUnitOfWork
from authsession.infrastructure.security import (
    BcryptPasswordService,
    JWTService,
    Sha256SecretHasher,
)
from authsession.infrastructure.time import SystemClock


@dataclass(frozen=True, kw_only=True)
class Container:
    """Process-wide object graph."""

    settings: Settings
    database: Database
    clock: ClockProtocol
    logger: LoggerProtocol
    event_bus: EventBusProtocol
    hasher: SecretHasherProtocol
    password_service: PasswordHashingProtocol
    access_tokens: AccessTokenProtocol
    delivery: CredentialDeliveryProtocol
    biometric_vault: BiometricTokenVaultProtocol
    uow_factory: UnitOfWorkFactory
    refresh_tokens: RefreshTokenStore
    otp_service: OtpService
    password_resets: PasswordResetService
    activity_tracker: SessionActivityTracker
    stats_aggregator: SessionStatsAggregator
    retention_sweeper: RetentionSweeper
    facade: AuthSessionFacade

    async def close(self) -> None:
        """Release database connections."""
        await self.database.close()


def wire_event_handlers(event_bus: EventBusProtocol, logger: LoggerProtocol) -> None:
    """Subscribe LoggingEventHandler to every registered event.

    Raises:
        RuntimeError: If an event in EVENT_REGISTRY has no handler method.
    """
    logging_handler = LoggingEventHandler(logger=logger)

    for event_class in EVENT_REGISTRY:
        method_name = handler_method_name(event_class)
        handler_method = getattr(logging_handler, method_name, None)
        if handler_method is None:
            raise RuntimeError(
                f"Missing logging handler for {event_class.__name__}: "
                f"expected LoggingEventHandler.{method_name}"
            )
        event_bus.subscribe(event_class, handler_method)


def build_container(settings: Settings) -> Container:
    """Build the object graph for one process.

    Args:
        settings: Validated settings.

    Returns:
        Container owning the database engine and every service.
    """
    logger = ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
        service=settings.app_name,
    )
    database = Database(settings.database_url, echo=settings.db_echo)
    clock = SystemClock()
    hasher = Sha256SecretHasher()
    password_service = BcryptPasswordService(cost_factor=settings.bcrypt_rounds)
    access_tokens = JWTService(
        secret_key=settings.secret_key,
        expiration_minutes=settings.access_token_expire_minutes,
        algorithm=settings.algorithm,
    )
    delivery = LoggingCredentialDelivery(logger=logger)
    biometric_vault = NullBiometricVault(logger=logger)

    event_bus = InMemoryEventBus(logger=logger)
    wire_event_handlers(event_bus, logger)

    uow_factory = partial(SqlAlchemyUnitOfWork, database.async_session)

    refresh_tokens = RefreshTokenStore(
        uow_factory=uow_factory,
        hasher=hasher,
        clock=clock,
        event_bus=event_bus,
        logger=logger,
        expire_days=settings.refresh_token_expire_days,
        issue_attempts=settings.refresh_token_issue_attempts,
        touch_throttle_seconds=settings.activity_touch_throttle_seconds,
    )
    otp_service = OtpService(
        uow_factory=uow_factory,
        hasher=hasher,
        clock=clock,
        event_bus=event_bus,
        logger=logger,
        expire_minutes=settings.otp_expire_minutes,
    )
    password_resets = PasswordResetService(
        uow_factory=uow_factory,
        hasher=hasher,
        clock=clock,
        event_bus=event_bus,
        logger=logger,
        expire_minutes=settings.password_reset_expire_minutes,
    )
    activity_tracker = SessionActivityTracker(
        store=refresh_tokens,
        logger=logger,
        inactivity_minutes=settings.session_inactivity_minutes,
    )
    stats_aggregator = SessionStatsAggregator(
        store=refresh_tokens, tracker=activity_tracker, clock=clock
    )
    retention_sweeper = RetentionSweeper(
        uow_factory=uow_factory,
        clock=clock,
        logger=logger,
        retention_days=settings.retention_days,
        interval_hours=settings.retention_sweep_interval_hours,
    )
    facade = AuthSessionFacade(
        uow_factory=uow_factory,
        refresh_tokens=refresh_tokens,
        otp_service=otp_service,
        password_resets=password_resets,
        activity_tracker=activity_tracker,
        stats_aggregator=stats_aggregator,
        password_service=password_service,
        access_tokens=access_tokens,
        delivery=delivery,
        biometric_vault=biometric_vault,
        clock=clock,
        event_bus=event_bus,
        logger=logger,
    )

    return Container(
        settings=settings,
        database=database,
        clock=clock,
        logger=logger,
        event_bus=event_bus,
        hasher=hasher,
        password_service=password_service,
        access_tokens=access_tokens,
        delivery=delivery,
        biometric_vault=biometric_vault,
        uow_factory=uow_factory,
        refresh_tokens=refresh_tokens,
        otp_service=otp_service,
        password_resets=password_resets,
        activity_tracker=activity_tracker,
        stats_aggregator=stats_aggregator,
        retention_sweeper=retention_sweeper,
        facade=facade,
    )
