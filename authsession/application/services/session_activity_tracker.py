"""Session activity tracking.

Clients report activity (heartbeat or any authenticated request) with their
refresh token; the tracker stamps it and classifies sessions as active or
inactive for statistics.
"""

from datetime import datetime, timedelta

from authsession.application.services.refresh_token_store import RefreshTokenStore
from authsession.core.errors import StorageUnavailableError
from authsession.domain.entities import RefreshTokenRecord
from authsession.domain.enums import ActivityStatus
from authsession.domain.protocols import LoggerProtocol


class SessionActivityTracker:
    """Record and classify session activity.

    A session is ACTIVE iff its last activity (issuance for never-touched
    sessions) lies strictly within the inactivity window.

    Example:
        >>> tracker = SessionActivityTracker(store=store, logger=logger)
        >>> await tracker.record_activity(refresh_token)
        True
        >>> tracker.classify(record, clock.now())
        <ActivityStatus.ACTIVE: 'active'>
    """

    def __init__(
        self,
        *,
        store: RefreshTokenStore,
        logger: LoggerProtocol,
        inactivity_minutes: int = 5,
    ) -> None:
        self._store = store
        self._logger = logger
        self._window = timedelta(minutes=inactivity_minutes)

    async def record_activity(self, refresh_value: str) -> bool:
        """Stamp activity for the session behind a refresh token.

        Activity tracking never fails the request that triggered it: unknown
        tokens and store outages return False.
        """
        try:
            return await self._store.touch_activity(refresh_value)
        except StorageUnavailableError as e:
            self._logger.warning(
                "activity_record_failed",
                error_type=type(e).__name__,
                operation=e.operation,
            )
            return False

    def classify(self, record: RefreshTokenRecord, now: datetime) -> ActivityStatus:
        if now - record.activity_reference < self._window:
            return ActivityStatus.ACTIVE
        return ActivityStatus.INACTIVE
