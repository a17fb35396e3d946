"""Session statistics aggregation.

Read model over usable refresh tokens: how many sessions exist, how many
showed recent activity, and how they split across web, iOS and Android.
The snapshot is read without locking, so figures may lag concurrent
logins and rotations by one transaction.
"""

from collections import Counter
from collections.abc import Iterable
from datetime import datetime

from authsession.application.services.refresh_token_store import RefreshTokenStore
from authsession.application.services.session_activity_tracker import (
    SessionActivityTracker,
)
from authsession.domain.entities import (
    PlatformBreakdown,
    RefreshTokenRecord,
    SessionStats,
)
from authsession.domain.enums import ActivityStatus, SessionPlatform
from authsession.domain.protocols import ClockProtocol


class SessionStatsAggregator:
    """Aggregate usable sessions into SessionStats.

    Sessions with an UNKNOWN platform count towards total, active and
    inactive but not towards the platform breakdown.
    """

    def __init__(
        self,
        *,
        store: RefreshTokenStore,
        tracker: SessionActivityTracker,
        clock: ClockProtocol,
    ) -> None:
        self._store = store
        self._tracker = tracker
        self._clock = clock

    def aggregate(
        self, tokens: Iterable[RefreshTokenRecord], now: datetime | None = None
    ) -> SessionStats:
        """Aggregate a token snapshot.

        Args:
            tokens: Any tokens; unusable ones are filtered out.
            now: Evaluation instant (defaults to the clock).

        Returns:
            SessionStats with total == active + inactive.
        """
        at = now or self._clock.now()
        usable = [token for token in tokens if token.is_usable(at)]

        active = sum(
            1
            for token in usable
            if self._tracker.classify(token, at) is ActivityStatus.ACTIVE
        )
        platforms = Counter(token.platform for token in usable)

        return SessionStats(
            total=len(usable),
            active=active,
            inactive=len(usable) - active,
            by_platform=PlatformBreakdown(
                **{
                    platform.value: platforms[platform]
                    for platform in SessionPlatform.breakdown_platforms()
                }
            ),
        )

    async def current_stats(self) -> SessionStats:
        """Statistics over every usable session right now."""
        now = self._clock.now()
        tokens = await self._store.list_usable(now)
        return self.aggregate(tokens, now)
