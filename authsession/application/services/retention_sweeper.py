"""Retention sweep for spent credentials.

Rows that can never be used again (expired or revoked refresh tokens,
expired OTPs, expired or used reset tokens) are kept for ``retention_days``
for auditing, then deleted. The sweep runs on a fixed interval from the
process entry point.
"""

import asyncio
from datetime import timedelta

from authsession.application.dtos import SweepReport
from authsession.core.errors import StorageUnavailableError
from authsession.domain.protocols import ClockProtocol, LoggerProtocol, UnitOfWorkFactory


class RetentionSweeper:
    """Delete credentials past their retention period.

    Example:
        >>> report = await sweeper.sweep()
        >>> report.total
        42
        >>> task = asyncio.create_task(sweeper.run_forever())
    """

    def __init__(
        self,
        *,
        uow_factory: UnitOfWorkFactory,
        clock: ClockProtocol,
        logger: LoggerProtocol,
        retention_days: int = 7,
        interval_hours: int = 24,
    ) -> None:
        self._uow_factory = uow_factory
        self._clock = clock
        self._logger = logger
        self._retention = timedelta(days=retention_days)
        self._interval_seconds = interval_hours * 3600

    async def sweep(self) -> SweepReport:
        """Run one sweep in a single transaction.

        Raises:
            StorageUnavailableError: If the store fails (nothing is deleted).
        """
        cutoff = self._clock.now() - self._retention
        async with self._uow_factory() as uow:
            report = SweepReport(
                refresh_tokens=await uow.refresh_tokens.purge(before=cutoff),
                otps=await uow.otps.purge(before=cutoff),
                password_resets=await uow.password_resets.purge(before=cutoff),
            )

        self._logger.info(
            "retention_sweep_completed",
            cutoff=cutoff.isoformat(),
            refresh_tokens=report.refresh_tokens,
            otps=report.otps,
            password_resets=report.password_resets,
        )
        return report

    async def run_forever(self) -> None:
        """Sweep every interval until cancelled. Failed sweeps are logged and retried next interval."""
        try:
            while True:
                try:
                    await self.sweep()
                except StorageUnavailableError as e:
                    self._logger.error(
                        "retention_sweep_failed", error=e, operation=e.operation
                    )
                await asyncio.sleep(self._interval_seconds)
        except asyncio.CancelledError:
            self._logger.info("retention_sweep_cancelled")
            raise
