"""
Process entry point.

Builds the container, verifies the database connection and runs the
retention sweep loop until the process receives SIGINT/SIGTERM. Transport
adapters (HTTP, GraphQL) embed the same container through
``build_container`` instead of running this module.

Usage:
    authsession-sweeper
    python -m authsession.main
"""

import asyncio
import signal
from contextlib import suppress

from authsession.core.config import get_settings
from authsession.core.container import build_container


async def run() -> None:
    """Run the sweep loop until a termination signal arrives."""
    settings = get_settings()
    container = build_container(settings)
    logger = container.logger

    if not await container.database.check_connection():
        logger.critical("database_unreachable", app_name=settings.app_name)
        await container.close()
        raise SystemExit(1)

    if settings.is_development:
        await container.database.create_all()

    logger.info(
        "authsession_started",
        app_name=settings.app_name,
        app_version=settings.app_version,
        environment=settings.environment.value,
    )

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)

    sweeper = asyncio.create_task(container.retention_sweeper.run_forever())
    try:
        await stop.wait()
    finally:
        sweeper.cancel()
        with suppress(asyncio.CancelledError):
            await sweeper
        await container.close()
        logger.info("authsession_stopped")


def main() -> None:
    asyncio.run(run())


if __name__ == "__main__":
    main()
