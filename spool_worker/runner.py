"""Run a worker against a directory until it is told to stop."""

from __future__ import annotations

import asyncio
import logging
import signal
from pathlib import Path

from spool_worker.config import Settings
from spool_worker.factory import ServiceContainer, ServiceFactory

logger = logging.getLogger(__name__)

_STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def _install_signal_handlers(loop: asyncio.AbstractEventLoop, services: ServiceContainer) -> bool:
    try:
        for sig in _STOP_SIGNALS:
            loop.add_signal_handler(sig, services.worker.stop)
    except (NotImplementedError, RuntimeError):
        # Windows event loops (or non-main threads) have no signal handlers
        logger.debug("Signal handlers unavailable; stop with Ctrl+C")
        return False
    return True


def _remove_signal_handlers(loop: asyncio.AbstractEventLoop) -> None:
    for sig in _STOP_SIGNALS:
        loop.remove_signal_handler(sig)


async def run_worker(
    directory: Path,
    settings: Settings,
    services: ServiceContainer | None = None,
) -> ServiceContainer:
    """Watch ``directory`` and process work orders until stopped.

    SIGINT/SIGTERM stop the loop after the current iteration.

    Args:
        directory: Validated directory to watch.
        settings: Application settings.
        services: Pre-built services (tests inject fakes through the factory).

    Returns:
        The services, for inspecting final statistics.
    """
    services = services or ServiceFactory(settings).create_all(directory)
    loop = asyncio.get_running_loop()
    handlers_installed = _install_signal_handlers(loop, services)

    services.watcher.start(loop)
    try:
        await services.worker.run()
    finally:
        services.watcher.stop()
        if handlers_installed:
            _remove_signal_handlers(loop)
    return services
