"""
Process entry point for qBit Throttler.
"""
import asyncio
import signal
import sys
from typing import Awaitable, Callable, Optional
from loguru import logger

from qbit_throttler import __version__
from qbit_throttler.clients import create_clients
from qbit_throttler.config import Settings, load_settings
from qbit_throttler.constants import EXIT_FAILURE, EXIT_OK
from qbit_throttler.services import ControllerManager, DecisionEngine, PollingMonitor
from qbit_throttler.utils.errors import ConfigurationError
from qbit_throttler.utils.logger import setup_logger

STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def build_monitor(
    settings: Settings,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
) -> PollingMonitor:
    """Wire clients and services into a polling monitor."""
    qbittorrent, jellyfin = create_clients(settings)
    return PollingMonitor(
        settings,
        qbittorrent,
        jellyfin,
        DecisionEngine(settings.throttled_upload_limit),
        ControllerManager(qbittorrent),
        sleep=sleep
    )


async def serve(settings: Settings, monitor: Optional[PollingMonitor] = None) -> int:
    """
    Run the polling monitor until it terminates or a stop signal arrives.

    Returns:
        Exit code: 0 after a requested stop, non-zero after a fatal failure
    """
    if monitor is None:
        monitor = build_monitor(settings)

    loop = asyncio.get_running_loop()
    task = asyncio.create_task(monitor.run(), name="polling_monitor")
    stop_requested = False

    def request_stop(signame: str):
        nonlocal stop_requested
        logger.info(f"Received {signame}, shutting down")
        stop_requested = True
        task.cancel()

    installed = []
    for sig in STOP_SIGNALS:
        try:
            loop.add_signal_handler(sig, request_stop, sig.name)
            installed.append(sig)
        except (NotImplementedError, RuntimeError) as e:
            logger.debug(f"Cannot install handler for {sig.name}: {e}")

    try:
        exit_code = await task
    except asyncio.CancelledError:
        if not stop_requested:
            raise
        exit_code = EXIT_OK
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)
        await monitor.shutdown()

    return exit_code


def run() -> int:
    """Load configuration, set up logging and run the loop."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        for key in e.missing:
            logger.error(f"Missing required setting: {key}")
        for item in e.invalid:
            logger.error(f"Invalid setting: {item}")
        return EXIT_FAILURE

    setup_logger(settings)
    logger.info(f"Starting qBit Throttler {__version__}")
    return asyncio.run(serve(settings))


def main():
    """Console script entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
