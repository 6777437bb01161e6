"""
Polling monitor: the session-driven throttling control loop.
"""
import asyncio
from enum import Enum
from typing import Awaitable, Callable, Optional
from loguru import logger
from qbit_throttler.clients import JellyfinClient, QBittorrentClient
from qbit_throttler.config import Settings
from qbit_throttler.constants import EXIT_FAILURE, SHUTDOWN_RESTORE_TIMEOUT_SECONDS
from qbit_throttler.models import Credential, ThrottleDecision
from qbit_throttler.services.controller_manager import ControllerManager
from qbit_throttler.services.decision_engine import DecisionEngine
from qbit_throttler.utils.correlation import poll_cycle
from qbit_throttler.utils.errors import (
    AuthRejectedError,
    ProtocolViolationError,
    ThrottlerError,
    TransientError,
)


class LoopState(str, Enum):
    """States of the outer (session) and inner (polling) loops."""

    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    POLLING = "polling"
    REAUTHENTICATING = "reauthenticating"
    TERMINATED = "terminated"


class LoopTerminated(Exception):
    """Raised inside the loop when a failure cannot be recovered from."""


class PollingMonitor:
    """
    Keeps qBittorrent's upload limit in line with Jellyfin playback.

    The outer loop logs in to qBittorrent; the inner loop samples Jellyfin,
    derives the throttle decision, applies it and sleeps for the poll interval.
    A rejected credential during apply sends control back to the outer loop.
    A rejected login, a login without cookie, or (by default) a failed sample
    terminates the loop with a non-zero exit code.
    """

    def __init__(
        self,
        settings: Settings,
        qbittorrent: QBittorrentClient,
        jellyfin: JellyfinClient,
        decision_engine: DecisionEngine,
        controller_manager: ControllerManager,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    ):
        self.settings = settings
        self.qbittorrent = qbittorrent
        self.jellyfin = jellyfin
        self.decision_engine = decision_engine
        self.controller_manager = controller_manager
        self._sleep = sleep

        self.state = LoopState.UNAUTHENTICATED
        # Mirror of the credential the loop is using, for shutdown restore
        self.credential: Optional[Credential] = None
        self.cycles: int = 0
        self.reauthentications: int = 0
        self.last_decision: Optional[ThrottleDecision] = None

    async def run(self) -> int:
        """
        Run until a fatal condition.

        Returns:
            Process exit code (non-zero; a clean stop happens by cancellation)
        """
        logger.info(
            f"Polling monitor started (qBittorrent: {self.qbittorrent.url}, "
            f"Jellyfin: {self.jellyfin.url}, every {self.settings.poll_interval_secs}s)"
        )
        try:
            while True:
                credential = await self._authenticate()
                self.credential = credential
                await self._poll(credential)
                # Only reached when qBittorrent rejected the credential
                self.credential = None
                self.reauthentications += 1
        except LoopTerminated as e:
            self.state = LoopState.TERMINATED
            self.credential = None
            logger.error(f"Polling monitor terminated: {e}")
            return EXIT_FAILURE

    async def _authenticate(self) -> Credential:
        """Log in, retrying transient failures after the retry delay."""
        attempt = 0
        while True:
            attempt += 1
            self.state = LoopState.AUTHENTICATING
            try:
                credential = await self.qbittorrent.authenticate()
            except (AuthRejectedError, ProtocolViolationError) as e:
                logger.critical(f"qBittorrent login failed, check QB_USERNAME/QB_PASSWORD: {e}")
                raise LoopTerminated(str(e)) from e
            except TransientError as e:
                logger.error(
                    f"qBittorrent login failed (attempt {attempt}), "
                    f"retrying in {self.settings.retry_delay}s: {e}"
                )
                await self._sleep(self.settings.retry_delay)
                continue

            logger.info(f"Logged in to qBittorrent ({credential.masked})")
            return credential

    async def _poll(self, credential: Credential):
        """Poll and throttle until the credential is rejected."""
        self.state = LoopState.POLLING
        while True:
            self.cycles += 1
            with poll_cycle():
                rejected = await self._poll_cycle(credential)
            if rejected:
                self.state = LoopState.REAUTHENTICATING
                return

            await self._sleep(self.settings.poll_interval_secs)

    async def _poll_cycle(self, credential: Credential) -> bool:
        """
        Sample, decide and apply once.

        Returns:
            True if qBittorrent rejected the credential
        """
        try:
            session_count = await self.jellyfin.count_active_sessions()
        except ThrottlerError as e:
            if self.settings.exit_on_sample_failure:
                logger.critical(f"Could not sample Jellyfin sessions, stopping: {e}")
                raise LoopTerminated(str(e)) from e
            logger.error(f"Could not sample Jellyfin sessions, skipping cycle: {e}")
            return False

        decision = self.decision_engine.decide(session_count)
        self.last_decision = decision

        try:
            await self.controller_manager.apply(credential, decision)
        except AuthRejectedError as e:
            logger.warning(f"qBittorrent session rejected, re-authenticating: {e}")
            return True
        except ThrottlerError as e:
            logger.error(f"Failed to apply upload limit, retrying next cycle: {e}")

        return False

    async def shutdown(self):
        """Optionally lift the upload limit, then close HTTP sessions."""
        if self.settings.restore_on_shutdown and self.credential is not None:
            try:
                await asyncio.wait_for(
                    self.controller_manager.restore(self.credential),
                    timeout=SHUTDOWN_RESTORE_TIMEOUT_SECONDS
                )
            except asyncio.TimeoutError:
                logger.warning("Timeout restoring upload limit during shutdown - qBittorrent may remain throttled")
            except ThrottlerError as e:
                logger.warning(f"Could not restore upload limit during shutdown: {e}")

        await self.controller_manager.close_all()
        await self.jellyfin.close()
        self.credential = None
        logger.info("Polling monitor stopped")
