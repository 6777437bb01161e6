"""
Controller manager for applying throttle decisions to qBittorrent.
"""
from typing import Optional
from loguru import logger
from qbit_throttler.clients import QBittorrentClient
from qbit_throttler.constants import UNTHROTTLED_UPLOAD_LIMIT_BYTES
from qbit_throttler.models import Credential, ThrottleDecision, ThrottleLevel


class ControllerManager:
    """
    Applies throttle decisions through the qBittorrent client.

    Every decision is sent, changed or not; setting the same limit twice is a
    no-op on the qBittorrent side. The last level is tracked only to choose
    the log level.
    """

    def __init__(self, client: QBittorrentClient):
        self.client = client
        self._last_level: Optional[ThrottleLevel] = None

    async def apply(self, credential: Credential, decision: ThrottleDecision):
        """
        Apply one decision.

        Classified errors from the client propagate unchanged.
        """
        await self.client.set_upload_limit(credential, decision.upload_limit)

        if decision.level != self._last_level:
            logger.info(
                f"Upload {decision.level.value}: limit={decision.upload_limit} B/s "
                f"({decision.session_count} active session(s))"
            )
        else:
            logger.debug(f"Re-applied upload limit {decision.upload_limit} B/s")
        self._last_level = decision.level

    async def restore(self, credential: Credential):
        """Remove the upload limit."""
        await self.client.set_upload_limit(credential, UNTHROTTLED_UPLOAD_LIMIT_BYTES)
        self._last_level = ThrottleLevel.UNTHROTTLED
        logger.info("Restored qBittorrent upload limit to unlimited")

    async def close_all(self):
        """Close the client connection."""
        try:
            await self.client.close()
        except Exception as e:
            logger.error(f"Error closing {self.client.service_name} client: {e}")
