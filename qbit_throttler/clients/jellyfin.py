"""
Jellyfin (and Emby) API client for sampling active playback sessions.
"""
from typing import Any
from loguru import logger

from qbit_throttler.clients.base import BaseClient
from qbit_throttler.constants import ACTIVE_WITHIN_SECONDS, HTTP_CLIENT_TIMEOUT_SECONDS
from qbit_throttler.utils.errors import Phase, TransientError

_NOT_PARSED = object()


class JellyfinClient(BaseClient):
    """Client for the Jellyfin sessions endpoint."""

    service_name = "Jellyfin"

    def __init__(
        self,
        url: str,
        api_token: str,
        active_within_secs: int = ACTIVE_WITHIN_SECONDS,
        timeout: float = HTTP_CLIENT_TIMEOUT_SECONDS,
    ):
        super().__init__(url, timeout)
        self.api_token = api_token
        self.active_within_secs = active_within_secs

    async def count_active_sessions(self) -> int:
        """
        Count sessions active within the configured trailing window.

        Only the number of sessions matters, not their contents. A body that
        is not a JSON array counts as zero sessions.

        Raises:
            TransientError: non-2xx status or transport failure
        """
        params = {"activeWithinSeconds": str(self.active_within_secs)}
        headers = {"Authorization": f"MediaBrowser Token={self.api_token}"}

        async with self._request("GET", "/Sessions", Phase.SAMPLE, params=params, headers=headers) as response:
            if not 200 <= response.status < 300:
                raise TransientError(f"Bad response from {self.service_name}: {response.status}", Phase.SAMPLE, response.status)

            try:
                body: Any = await response.json(content_type=None)
            except ValueError as e:
                logger.debug(f"Jellyfin sessions body is not valid JSON: {e}")
                body = _NOT_PARSED

        if isinstance(body, list):
            logger.debug(f"Jellyfin: {len(body)} active session(s)")
            return len(body)

        if body is not _NOT_PARSED:
            logger.debug(f"Jellyfin sessions body is {type(body).__name__}, not a list - counting as 0")
        return 0
