"""
qBittorrent API client for logging in and controlling the upload limit.
"""
from typing import Optional
from loguru import logger

from qbit_throttler.clients.base import BaseClient
from qbit_throttler.constants import HTTP_CLIENT_TIMEOUT_SECONDS
from qbit_throttler.models import Credential
from qbit_throttler.utils.errors import Phase, ProtocolViolationError, classify_status


def _usable_cookie(value: Optional[str]) -> bool:
    """A cookie is usable when it is non-empty printable ASCII."""
    if not value or not value.strip():
        return False
    return all(ch == "\t" or 32 <= ord(ch) <= 126 for ch in value)


class QBittorrentClient(BaseClient):
    """Client for interacting with qBittorrent Web API."""

    service_name = "qBittorrent"

    def __init__(self, url: str, username: str, password: str, timeout: float = HTTP_CLIENT_TIMEOUT_SECONDS):
        super().__init__(url, timeout)
        self.username = username
        self.password = password

    async def authenticate(self) -> Credential:
        """
        Log in and return a fresh session credential.

        No retries happen here; the caller decides what to do with a failure.

        Returns:
            Credential holding the raw Set-Cookie value

        Raises:
            AuthRejectedError: qBittorrent answered 401/403
            TransientError: other non-200 status or transport failure
            ProtocolViolationError: 200 without a usable Set-Cookie header
        """
        data = {"username": self.username, "password": self.password}
        headers = {"Referer": self.url}

        async with self._request("POST", "/api/v2/auth/login", Phase.LOGIN, data=data, headers=headers) as response:
            if response.status != 200:
                raise classify_status(response.status, Phase.LOGIN, self.service_name)

            logger.debug(f"Login response headers: {sorted(response.headers.keys())}")
            cookie = response.headers.get("Set-Cookie")

        if not _usable_cookie(cookie):
            raise ProtocolViolationError("No Cookie Returned", Phase.LOGIN, 200)

        credential = Credential(cookie=cookie)
        logger.debug(f"Authenticated with qBittorrent ({credential.masked})")
        return credential

    async def set_upload_limit(self, credential: Credential, limit: int):
        """
        Set the global upload limit.

        Args:
            credential: Session credential from authenticate()
            limit: Bytes/sec, 0 means unlimited

        Raises:
            AuthRejectedError: the credential is no longer accepted
            TransientError: other non-200 status or transport failure
        """
        data = {"limit": str(limit)}
        headers = {"Cookie": credential.cookie}

        async with self._request("POST", "/api/v2/transfer/setUploadLimit", Phase.APPLY, data=data, headers=headers) as response:
            if response.status != 200:
                raise classify_status(response.status, Phase.APPLY, self.service_name)

        logger.debug(f"Set qBittorrent upload limit: {limit} B/s")
