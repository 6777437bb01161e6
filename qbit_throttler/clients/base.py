"""
Base HTTP client shared by the qBittorrent and Jellyfin clients.
"""
import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
import aiohttp
from loguru import logger

from qbit_throttler.constants import HTTP_CLIENT_TIMEOUT_SECONDS
from qbit_throttler.utils.errors import Phase, TransientError


class BaseClient:
    """Owns one aiohttp session and turns transport failures into TransientError."""

    #: Display name used in log lines and error messages
    service_name = "service"

    def __init__(self, url: str, timeout: float = HTTP_CLIENT_TIMEOUT_SECONDS):
        self.url = url.rstrip("/")
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            # Cookies only travel through explicit headers
            self._session = aiohttp.ClientSession(
                cookie_jar=aiohttp.DummyCookieJar(),
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self._session

    async def close(self):
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    @asynccontextmanager
    async def _request(self, method: str, endpoint: str, phase: Phase, **kwargs) -> AsyncIterator[aiohttp.ClientResponse]:
        """
        Issue a request and yield the response.

        Connection errors, timeouts and payload errors (including those raised
        while the caller reads the body) become TransientError.
        """
        url = f"{self.url}{endpoint}"
        try:
            async with self.session.request(method, url, **kwargs) as response:
                yield response
        except aiohttp.ClientError as e:
            logger.debug(f"{self.service_name} {method} {endpoint} failed: {type(e).__name__}: {e}")
            raise TransientError(
                f"Error calling {self.service_name}: {type(e).__name__}: {e}", phase
            ) from e
        except asyncio.TimeoutError as e:
            logger.debug(f"{self.service_name} {method} {endpoint} timed out after {self.timeout}s")
            raise TransientError(
                f"Timed out calling {self.service_name} after {self.timeout}s", phase
            ) from e
