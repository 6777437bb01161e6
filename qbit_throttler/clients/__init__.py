"""
API clients for external services.
"""
from qbit_throttler.clients.base import BaseClient
from qbit_throttler.clients.qbittorrent import QBittorrentClient
from qbit_throttler.clients.jellyfin import JellyfinClient
from qbit_throttler.config import Settings

__all__ = [
    "BaseClient",
    "QBittorrentClient",
    "JellyfinClient",
    "create_clients",
]


def create_clients(settings: Settings) -> tuple[QBittorrentClient, JellyfinClient]:
    """
    Build the torrent and media server clients from settings.

    Args:
        settings: Loaded Settings instance

    Returns:
        Tuple of (qBittorrent client, Jellyfin client)
    """
    qbittorrent = QBittorrentClient(
        url=settings.qb_address,
        username=settings.qb_username,
        password=settings.qb_password.get_secret_value(),
        timeout=settings.request_timeout_secs
    )
    jellyfin = JellyfinClient(
        url=settings.jellyfin_address,
        api_token=settings.jellyfin_api_token.get_secret_value(),
        active_within_secs=settings.jellyfin_active_within_secs,
        timeout=settings.request_timeout_secs
    )
    return qbittorrent, jellyfin
