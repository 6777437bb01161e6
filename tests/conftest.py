"""
tests/conftest.py: Shared fixtures: fake servers, settings and a wired monitor.
"""
import pytest

from qbit_throttler.clients import JellyfinClient, QBittorrentClient
from qbit_throttler.config import Settings
from qbit_throttler.services import ControllerManager, DecisionEngine, PollingMonitor
from tests.fakes import FakeJellyfin, FakeQBittorrent, SleepRecorder

# Nothing listens here, connections are refused immediately
UNREACHABLE_URL = "http://127.0.0.1:1"


def server_url(server) -> str:
    return str(server.make_url("")).rstrip("/")


@pytest.fixture
def qbit():
    return FakeQBittorrent()


@pytest.fixture
def jellyfin():
    return FakeJellyfin()


@pytest.fixture
async def qbit_url(aiohttp_server, qbit):
    server = await aiohttp_server(qbit.app())
    return server_url(server)


@pytest.fixture
async def jellyfin_url(aiohttp_server, jellyfin):
    server = await aiohttp_server(jellyfin.app())
    return server_url(server)


@pytest.fixture
def make_settings():
    """Build Settings from keyword overrides without reading any .env file."""
    def _make(**overrides) -> Settings:
        values = {
            "qb_address": UNREACHABLE_URL,
            "qb_username": "admin",
            "qb_password": "adminadmin",
            "jellyfin_address": UNREACHABLE_URL,
            "jellyfin_api_token": "jf-token",
            "jellyfin_active_within_secs": 60,
            "poll_interval_secs": 5,
            "request_timeout_secs": 2,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return _make


@pytest.fixture
async def qbit_client(qbit_url):
    client = QBittorrentClient(qbit_url, "admin", "adminadmin", timeout=2)
    yield client
    await client.close()


@pytest.fixture
async def jellyfin_client(jellyfin_url):
    client = JellyfinClient(jellyfin_url, "jf-token", active_within_secs=60, timeout=2)
    yield client
    await client.close()


@pytest.fixture
async def make_monitor(make_settings):
    """Wire a PollingMonitor against the given URLs with a recording sleep."""
    created = []

    def _make(qb_address, jellyfin_address, stop_after=None, **overrides):
        settings = make_settings(qb_address=qb_address, jellyfin_address=jellyfin_address, **overrides)
        qbittorrent = QBittorrentClient(settings.qb_address, settings.qb_username,
                                        settings.qb_password.get_secret_value(), timeout=2)
        jellyfin_client = JellyfinClient(settings.jellyfin_address,
                                         settings.jellyfin_api_token.get_secret_value(),
                                         settings.jellyfin_active_within_secs, timeout=2)
        sleep = SleepRecorder(stop_after=stop_after)
        monitor = PollingMonitor(
            settings,
            qbittorrent,
            jellyfin_client,
            DecisionEngine(settings.throttled_upload_limit),
            ControllerManager(qbittorrent),
            sleep=sleep,
        )
        created.append(monitor)
        return monitor, sleep

    yield _make

    for monitor in created:
        await monitor.qbittorrent.close()
        await monitor.jellyfin.close()
