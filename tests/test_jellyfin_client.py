"""
Unit tests: Jellyfin active session sampling.
"""
import pytest

from qbit_throttler.clients import JellyfinClient
from qbit_throttler.utils.errors import Phase, TransientError
from tests.conftest import UNREACHABLE_URL


class TestCountActiveSessions:

    async def test_sends_token_and_window(self, jellyfin, jellyfin_client):
        await jellyfin_client.count_active_sessions()

        assert jellyfin.requests == [{"authorization": "MediaBrowser Token=jf-token", "active_within": "60"}]

    async def test_counts_array_length(self, jellyfin, jellyfin_client):
        jellyfin.default = (200, '[{"Id": "x"}, {"Id": "y"}, {}]')
        assert await jellyfin_client.count_active_sessions() == 3

    async def test_empty_array_is_zero(self, jellyfin, jellyfin_client):
        jellyfin.default = (200, "[]")
        assert await jellyfin_client.count_active_sessions() == 0

    @pytest.mark.parametrize("body", ['{"Id": "x"}', "null", "42", '"sessions"', "not json at all", ""])
    async def test_non_array_body_counts_as_zero(self, jellyfin, jellyfin_client, body):
        jellyfin.default = (200, body)
        assert await jellyfin_client.count_active_sessions() == 0

    @pytest.mark.parametrize("status", [401, 404, 500])
    async def test_bad_status_transient(self, jellyfin, jellyfin_client, status):
        jellyfin.default = (status, "[]")

        with pytest.raises(TransientError) as exc_info:
            await jellyfin_client.count_active_sessions()

        assert exc_info.value.status == status
        assert exc_info.value.phase == Phase.SAMPLE

    async def test_slow_server_times_out_as_transient(self, jellyfin, jellyfin_url):
        jellyfin.delay = 3
        client = JellyfinClient(jellyfin_url, "jf-token", timeout=0.5)
        try:
            with pytest.raises(TransientError) as exc_info:
                await client.count_active_sessions()
        finally:
            await client.close()

        assert exc_info.value.phase == Phase.SAMPLE
        assert exc_info.value.status is None
        assert "Timed out" in str(exc_info.value)

    async def test_connection_refused_transient(self):
        client = JellyfinClient(UNREACHABLE_URL, "jf-token", timeout=2)
        try:
            with pytest.raises(TransientError):
                await client.count_active_sessions()
        finally:
            await client.close()
