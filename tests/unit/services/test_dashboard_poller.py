"""
Tests for the dashboard poller state machine.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from services.dashboard_poller import (
    FETCH_FAILED_MESSAGE,
    DashboardPoller,
    DashboardState,
    render_state,
)


def _poller(handler, interval: float = 0) -> DashboardPoller:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://testserver")
    return DashboardPoller("http://testserver", interval=interval, client=client)


class TestPollOnce:

    @pytest.mark.asyncio
    async def test_successful_fetch(self, sample_record):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=sample_record)

        poller = _poller(handler)
        assert poller.state.loading is True

        state = await poller.poll_once()

        assert state.payload == sample_record
        assert state.loading is False
        assert state.error is None
        assert state.last_fetched is not None
        assert requests[0].url.path == "/api/status"
        assert requests[0].headers["cache-control"] == "no-cache"

    @pytest.mark.asyncio
    async def test_server_error_is_still_a_payload(self):
        poller = _poller(lambda request: httpx.Response(500, json={"error": "Failed to fetch factory status"}))

        state = await poller.poll_once()

        assert state.payload == {"error": "Failed to fetch factory status"}
        assert state.error is None

    @pytest.mark.asyncio
    async def test_network_failure_keeps_previous_payload(self, sample_record):
        responses = [httpx.Response(200, json=sample_record)]

        def handler(request):
            if responses:
                return responses.pop()
            raise httpx.ConnectError("Connection refused", request=request)

        poller = _poller(handler)
        await poller.poll_once()
        state = await poller.poll_once()

        assert state.error == FETCH_FAILED_MESSAGE
        assert state.payload == sample_record
        assert state.loading is False

    @pytest.mark.asyncio
    async def test_network_failure_before_any_payload(self):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        state = await _poller(handler).poll_once()

        assert state.payload is None
        assert state.error == FETCH_FAILED_MESSAGE
        assert render_state(state) == FETCH_FAILED_MESSAGE


class TestRun:

    @pytest.mark.asyncio
    async def test_polls_immediately_then_on_interval(self, sample_record):
        calls = []
        updates = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=sample_record)

        async with _poller(handler) as poller:
            await poller.run(lambda state: updates.append(state.payload is not None), iterations=3)

        assert len(calls) == 3
        assert updates == [True, True, True]

    @pytest.mark.asyncio
    async def test_async_callback_is_awaited(self, sample_record):
        seen = []

        async def on_update(state):
            seen.append(state.error)

        poller = _poller(lambda request: httpx.Response(200, json=sample_record))
        await poller.run(on_update, iterations=1)

        assert seen == [None]


    @pytest.mark.asyncio
    @pytest.mark.parametrize("clock,expected_sleeps", [
        # 2.5s and 3s responses: still ticks at 10s and 20s
        ([0.0, 2.5, 13.0], [7.5, 7.0]),
        # first poll overran two ticks: next poll waits for the 30s tick
        ([0.0, 25.0, 30.0], [5.0, 10.0]),
    ])
    async def test_ticks_from_start_time(self, sample_record, clock, expected_sleeps):
        fake_time = MagicMock()
        fake_time.monotonic.side_effect = clock
        poller = _poller(lambda request: httpx.Response(200, json=sample_record), interval=10.0)

        with patch("services.dashboard_poller.time", fake_time), \
             patch("services.dashboard_poller.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            await poller.run(iterations=3)

        assert [call.args[0] for call in mock_sleep.await_args_list] == expected_sleeps


class TestRenderState:

    def test_loading(self):
        assert render_state(DashboardState()) == "Connecting to factory..."

    def test_api_error_body(self):
        state = DashboardState(payload={"error": "Failed to fetch factory status"}, loading=False)

        assert render_state(state) == "Status API error: Failed to fetch factory status"

    def test_dashboard_with_stale_connection(self, sample_record):
        state = DashboardState(payload=sample_record, loading=False, error=FETCH_FAILED_MESSAGE)

        text = render_state(state)

        assert text.startswith(f"{FETCH_FAILED_MESSAGE} (showing last update)")
        assert "SpinTheBloc Factory" in text
