"""
Dashboard poller

Polls /api/status on a fixed interval and keeps the ephemeral dashboard
state: the last payload, a loading flag and the last connection error.
Used by the console dashboard (``mission-control-watch``).
"""

import argparse
import asyncio
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Optional, Union

import httpx

from services.dashboard_view import build_dashboard_view, render_dashboard_text
from utils.logging import configure_logging, get_logger

logger = get_logger("dashboard_poller")

STATUS_PATH = "/api/status"
POLL_INTERVAL_SECONDS = 10.0
FETCH_FAILED_MESSAGE = "Failed to connect to factory"


@dataclass
class DashboardState:
    payload: Optional[Dict[str, Any]] = None
    loading: bool = True
    error: Optional[str] = None
    last_fetched: Optional[datetime] = None


UpdateCallback = Callable[[DashboardState], Union[None, Awaitable[None]]]


class DashboardPoller:
    """Fetch the status payload on a fixed interval."""

    def __init__(
        self,
        base_url: str,
        interval: float = POLL_INTERVAL_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 5.0,
    ):
        self.interval = interval
        self.state = DashboardState()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def poll_once(self) -> DashboardState:
        """
        Fetch the payload once and update the state.

        Any HTTP response counts as a payload, including a 500 error body.
        Only a transport failure sets ``error``; the previous payload is kept.
        """
        try:
            response = await self._client.get(
                STATUS_PATH,
                headers={"Cache-Control": "no-cache", "Pragma": "no-cache"},
            )
            payload = response.json()
        except (httpx.TransportError, ValueError) as e:
            logger.warning(
                "Dashboard fetch failed",
                extra={"data": {"error": str(e), "error_type": type(e).__name__}}
            )
            self.state.error = FETCH_FAILED_MESSAGE
        else:
            self.state.payload = payload
            self.state.error = None
            self.state.last_fetched = datetime.now(timezone.utc)
            logger.debug(
                "Dashboard fetched",
                extra={"data": {"status_code": response.status_code}}
            )
        finally:
            self.state.loading = False

        return self.state

    async def run(self, on_update: Optional[UpdateCallback] = None, iterations: Optional[int] = None) -> None:
        """
        Poll immediately, then every ``interval`` seconds.

        Ticks are counted from the first poll on the monotonic clock, so a slow
        response does not push later polls back. Ticks missed entirely are
        skipped. Runs until cancelled, or for ``iterations`` polls when given.
        """
        count = 0
        next_tick = time.monotonic()
        while iterations is None or count < iterations:
            state = await self.poll_once()
            count += 1
            if on_update is not None:
                result = on_update(state)
                if asyncio.iscoroutine(result):
                    await result
            if iterations is not None and count >= iterations:
                break
            next_tick += self.interval
            now = time.monotonic()
            if self.interval > 0 and next_tick < now:
                next_tick += ((now - next_tick) // self.interval + 1) * self.interval
            await asyncio.sleep(max(0.0, next_tick - now))

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "DashboardPoller":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def render_state(state: DashboardState) -> str:
    """Text for one poll: loading, connection error or the dashboard itself."""
    if state.payload is None:
        if state.error:
            return state.error
        return "Connecting to factory..."

    if "error" in state.payload and "factory" not in state.payload:
        return f"Status API error: {state.payload['error']}"

    text = render_dashboard_text(build_dashboard_view(state.payload))
    if state.error:
        text = f"{state.error} (showing last update)\n{text}"
    return text


def _print_state(state: DashboardState) -> None:
    print("\033[2J\033[H", end="")
    print(render_state(state), flush=True)


def main(argv=None) -> None:
    from config import settings

    parser = argparse.ArgumentParser(description="Watch the Mission Control dashboard in the terminal")
    parser.add_argument("--url", default=settings.DASHBOARD_URL, help="Base URL of the Mission Control API")
    parser.add_argument("--interval", type=float, default=settings.DASHBOARD_POLL_INTERVAL, help="Seconds between polls")
    parser.add_argument("--once", action="store_true", help="Poll once and exit")
    args = parser.parse_args(argv)

    configure_logging(service_name="dashboard-watch", log_level=settings.LOG_LEVEL, enable_json=False)

    async def _run():
        async with DashboardPoller(args.url, interval=args.interval) as poller:
            await poller.run(_print_state, iterations=1 if args.once else None)

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
