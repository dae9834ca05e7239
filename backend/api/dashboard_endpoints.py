"""
Dashboard page endpoint.

Serves the single-page dashboard. The page polls /api/status itself; the
only server-side work is embedding the shared agent roster.
"""

import json
from functools import lru_cache
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from models.roster import roster_for_display
from services.dashboard_poller import POLL_INTERVAL_SECONDS

router = APIRouter(tags=["Dashboard"])

DASHBOARD_TEMPLATE = Path(__file__).resolve().parent / "web" / "dashboard.html"


@lru_cache(maxsize=1)
def render_dashboard_page() -> str:
    template = DASHBOARD_TEMPLATE.read_text(encoding="utf-8")
    return (
        template
        .replace("__AGENT_ROSTER__", json.dumps(roster_for_display(), ensure_ascii=False))
        .replace("__POLL_INTERVAL_MS__", str(int(POLL_INTERVAL_SECONDS * 1000)))
    )


@router.get("/", response_class=HTMLResponse)
async def dashboard() -> HTMLResponse:
    """Mission Control dashboard page."""
    return HTMLResponse(content=render_dashboard_page(), headers={"Cache-Control": "no-store"})
