"""
Factory Status API Endpoints

Serves the cached factory status record to the dashboard.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from config import settings
from models.errors import StatusReadError
from models.status import ErrorResponse
from services.status_reader import read_status
from utils.logging import get_logger
from utils.status_store import StatusStore

logger = get_logger("status-api")
router = APIRouter(prefix="/api", tags=["Factory Status"])

NO_STORE_HEADERS = {"Cache-Control": "no-store"}
FETCH_FAILED_MESSAGE = "Failed to fetch factory status"


def get_status_store(request: Request) -> StatusStore:
    """
    Return the app's status store, creating it on first use.

    The client lives on ``app.state`` for the lifetime of the process and is
    closed by the application lifespan.

    Raises:
        StoreUnavailable: If the store credentials are not configured.
    """
    store = getattr(request.app.state, "status_store", None)
    if store is None:
        store = StatusStore.from_settings(settings)
        request.app.state.status_store = store
    return store


@router.get(
    "/status",
    responses={500: {"model": ErrorResponse, "description": "Status store unavailable"}},
)
async def get_status(request: Request):
    """
    Get the current factory status.

    Returns the stored record, a stale view of it when it is older than ten
    minutes, or a default offline record if the factory has never reported.
    """
    try:
        store = get_status_store(request)
        payload = await read_status(store)
    except StatusReadError as e:
        logger.error(
            "Failed to fetch factory status",
            exc_info=True,
            extra={"data": {"error_type": type(e).__name__, "error": str(e)}}
        )
        return JSONResponse(
            status_code=500,
            content={"error": FETCH_FAILED_MESSAGE},
            headers=NO_STORE_HEADERS,
        )

    return JSONResponse(content=payload, headers=NO_STORE_HEADERS)
