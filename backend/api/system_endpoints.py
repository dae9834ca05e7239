"""
System API Endpoints

Liveness and store-reachability checks.
"""

from typing import Any, Dict

from fastapi import APIRouter, Request

from api.status_endpoints import get_status_store
from models.errors import StoreUnavailable
from utils.logging import get_logger

logger = get_logger("system-api")
router = APIRouter(tags=["System"])


@router.get("/health")
async def health_check() -> Dict[str, str]:
    """
    Simple liveness check.

    Returns:
        Dict with health status information
    """
    return {
        "status": "healthy",
        "service": "mission-control",
    }


@router.get("/api/system/health")
async def system_health(request: Request) -> Dict[str, Any]:
    """
    Check that the status store is configured and answers PING.

    Never raises; an unreachable store is reported as ``unhealthy``.
    """
    try:
        store = get_status_store(request)
    except StoreUnavailable as e:
        logger.warning("Status store unavailable", extra={"data": {"error": str(e)}})
        return {
            "status": "unhealthy",
            "store": {"configured": False, "reachable": False, "key": None},
        }

    reachable = await store.ping()
    return {
        "status": "healthy" if reachable else "unhealthy",
        "store": {"configured": True, "reachable": reachable, "key": store.key},
    }
