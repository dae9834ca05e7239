"""
Status Reader

Reads the factory status record from the store and turns it into the
dashboard payload:

- no record yet: a default "awaiting-connection" record built from the roster
- record older than STALE_THRESHOLD_MS: a stale view with every agent offline
- otherwise: the record as written

The store is never written to. The stale transform builds a new payload and
leaves the stored value alone.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from models.errors import InvalidStatusRecord
from models.roster import AGENT_ROSTER, FACTORY_NAME
from models.status import StatusRecord, parse_timestamp
from utils.logging import get_logger, log_status_read
from utils.status_store import StatusStore

logger = get_logger("status_reader")

STALE_THRESHOLD_MS = 10 * 60 * 1000
AWAITING_MESSAGE = "Waiting for factory to connect..."


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _isoformat(moment: datetime) -> str:
    # Same shape as the producer writes: millisecond precision, Z suffix
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_default_status(now: Optional[datetime] = None) -> Dict[str, Any]:
    """Offline record shown before the factory has written anything."""
    now = now or _utc_now()
    return {
        "timestamp": _isoformat(now),
        "factory": {
            "name": FACTORY_NAME,
            "status": "awaiting-connection",
            "onlineAgents": 0,
            "busyAgents": 0,
            "totalAgents": len(AGENT_ROSTER),
        },
        "agents": [
            {
                "id": agent.id,
                "name": agent.name,
                "role": agent.role,
                "model": agent.model,
                "description": agent.description,
                "color": agent.color,
                "status": "offline",
                "currentTask": None,
                "lastActive": None,
                "sessionsCount": 0,
                "tasksCompleted": 0,
                "tokensUsed": 0,
            }
            for agent in AGENT_ROSTER
        ],
        "activities": [],
        "metrics": {
            "totalSessions": 0,
            "activeToday": 0,
            "tasksCompleted": 0,
            "tokenSavings": 0,
            "tokenSavingsChange": 0,
            "throughput": 0,
            "successRate": 0,
            "successRateChange": 0,
        },
        "tasks": [],
        "message": AWAITING_MESSAGE,
    }


def record_age_ms(timestamp: Union[str, datetime], now: Optional[datetime] = None) -> float:
    now = now or _utc_now()
    if isinstance(timestamp, str):
        timestamp = parse_timestamp(timestamp)
    return (now - timestamp).total_seconds() * 1000


def is_stale(timestamp: str, now: Optional[datetime] = None) -> bool:
    """True once the record is strictly older than the threshold."""
    return record_age_ms(timestamp, now) > STALE_THRESHOLD_MS


def apply_stale_view(record: StatusRecord) -> Dict[str, Any]:
    """Payload for a stale record: factory marked stale, every agent offline."""
    payload = record.to_payload()
    payload["factory"] = {**payload["factory"], "status": "stale", "onlineAgents": 0}
    payload["agents"] = [{**agent, "status": "offline"} for agent in payload["agents"]]
    payload["staleWarning"] = f"Last update: {record.timestamp}"
    return payload


def parse_record(raw: str) -> StatusRecord:
    """
    Validate the stored JSON.

    Raises:
        InvalidStatusRecord: If the value is not JSON or breaks a record invariant.
    """
    try:
        return StatusRecord.model_validate_json(raw)
    except ValidationError as e:
        raise InvalidStatusRecord(f"Stored status record is invalid: {e.error_count()} error(s)") from e


async def read_status(store: StatusStore, now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Build the status payload for one request.

    Args:
        store: Store to read the record from
        now: Clock override; defaults to the current UTC time

    Returns:
        Dict ready to be serialized as the /api/status response

    Raises:
        StoreUnavailable: The store could not be reached
        InvalidStatusRecord: The stored value could not be read as a record
    """
    now = now or _utc_now()
    raw = await store.get_raw()

    if raw is None:
        log_status_read("default", {"key": store.key}, logger=logger)
        return build_default_status(now)

    record = parse_record(raw)
    age_ms = record_age_ms(record.written_at, now)

    if age_ms > STALE_THRESHOLD_MS:
        log_status_read(
            "stale",
            {"key": store.key, "age_ms": round(age_ms), "last_update": record.timestamp},
            logger=logger,
        )
        return apply_stale_view(record)

    log_status_read("fresh", {"key": store.key, "age_ms": round(age_ms)}, logger=logger)
    return record.to_payload()
