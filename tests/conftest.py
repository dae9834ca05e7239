"""
Pytest configuration and shared fixtures for Mission Control tests.
"""

import copy
import json
import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

# Backend modules are imported by their top-level names (api, models, ...)
PROJECT_ROOT = Path(__file__).resolve().parent.parent
BACKEND_PATH = PROJECT_ROOT / "backend"
if str(BACKEND_PATH) not in sys.path:
    sys.path.insert(0, str(BACKEND_PATH))


SAMPLE_RECORD = {
    "timestamp": "2024-01-01T00:00:00Z",
    "factory": {
        "name": "SpinTheBloc Factory",
        "status": "operational",
        "onlineAgents": 2,
        "busyAgents": 1,
        "totalAgents": 4,
    },
    "agents": [
        {
            "id": "vincent",
            "name": "Vincent",
            "role": "Front Desk",
            "model": "llama3.1",
            "description": "Greetings, simple queries, triage",
            "color": "#22c55e",
            "status": "online",
            "currentTask": None,
            "lastActive": "2023-12-31T23:58:00Z",
            "sessionsCount": 12,
            "tasksCompleted": 30,
            "tokensUsed": 120000,
        },
        {
            "id": "vector",
            "name": "Vector",
            "role": "Factory Manager",
            "model": "qwen2.5:32b",
            "description": "Planning, architecture, review",
            "color": "#00d4ff",
            "status": "busy",
            "currentTask": "Plan landing page",
            "lastActive": "2023-12-31T23:59:30Z",
            "sessionsCount": 8,
            "tasksCompleted": 21,
            "tokensUsed": 340000,
        },
        {
            "id": "vivi",
            "name": "Vivi",
            "role": "Builder",
            "model": "qwen2.5-coder:32b",
            "description": "Code generation from specs",
            "color": "#ff00aa",
            "status": "online",
            "currentTask": None,
            "lastActive": "2023-12-31T23:50:00Z",
            "sessionsCount": 5,
            "tasksCompleted": 40,
            "tokensUsed": 910000,
        },
        {
            "id": "bigdawg",
            "name": "Big Dawg",
            "role": "Regional Manager",
            "model": "claude-sonnet-4-5",
            "description": "Strategy, crisis, brand",
            "color": "#8b5cf6",
            "status": "offline",
            "currentTask": None,
            "lastActive": None,
            "sessionsCount": 1,
            "tasksCompleted": 5,
            "tokensUsed": 45000,
        },
    ],
    "activities": [
        {
            "id": "act-1",
            "timestamp": "2023-12-31T23:40:00Z",
            "agent": "Vincent",
            "action": "Triaged inbound request",
            "details": "Routed to Vector",
            "type": "triage",
        },
        {
            "id": "act-2",
            "timestamp": "2023-12-31T23:55:00Z",
            "agent": "Vector",
            "action": "Started planning",
            "details": "Landing page",
            "type": "plan",
        },
    ],
    "metrics": {
        "totalSessions": 26,
        "activeToday": 3,
        "tasksCompleted": 96,
        "tokenSavings": 47.82,
        "tokenSavingsChange": 23,
        "throughput": 4.2,
        "successRate": 94,
        "successRateChange": 2,
    },
    "tasks": [
        {"id": "task-1", "title": "Plan landing page", "assignedTo": "Vector", "status": "in-progress"},
        {"id": "task-2", "title": "Build hero section", "assignedTo": "Vivi", "status": "queued"},
    ],
}


@pytest.fixture
def sample_record():
    """A fully populated status record as the factory writes it."""
    return copy.deepcopy(SAMPLE_RECORD)


@pytest.fixture
def mock_redis():
    """Async Redis client double holding no record."""
    client = AsyncMock()
    client.get = AsyncMock(return_value=None)
    client.ping = AsyncMock(return_value=True)
    return client


@pytest.fixture
def stored(mock_redis):
    """Put a record (dict or raw string) under the status key of ``mock_redis``."""
    def _store(record):
        raw = record if isinstance(record, str) or record is None else json.dumps(record)
        mock_redis.get.return_value = raw
        return raw
    return _store
