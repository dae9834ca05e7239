"""
Mission Control Models Package
"""

from .errors import InvalidStatusRecord, StatusReadError, StoreUnavailable
from .roster import AGENT_ROSTER, FACTORY_NAME, AgentIdentity
from .status import (
    ActivityEvent,
    AgentView,
    FactorySummary,
    Metrics,
    QueuedTask,
    StatusRecord,
)

__all__ = [
    'AGENT_ROSTER',
    'FACTORY_NAME',
    'ActivityEvent',
    'AgentIdentity',
    'AgentView',
    'FactorySummary',
    'InvalidStatusRecord',
    'Metrics',
    'QueuedTask',
    'StatusReadError',
    'StatusRecord',
    'StoreUnavailable',
]
