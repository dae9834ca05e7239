"""
Factory status record models.

The record is written by the factory process as camelCase JSON. These models
validate it on read; fields the producer adds beyond the ones below are kept.
"""

from datetime import datetime, timezone
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


AgentStatus = Literal["online", "busy", "idle", "offline"]
TaskStatus = Literal["in-progress", "queued", "completed", "failed"]


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 instant; naive values are taken as UTC."""
    parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class FactorySummary(CamelModel):
    name: str = ""
    status: str
    online_agents: int = Field(default=0, ge=0)
    busy_agents: int = Field(default=0, ge=0)
    total_agents: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def check_agent_counts(self):
        if self.online_agents + self.busy_agents > self.total_agents:
            raise ValueError(
                f"onlineAgents ({self.online_agents}) + busyAgents ({self.busy_agents}) "
                f"exceeds totalAgents ({self.total_agents})"
            )
        return self


class AgentView(CamelModel):
    id: str
    name: str
    role: str = ""
    model: str = ""
    description: str = ""
    color: str = ""
    status: AgentStatus
    current_task: Optional[str] = None
    last_active: Optional[str] = None
    sessions_count: int = Field(default=0, ge=0)
    tasks_completed: int = Field(default=0, ge=0)
    tokens_used: int = Field(default=0, ge=0)


class ActivityEvent(CamelModel):
    id: str
    timestamp: str
    agent: str
    action: str
    details: str = ""
    type: Optional[str] = None


class Metrics(CamelModel):
    total_sessions: int = Field(default=0, ge=0)
    active_today: int = Field(default=0, ge=0)
    tasks_completed: int = Field(default=0, ge=0)
    # Display metrics, computed by the producer
    token_savings: Union[int, float] = 0
    token_savings_change: Union[int, float] = 0
    throughput: Union[int, float] = 0
    success_rate: Union[int, float] = 0
    success_rate_change: Union[int, float] = 0


class QueuedTask(CamelModel):
    id: str
    title: str
    assigned_to: str
    status: TaskStatus


class StatusRecord(CamelModel):
    """Snapshot of the factory as last written to the store."""
    timestamp: str
    factory: FactorySummary
    agents: List[AgentView] = Field(default_factory=list)
    activities: List[ActivityEvent] = Field(default_factory=list)
    metrics: Metrics = Field(default_factory=Metrics)
    tasks: List[QueuedTask] = Field(default_factory=list)

    @field_validator("timestamp")
    @classmethod
    def check_timestamp(cls, value: str) -> str:
        # Kept verbatim; only checked for parseability
        parse_timestamp(value)
        return value

    @model_validator(mode="after")
    def check_unique_agent_ids(self):
        seen = set()
        for agent in self.agents:
            if agent.id in seen:
                raise ValueError(f"duplicate agent id: {agent.id}")
            seen.add(agent.id)
        return self

    @property
    def written_at(self) -> datetime:
        return parse_timestamp(self.timestamp)

    def to_payload(self) -> dict:
        """Wire form of the record (camelCase, producer extras included)."""
        return self.model_dump(by_alias=True)


class ErrorResponse(BaseModel):
    error: str
