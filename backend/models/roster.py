"""
Agent roster for the factory.

One table, keyed by agent id, shared by the default offline record and the
dashboard page (which also needs the emoji for the task-flow diagram).
"""

from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AgentIdentity(BaseModel):
    """Static description of a known agent."""
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    role: str
    model: str
    description: str
    color: str
    emoji: str = Field(..., description="Display glyph used by the dashboard only")


FACTORY_NAME = "SpinTheBloc Factory"

AGENT_ROSTER: Tuple[AgentIdentity, ...] = (
    AgentIdentity(
        id="vincent",
        name="Vincent",
        role="Front Desk",
        model="llama3.1",
        description="Greetings, simple queries, triage",
        color="#22c55e",
        emoji="📞",
    ),
    AgentIdentity(
        id="vector",
        name="Vector",
        role="Factory Manager",
        model="qwen2.5:32b",
        description="Planning, architecture, review",
        color="#00d4ff",
        emoji="🧠",
    ),
    AgentIdentity(
        id="vivi",
        name="Vivi",
        role="Builder",
        model="qwen2.5-coder:32b",
        description="Code generation from specs",
        color="#ff00aa",
        emoji="⚙️",
    ),
    AgentIdentity(
        id="bigdawg",
        name="Big Dawg",
        role="Regional Manager",
        model="claude-sonnet-4-5",
        description="Strategy, crisis, brand",
        color="#8b5cf6",
        emoji="🐕",
    ),
)


def roster_by_id() -> Dict[str, AgentIdentity]:
    return {agent.id: agent for agent in AGENT_ROSTER}


def roster_for_display() -> List[Dict[str, str]]:
    """Roster as camelCase dicts, ready to embed in the dashboard page."""
    return [agent.model_dump(by_alias=True) for agent in AGENT_ROSTER]
