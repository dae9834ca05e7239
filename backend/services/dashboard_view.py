"""
Dashboard presentation rules.

Turns a /api/status payload into what the dashboard shows: agent cards, the
fixed task-flow diagram, the active queue and the activity feed. Nothing here
feeds back into the status logic.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from models.roster import roster_by_id
from models.status import parse_timestamp

STATUS_COLORS = {
    "online": "#22c55e",
    "busy": "#facc15",
    "idle": "#fbbf24",
    "offline": "#6b7280",
}
DEFAULT_STATUS_COLOR = "#6b7280"

TASK_STATUS_BADGES = {
    "in-progress": {"bg": "#06b6d4", "text": "in-progress"},
    "queued": {"bg": "#eab308", "text": "queued"},
    "completed": {"bg": "#22c55e", "text": "completed"},
    "failed": {"bg": "#ef4444", "text": "failed"},
}

# Static diagram; it does not follow the agents in the payload.
TASK_FLOW_STAGES = (
    {"agent_id": "vincent", "label": "Vincent", "stage": "intake"},
    {"agent_id": "vector", "label": "Vector", "stage": "plan"},
    {"agent_id": "vivi", "label": "Vivi", "stage": "build"},
    {"agent_id": None, "label": "Output", "stage": "done"},
)
OVERSIGHT_AGENT_ID = "bigdawg"


def format_relative_time(timestamp: str, now: Optional[datetime] = None) -> str:
    """Render a timestamp as ``now``, ``Nm ago``, ``Nh ago`` or ``Nd ago``."""
    now = now or datetime.now(timezone.utc)
    try:
        then = parse_timestamp(timestamp)
    except (TypeError, ValueError):
        return ""

    minutes = int((now - then).total_seconds() // 60)
    if minutes < 1:
        return "now"
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"


def status_color(status: str) -> str:
    return STATUS_COLORS.get(status, DEFAULT_STATUS_COLOR)


def task_status_badge(status: str) -> Dict[str, str]:
    return TASK_STATUS_BADGES.get(status, TASK_STATUS_BADGES["queued"])


def format_tokens(tokens: int) -> str:
    return f"{round((tokens or 0) / 1000)}K"


@dataclass
class AgentCard:
    id: str
    name: str
    role: str
    model: str
    status: str
    status_color: str
    current_task: Optional[str]
    tasks_completed: int
    tokens: str


@dataclass
class FlowStage:
    label: str
    stage: str
    emoji: str


@dataclass
class QueueItem:
    title: str
    assigned_to: str
    badge: Dict[str, str]


@dataclass
class ActivityItem:
    agent: str
    action: str
    when: str
    timestamp: str


@dataclass
class DashboardView:
    factory_name: str
    factory_status: str
    banner: Optional[str]
    metrics: Dict[str, Any]
    agents: List[AgentCard] = field(default_factory=list)
    flow: List[FlowStage] = field(default_factory=list)
    oversight: Optional[FlowStage] = None
    queue: List[QueueItem] = field(default_factory=list)
    activities: List[ActivityItem] = field(default_factory=list)


def build_task_flow() -> List[FlowStage]:
    roster = roster_by_id()
    stages = []
    for entry in TASK_FLOW_STAGES:
        agent = roster.get(entry["agent_id"]) if entry["agent_id"] else None
        stages.append(FlowStage(
            label=entry["label"],
            stage=entry["stage"],
            emoji=agent.emoji if agent else "✅",
        ))
    return stages


def _sort_key(activity: Dict[str, Any]) -> datetime:
    try:
        return parse_timestamp(activity.get("timestamp", ""))
    except (TypeError, ValueError):
        return datetime.min.replace(tzinfo=timezone.utc)


def build_dashboard_view(payload: Dict[str, Any], now: Optional[datetime] = None) -> DashboardView:
    """Build the view model for one /api/status payload."""
    now = now or datetime.now(timezone.utc)
    factory = payload.get("factory") or {}
    roster = roster_by_id()

    banner = payload.get("staleWarning") or payload.get("message")

    agents = [
        AgentCard(
            id=agent.get("id", ""),
            name=agent.get("name", ""),
            role=agent.get("role", ""),
            model=agent.get("model", ""),
            status=agent.get("status", "offline"),
            status_color=status_color(agent.get("status", "offline")),
            current_task=agent.get("currentTask"),
            tasks_completed=agent.get("tasksCompleted") or 0,
            tokens=format_tokens(agent.get("tokensUsed") or 0),
        )
        for agent in payload.get("agents") or []
    ]

    queue = [
        QueueItem(
            title=task.get("title", ""),
            assigned_to=task.get("assignedTo", ""),
            badge=task_status_badge(task.get("status", "queued")),
        )
        for task in payload.get("tasks") or []
    ]

    activities = [
        ActivityItem(
            agent=activity.get("agent", ""),
            action=activity.get("action", ""),
            when=format_relative_time(activity.get("timestamp", ""), now),
            timestamp=activity.get("timestamp", ""),
        )
        for activity in sorted(payload.get("activities") or [], key=_sort_key, reverse=True)
    ]

    oversight = roster.get(OVERSIGHT_AGENT_ID)
    return DashboardView(
        factory_name=factory.get("name", ""),
        factory_status=factory.get("status", "unknown"),
        banner=banner,
        metrics=dict(payload.get("metrics") or {}),
        agents=agents,
        flow=build_task_flow(),
        oversight=FlowStage(label=oversight.name, stage="oversight", emoji=oversight.emoji) if oversight else None,
        queue=queue,
        activities=activities,
    )


def render_dashboard_text(view: DashboardView) -> str:
    """Plain-text rendering of the dashboard for terminals and logs."""
    lines = [f"{view.factory_name or 'Mission Control'} [{view.factory_status}]"]
    if view.banner:
        lines.append(f"! {view.banner}")

    metrics = view.metrics
    lines.append(
        "Tasks completed: {tasks}  Throughput: {throughput}/hr  Success rate: {success}%".format(
            tasks=metrics.get("tasksCompleted", 0),
            throughput=metrics.get("throughput", 0),
            success=metrics.get("successRate", 0),
        )
    )

    lines.append("")
    lines.append("AGENTS")
    for card in view.agents:
        lines.append(f"  {card.name:<10} {card.role:<18} {card.status:<8} {card.tasks_completed} tasks  {card.tokens} tokens")
        if card.current_task:
            lines.append(f"    current: {card.current_task}")

    lines.append("")
    lines.append("TASK FLOW")
    lines.append("  " + " -> ".join(f"{stage.emoji} {stage.label} ({stage.stage})" for stage in view.flow))
    if view.oversight:
        lines.append(f"  {view.oversight.emoji} {view.oversight.label} oversight")

    lines.append("")
    lines.append("ACTIVE QUEUE")
    if not view.queue:
        lines.append("  No active tasks")
    for item in view.queue:
        lines.append(f"  [{item.badge['text']}] {item.title} -> {item.assigned_to}")

    lines.append("")
    lines.append("LIVE ACTIVITY")
    if not view.activities:
        lines.append("  No recent activity")
    for item in view.activities:
        lines.append(f"  {item.when:>8}  {item.agent}: {item.action}")

    return "\n".join(lines)
