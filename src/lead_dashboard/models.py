from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence, Union

Number = Union[int, float]


@dataclass(frozen=True)
class TextSegment:
    text: str
    emphasized: bool = False


@dataclass(frozen=True)
class CardMetric:
    key: str
    label: str
    value: Number
    unit: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class FunnelStage:
    label: str
    value: Number
    color: str


@dataclass(frozen=True)
class DistributionSlice:
    name: str
    value: Number
    color: Optional[str] = None


@dataclass(frozen=True)
class LeaderboardEntry:
    id: Optional[str]
    name: str
    assigned: Number
    conversion_percentage: Any
    avatar_initials: str


@dataclass(frozen=True)
class CampaignRow:
    id: str
    title: str
    leads_targeted: Number
    leads_converted: Number
    conversion_rate: float
    conversion_rate_label: str = "0.0%"


@dataclass(frozen=True)
class ActivityItem:
    """
    One entry of the manager's recent-activity feed.

    ``kind`` is the icon category (created/converted/sent/deleted/activity)
    and ``segments`` carries the message with quoted names flagged for
    emphasis instead of embedded markup.
    """

    id: Optional[str]
    type: str
    kind: str
    segments: Sequence[TextSegment]
    user: str
    timestamp: str

    @property
    def text(self) -> str:
        return "".join(segment.text for segment in self.segments)


@dataclass(frozen=True)
class RecentLeadItem:
    id: Optional[str]
    name: str
    company: str
    status: str
    assigned_to: str


@dataclass(frozen=True)
class DeadlineItem:
    id: Optional[str]
    lead_name: str
    assigned_to: str
    due_date: Optional[str] = None


@dataclass(frozen=True)
class InsightCard:
    key: str
    value: str
    description: str
    unit: Optional[str] = None


@dataclass(frozen=True)
class TimeSeriesPoint:
    label: str
    value: Number


@dataclass(frozen=True)
class TimeSeries:
    points: Sequence[TimeSeriesPoint] = field(default_factory=tuple)
    total: Number = 0


@dataclass(frozen=True)
class ManagerKpis:
    total_leads: Number = 0
    conversion_rate: float = 0.0
    engaged_leads: Number = 0
    overdue_tasks: Number = 0

    def cards(self) -> List[CardMetric]:
        return [
            CardMetric("total_leads", "Total Leads", self.total_leads),
            CardMetric("conversion_rate", "Conversion Rate", self.conversion_rate, unit="%"),
            CardMetric("engaged_leads", "Engaged Leads", self.engaged_leads),
            CardMetric("overdue_tasks", "Overdue Tasks", self.overdue_tasks),
        ]


@dataclass(frozen=True)
class ManagerViewModel:
    kpis: ManagerKpis
    funnel: Sequence[FunnelStage]
    leads_by_category: Sequence[DistributionSlice]
    lead_sources: Sequence[DistributionSlice]
    leaderboard: Sequence[LeaderboardEntry]
    campaigns: Sequence[CampaignRow]
    recent_activity: Sequence[ActivityItem]
    recent_leads: Sequence[RecentLeadItem]
    upcoming_deadlines: Sequence[DeadlineItem]
    insights: Sequence[InsightCard]
    daily_leads: TimeSeries

    def as_dict(self) -> Dict[str, Any]:
        payload = _serialize(self)
        payload["kpiCards"] = _serialize(self.kpis.cards())
        return payload


@dataclass(frozen=True)
class WorkerKpis:
    total_assigned_leads: Number = 0
    pending_follow_ups: Number = 0
    follow_ups_today: Number = 0
    missing_follow_ups: Number = 0

    def cards(self) -> List[CardMetric]:
        return [
            CardMetric("total_assigned_leads", "Total Assigned Leads", self.total_assigned_leads),
            CardMetric("pending_follow_ups", "Pending Follow-Ups", self.pending_follow_ups),
            CardMetric("follow_ups_today", "Follow-Ups Today", self.follow_ups_today),
            CardMetric("missing_follow_ups", "Leads with Missing Follow-Up", self.missing_follow_ups),
        ]


@dataclass(frozen=True)
class CategoryPerformanceRow:
    category_id: Optional[str]
    name: str
    total_leads: Number
    profitable: Number
    non_profitable: Number
    profitable_percentage: float


@dataclass(frozen=True)
class FollowUpItem:
    id: Optional[str]
    name: str
    company: str
    time: str = "Today"
    status: str = "Pending"


@dataclass(frozen=True)
class ScheduleEntry:
    date: date
    events: Sequence[str]


@dataclass(frozen=True)
class OverdueItem:
    id: Optional[str]
    name: str
    company: str
    due_date: str


@dataclass(frozen=True)
class AssignmentItem:
    id: Optional[str]
    name: str
    company: str
    assigned_date: Optional[str]
    status: str


@dataclass(frozen=True)
class WorkerViewModel:
    kpis: WorkerKpis
    category_performance: Sequence[CategoryPerformanceRow]
    today_follow_ups: Sequence[FollowUpItem]
    upcoming_schedule: Sequence[ScheduleEntry]
    overdue_follow_ups: Sequence[OverdueItem]
    recent_assignments: Sequence[AssignmentItem]

    def as_dict(self) -> Dict[str, Any]:
        payload = _serialize(self)
        payload["kpiCards"] = _serialize(self.kpis.cards())
        return payload


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _serialize(obj: Any) -> Any:
    """
    Convert nested view-model dataclasses into JSON-serialisable structures.

    Field names become camelCase so chart widgets can consume the result
    without knowing about the Python side.
    """

    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        result = {
            _camel(item.name): _serialize(getattr(obj, item.name))
            for item in dataclasses.fields(obj)
        }
        if isinstance(obj, ActivityItem):
            result["text"] = obj.text
        return result
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, dict):
        return {key: _serialize(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_serialize(item) for item in obj]
    return obj
