from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional, Sequence

from .formatting import (
    day_label,
    emphasize_quotes,
    initials,
    one_decimal,
    parse_float,
    relative_time,
    stage_label,
    status_label,
    to_fixed,
)
from .models import (
    ActivityItem,
    CampaignRow,
    DeadlineItem,
    DistributionSlice,
    FunnelStage,
    InsightCard,
    LeaderboardEntry,
    ManagerKpis,
    ManagerViewModel,
    Number,
    RecentLeadItem,
    TimeSeries,
    TimeSeriesPoint,
)
from .payloads import (
    BusinessInsights,
    CampaignStats,
    CategoryCount,
    DailyCount,
    Deadline,
    LeaderboardWorker,
    ManagerDashboardPayload,
    Notification,
    PipelineStage,
    RecentLead,
    SourceCount,
)

PIE_COLORS = (
    "#4f46e5",
    "#6366f1",
    "#818cf8",
    "#a5b4fc",
    "#c7d2fe",
    "#e0e7ff",
    "#c4b5fd",
    "#a78bfa",
    "#8b5cf6",
    "#7c3aed",
)
FUNNEL_COLORS = {
    "new": "#6366f1",
    "follow-up": "#818cf8",
    "in-progress": "#a5b4fc",
    "closed": "#c7d2fe",
}
DEFAULT_FUNNEL_COLOR = "#d1d5db"
ACTIVITY_KINDS = {
    "lead": "created",
    "create": "created",
    "conversion": "converted",
    "campaign": "sent",
    "delete": "deleted",
}
DEFAULT_ACTIVITY_KIND = "activity"

TOP_SOURCES = 10
CAMPAIGN_LIMIT = 5
ACTIVITY_LIMIT = 5
RECENT_LEADS_LIMIT = 5
UNASSIGNED = "Unassigned"
NOT_AVAILABLE = "N/A"


def _count(value: Optional[Number]) -> Number:
    return value if value is not None else 0


def _build_kpis(raw: ManagerDashboardPayload) -> ManagerKpis:
    return ManagerKpis(
        total_leads=_count(raw.total_leads),
        conversion_rate=parse_float(raw.conversation_rate) or 0.0,
        engaged_leads=_count(raw.engaged_leads),
        overdue_tasks=_count(raw.overdue_tasks),
    )


def _build_funnel(stages: Sequence[PipelineStage]) -> List[FunnelStage]:
    return [
        FunnelStage(
            label=stage_label(stage.status),
            value=_count(stage.count),
            color=FUNNEL_COLORS.get(stage.status or "", DEFAULT_FUNNEL_COLOR),
        )
        for stage in stages
    ]


def _build_categories(categories: Sequence[CategoryCount]) -> List[DistributionSlice]:
    return [
        DistributionSlice(
            name=item.category or "",
            value=_count(item.count),
            color=PIE_COLORS[index % len(PIE_COLORS)],
        )
        for index, item in enumerate(categories)
    ]


def _build_sources(sources: Sequence[SourceCount]) -> List[DistributionSlice]:
    # sorted() is stable, so equal counts keep their upstream order.
    ranked = sorted(sources, key=lambda item: _count(item.count), reverse=True)[:TOP_SOURCES]
    return [
        DistributionSlice(
            name=item.source or "",
            value=_count(item.count),
            color=PIE_COLORS[index % len(PIE_COLORS)],
        )
        for index, item in enumerate(ranked)
    ]


def _build_leaderboard(workers: Sequence[LeaderboardWorker]) -> List[LeaderboardEntry]:
    return [
        LeaderboardEntry(
            id=worker.worker_id,
            name=worker.name or "",
            assigned=_count(worker.total_assigned_leads),
            conversion_percentage=_count(worker.converted_percentage),
            avatar_initials=initials(worker.name),
        )
        for worker in workers
    ]


def _build_campaigns(campaigns: Sequence[CampaignStats]) -> List[CampaignRow]:
    rows: List[CampaignRow] = []
    for index, campaign in enumerate(campaigns[:CAMPAIGN_LIMIT]):
        rate = parse_float(campaign.conversion_rate) or 0.0
        rows.append(
            CampaignRow(
                id=campaign.id or f"c-{index}",
                title=campaign.title or "",
                leads_targeted=_count(campaign.target_leads),
                leads_converted=_count(campaign.converted_leads),
                conversion_rate=rate,
                conversion_rate_label=f"{to_fixed(rate)}%",
            )
        )
    return rows


def _activity_kind(notification_type: Optional[str]) -> str:
    return ACTIVITY_KINDS.get((notification_type or "").lower(), DEFAULT_ACTIVITY_KIND)


def _build_activity(notifications: Sequence[Notification], now: Optional[datetime]) -> List[ActivityItem]:
    return [
        ActivityItem(
            id=item.id,
            type=(item.type or "").upper(),
            kind=_activity_kind(item.type),
            segments=tuple(emphasize_quotes(item.message)),
            user=item.recipient_type or "System",
            timestamp=relative_time(item.created_at, now=now),
        )
        for item in notifications[:ACTIVITY_LIMIT]
    ]


def _build_recent_leads(leads: Sequence[RecentLead], names: Dict[str, str]) -> List[RecentLeadItem]:
    return [
        RecentLeadItem(
            id=lead.id,
            name=lead.name or "",
            company=lead.position or NOT_AVAILABLE,
            status=status_label(lead.status),
            assigned_to=names.get(lead.assigned_to or "", UNASSIGNED),
        )
        for lead in leads[:RECENT_LEADS_LIMIT]
    ]


def _build_deadlines(deadlines: Sequence[Deadline], names: Dict[str, str]) -> List[DeadlineItem]:
    return [
        DeadlineItem(
            id=item.id,
            lead_name=item.name or "",
            assigned_to=names.get(item.assigned_to or "", NOT_AVAILABLE),
            due_date=item.follow_up_dates[0] if item.follow_up_dates else None,
        )
        for item in deadlines
    ]


def _build_insights(insights: Optional[BusinessInsights]) -> List[InsightCard]:
    insights = insights or BusinessInsights()
    campaign = insights.top_converting_campaign
    worker = insights.most_engaged_worker
    category = insights.highest_performing_category
    return [
        InsightCard(
            key="lead_velocity",
            value=one_decimal(insights.lead_velocity_rate),
            unit="% MoM",
            description="Lead Velocity Rate",
        ),
        InsightCard(
            key="avg_response_time",
            value=one_decimal(insights.average_lead_response_time),
            unit=" hours",
            description="Avg. Lead Response Time",
        ),
        InsightCard(
            key="top_campaign",
            value=(campaign.title if campaign else None) or NOT_AVAILABLE,
            description="Top Converting Campaign",
        ),
        InsightCard(
            key="most_engaged_worker",
            value=(worker.name if worker else None) or NOT_AVAILABLE,
            description="Most Engaged Worker",
        ),
        InsightCard(
            key="top_lead_source",
            value=insights.top_lead_source or NOT_AVAILABLE,
            description="Top Lead Source",
        ),
        InsightCard(
            key="sales_cycle_duration",
            value=one_decimal(insights.average_sales_cycle_duration),
            unit=" days",
            description="Avg. Sales Cycle Duration",
        ),
        InsightCard(
            key="top_category",
            value=(category.category if category else None) or NOT_AVAILABLE,
            description="Highest Performing Category",
        ),
    ]


def _build_daily_series(days: Sequence[DailyCount]) -> TimeSeries:
    points = tuple(TimeSeriesPoint(label=day_label(day.date), value=_count(day.count)) for day in days)
    return TimeSeries(points=points, total=sum(point.value for point in points))


def derive_manager_view_model(
    raw: ManagerDashboardPayload,
    now: Optional[datetime] = None,
) -> ManagerViewModel:
    """
    Project a manager payload into everything the manager dashboard renders.

    Each section is derived independently and tolerates missing collections;
    worker ids in recent leads and deadlines are resolved against the team
    leaderboard of the same payload. ``now`` anchors the relative timestamps
    of the activity feed.
    """

    leaderboard = _build_leaderboard(raw.team_leaderboard or [])
    names: Dict[str, str] = {}
    for entry in leaderboard:
        if entry.id and entry.name:
            names.setdefault(entry.id, entry.name)

    return ManagerViewModel(
        kpis=_build_kpis(raw),
        funnel=tuple(_build_funnel(raw.lead_pipeline or [])),
        leads_by_category=tuple(_build_categories(raw.leads_by_category or [])),
        lead_sources=tuple(_build_sources(raw.leads_by_source or [])),
        leaderboard=tuple(leaderboard),
        campaigns=tuple(_build_campaigns(raw.campaign_performance or [])),
        recent_activity=tuple(_build_activity(raw.recent_notifications or [], now)),
        recent_leads=tuple(_build_recent_leads(raw.recent_leads or [], names)),
        upcoming_deadlines=tuple(_build_deadlines(raw.upcoming_deadlines or [], names)),
        insights=tuple(_build_insights(raw.business_insights)),
        daily_leads=_build_daily_series(raw.daily_leads_last_7_days or []),
    )
